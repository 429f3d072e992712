#!/usr/bin/env python3
"""
ECS cluster/service lookup, task definition registration and service updates.
"""
from . import stack
from . import utils


def resolve_service_target(cfn_client, stack_name, app_name, stack_tag):
    """
    Return (cluster_name, service_name) for the deployed stack.
    Uses the stack's ClusterName/ServiceName outputs when present, otherwise
    the names the stack creates for its tag.
    """
    outputs = stack.get_stack_outputs(cfn_client, stack_name)
    cluster_name = outputs.get('ClusterName') or f"{app_name}-ecs-cluster-{stack_tag}"
    service_name = outputs.get('ServiceName') or f"{app_name}-fargate-service-{stack_tag}"
    return cluster_name, service_name


def ensure_cluster_exists(ecs_client, cluster_name):
    """
    Verify the ECS cluster exists and is active.
    """
    clusters = ecs_client.describe_clusters(clusters=[cluster_name]).get('clusters', [])
    if not clusters or clusters[0].get('status') != 'ACTIVE':
        raise utils.DeployError(f"ECS cluster '{cluster_name}' not found")
    utils.log(f"Found ECS cluster {cluster_name}")


def ensure_service_exists(ecs_client, cluster_name, service_name):
    """
    Verify the ECS service exists in the cluster and is active.
    """
    services = ecs_client.describe_services(cluster=cluster_name, services=[service_name]).get('services', [])
    if not services or services[0].get('status') != 'ACTIVE':
        raise utils.DeployError(f"ECS service '{service_name}' not found in cluster '{cluster_name}'")
    utils.log(f"Found ECS service {service_name}")


def register_task_definition(ecs_client, task_family, container_definitions):
    """
    Register ECS task definition.
    Returns the task definition ARN.
    """
    utils.log(f"Registering task definition {task_family}...")
    response = ecs_client.register_task_definition(
        family=task_family,
        containerDefinitions=container_definitions,
    )
    task_definition_arn = response['taskDefinition']['taskDefinitionArn']
    utils.log(f"Task definition registered: {task_definition_arn}")
    return task_definition_arn


def update_service(ecs_client, cluster_name, service_name, task_definition_arn):
    """
    Point the ECS service at a new task definition.
    """
    utils.log(f"Updating service {service_name} in cluster {cluster_name}...")
    response = ecs_client.update_service(
        cluster=cluster_name,
        service=service_name,
        taskDefinition=task_definition_arn,
    )
    utils.log(f"Updated service: {service_name}")
    return response
