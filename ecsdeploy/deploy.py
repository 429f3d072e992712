#!/usr/bin/env python3
"""
Main deployment orchestrator for ECS.
Runs each step in order and stops at the first failure.
"""
import boto3

from . import ecr, ecs, stack, stack_tag, task_definition, utils


def deploy_to_ecs(config_dict=None, **kwargs):
    """
    Deploy the application to ECS.

    If config_dict is provided, it will be used. Otherwise, kwargs will be used.
    Returns a summary dict of the identifiers used by the deployment.
    """
    # Merge config_dict and kwargs
    if config_dict:
        params = {**config_dict, **kwargs}
    else:
        params = kwargs

    app_name = params.get('app_name')
    region = params.get('region')
    profile = params.get('profile', 'default')
    allow_create = params.get('allow_create', True)
    build_context = params.get('build_context', '.')
    dockerfile = params.get('dockerfile', 'Dockerfile')
    repository_name = params.get('repository_name') or f"{app_name}-ecr-repository"
    image_name = params.get('image_name') or f"{app_name}-server"
    stack_prefix = params.get('stack_prefix') or f"{app_name}-stack-"
    template_path = params.get('task_definition_template', 'ecs-container-definitions.json')

    if app_name is None:
        raise utils.DeployError("'app_name' parameter is required")
    if region is None:
        raise utils.DeployError("'region' parameter is required")

    utils.log("Deploying the infrastructure...")

    # "default" defers to the standard credential chain (env vars, instance role)
    session = boto3.Session(
        profile_name=profile if profile and profile != 'default' else None,
        region_name=region,
    )
    ecr_client = session.client('ecr')
    cfn_client = session.client('cloudformation')
    ecs_client = session.client('ecs')

    # Step 1: Deployment tag
    tag = stack_tag.load_or_create_stack_tag(params.get('stack_tag_file', 'stack-tag.txt'))

    # Step 2: ECR repository
    utils.log("Checking if the ECR repository exists...")
    repository_uri = ecr.ensure_repository(ecr_client, repository_name, allow_create)

    # Step 3: Build and push image tagged with the source revision
    image_tag = utils.current_revision(cwd=build_context)
    utils.log("Building and pushing the Docker image to ECR...")
    image_uri = ecr.build_and_push_image(
        ecr_client, repository_uri, image_name, image_tag,
        dockerfile=dockerfile, build_context=build_context,
    )

    # Step 4: Stack
    utils.log("Deploying or updating the CloudFormation stack...")
    stack_name = stack.deploy_or_update_stack(
        cfn_client, stack_prefix, tag,
        params.get('cdk_app', 'npx ts-node src/main.ts'),
        cwd=params.get('cdk_working_dir'),
    )
    deployed_tag = stack.stack_tag_from_name(stack_name, stack_prefix)
    if deployed_tag != tag:
        utils.log(f"Warning: existing stack {stack_name} has tag {deployed_tag}, local STACK_TAG is {tag}")

    # Step 5: Service
    utils.log("Updating the ECS service with the new Docker image...")
    cluster_name, service_name = ecs.resolve_service_target(cfn_client, stack_name, app_name, deployed_tag)
    ecs.ensure_cluster_exists(ecs_client, cluster_name)
    ecs.ensure_service_exists(ecs_client, cluster_name, service_name)

    rendered_path = task_definition.render_template_file(
        template_path,
        {
            'ECR_REPOSITORY_URI': repository_uri,
            'IMAGE_TAG': image_tag,
            'AWS_REGION': session.region_name or region,
        },
        output_path=params.get('task_definition_output'),
    )
    container_definitions = task_definition.load_container_definitions(rendered_path)
    task_definition_arn = ecs.register_task_definition(
        ecs_client, f"{app_name}-task-definition-{deployed_tag}", container_definitions
    )
    ecs.update_service(ecs_client, cluster_name, service_name, task_definition_arn)

    utils.log("Infrastructure deployed successfully")

    return {
        'stack_tag': deployed_tag,
        'repository_uri': repository_uri,
        'image_uri': image_uri,
        'stack_name': stack_name,
        'cluster_name': cluster_name,
        'service_name': service_name,
        'task_definition_arn': task_definition_arn,
    }
