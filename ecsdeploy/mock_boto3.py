#!/usr/bin/env python3
"""
In-memory mock boto3 clients with the same interface as real AWS clients.
All state is stored in memory for testing without hitting AWS.
"""
import base64

from botocore.exceptions import ClientError

ACCOUNT_ID = "123456789012"


def _client_error(code, message="", operation="Operation"):
    return ClientError({"Error": {"Code": code, "Message": message}}, operation)


class RepositoryNotFoundException(ClientError):
    """ECR RepositoryNotFoundException - same as botocore client."""
    pass


class MockECRClient:
    """In-memory ECR client. State: repositories dict by name."""

    def __init__(self, state=None, region="us-east-1"):
        self._region = region
        self._state = state if state is not None else {}
        self._repos = self._state.setdefault("repositories", {})
        self._state.setdefault("create_calls", 0)

    @property
    def exceptions(self):
        return type("Exceptions", (), {"RepositoryNotFoundException": RepositoryNotFoundException})()

    @property
    def state(self):
        return self._state

    def _uri(self, name):
        return f"{ACCOUNT_ID}.dkr.ecr.{self._region}.amazonaws.com/{name}"

    def describe_repositories(self, repositoryNames=None):
        found = []
        for name in repositoryNames or []:
            if name not in self._repos:
                raise RepositoryNotFoundException(
                    {"Error": {"Code": "RepositoryNotFoundException", "Message": f"Repository {name} not found"}},
                    "DescribeRepositories",
                )
            found.append(self._repos[name])
        return {"repositories": found}

    def create_repository(self, repositoryName=None):
        if repositoryName in self._repos:
            raise _client_error("RepositoryAlreadyExistsException", "Repository exists", "CreateRepository")
        self._state["create_calls"] += 1
        repo = {
            "repositoryName": repositoryName,
            "repositoryUri": self._uri(repositoryName),
            "repositoryArn": f"arn:aws:ecr:{self._region}:{ACCOUNT_ID}:repository/{repositoryName}",
        }
        self._repos[repositoryName] = repo
        return {"repository": repo}

    def get_authorization_token(self):
        token = base64.b64encode(b"AWS:mock-password").decode()
        return {"authorizationData": [{
            "authorizationToken": token,
            "proxyEndpoint": f"https://{ACCOUNT_ID}.dkr.ecr.{self._region}.amazonaws.com",
        }]}


class MockCloudFormationClient:
    """In-memory CloudFormation client. State: stacks dict by name."""

    def __init__(self, state=None):
        self._stacks = state if state is not None else {}

    @property
    def state(self):
        return self._stacks

    def add_stack(self, name, status="CREATE_COMPLETE", outputs=None):
        self._stacks[name] = {"StackName": name, "StackStatus": status, "Outputs": outputs or {}}

    def get_paginator(self, operation_name):
        if operation_name != "list_stacks":
            raise ValueError(f"Unknown paginator: {operation_name}")

        class Paginator:
            def __init__(pag_self, stacks):
                pag_self._stacks = list(stacks.values())

            def paginate(pag_self, StackStatusFilter=None, **kwargs):
                summaries = [
                    {"StackName": s["StackName"], "StackStatus": s["StackStatus"]}
                    for s in pag_self._stacks
                    if not StackStatusFilter or s["StackStatus"] in StackStatusFilter
                ]
                yield {"StackSummaries": summaries}

        return Paginator(self._stacks)

    def describe_stacks(self, StackName=None):
        if StackName not in self._stacks:
            raise _client_error("ValidationError", f"Stack with id {StackName} does not exist", "DescribeStacks")
        s = self._stacks[StackName]
        outputs = [{"OutputKey": k, "OutputValue": v} for k, v in s["Outputs"].items()]
        return {"Stacks": [{"StackName": StackName, "StackStatus": s["StackStatus"], "Outputs": outputs}]}


class MockECSClient:
    """In-memory ECS client. State: clusters, services and task definitions."""

    def __init__(self, state=None, region="us-east-1"):
        self._region = region
        self._state = state if state is not None else {}
        self._state.setdefault("clusters", {})
        self._state.setdefault("services", {})
        self._state.setdefault("task_definitions", {})

    @property
    def state(self):
        return self._state

    def add_cluster(self, name, status="ACTIVE"):
        self._state["clusters"][name] = {
            "clusterName": name,
            "clusterArn": f"arn:aws:ecs:{self._region}:{ACCOUNT_ID}:cluster/{name}",
            "status": status,
        }

    def add_service(self, cluster, name, task_definition=None, status="ACTIVE"):
        self._state["services"][(cluster, name)] = {
            "serviceName": name,
            "serviceArn": f"arn:aws:ecs:{self._region}:{ACCOUNT_ID}:service/{cluster}/{name}",
            "status": status,
            "taskDefinition": task_definition,
        }

    def describe_clusters(self, clusters=None):
        found = [self._state["clusters"][c] for c in clusters or [] if c in self._state["clusters"]]
        failures = [{"arn": c, "reason": "MISSING"} for c in clusters or [] if c not in self._state["clusters"]]
        return {"clusters": found, "failures": failures}

    def describe_services(self, cluster=None, services=None):
        found = [self._state["services"][(cluster, s)] for s in services or [] if (cluster, s) in self._state["services"]]
        failures = [{"arn": s, "reason": "MISSING"} for s in services or [] if (cluster, s) not in self._state["services"]]
        return {"services": found, "failures": failures}

    def register_task_definition(self, family=None, containerDefinitions=None, **kwargs):
        revisions = self._state["task_definitions"].setdefault(family, [])
        revision = len(revisions) + 1
        arn = f"arn:aws:ecs:{self._region}:{ACCOUNT_ID}:task-definition/{family}:{revision}"
        revisions.append({"taskDefinitionArn": arn, "containerDefinitions": containerDefinitions, **kwargs})
        return {"taskDefinition": {"taskDefinitionArn": arn, "family": family, "revision": revision}}

    def update_service(self, cluster=None, service=None, taskDefinition=None, **kwargs):
        key = (cluster, service)
        if key not in self._state["services"]:
            raise _client_error("ServiceNotFoundException", "Service not found.", "UpdateService")
        self._state["services"][key]["taskDefinition"] = taskDefinition
        return {"service": dict(self._state["services"][key])}


class MockSession:
    """Mock boto3.Session that returns in-memory clients. State is shared per service type."""

    def __init__(self, profile_name=None, region_name="us-east-1"):
        self.profile_name = profile_name
        self.region_name = region_name
        self._ecr_state = {}
        self._cfn_state = {}
        self._ecs_state = {}

    def client(self, service_name, region_name=None):
        region = region_name or self.region_name
        if service_name == "ecr":
            return MockECRClient(self._ecr_state, region=region)
        if service_name == "cloudformation":
            return MockCloudFormationClient(self._cfn_state)
        if service_name == "ecs":
            return MockECSClient(self._ecs_state, region=region)
        raise ValueError(f"Unknown service: {service_name}")

    def seed_repository(self, name):
        self.client("ecr").create_repository(repositoryName=name)
        self._ecr_state["create_calls"] = 0

    def seed_stack(self, name, status="CREATE_COMPLETE", outputs=None):
        self.client("cloudformation").add_stack(name, status=status, outputs=outputs)

    def seed_service(self, cluster, service):
        ecs_client = self.client("ecs")
        ecs_client.add_cluster(cluster)
        ecs_client.add_service(cluster, service)
