"""Unit tests for ECS service lookup and updates."""
import pytest

from ecsdeploy import ecs
from ecsdeploy.mock_boto3 import MockCloudFormationClient, MockECSClient
from ecsdeploy.utils import DeployError


class TestResolveServiceTarget:

    def test_uses_stack_outputs(self):
        client = MockCloudFormationClient()
        client.add_stack("myapp-stack-abcd1234", outputs={"ClusterName": "c-out", "ServiceName": "s-out"})
        assert ecs.resolve_service_target(client, "myapp-stack-abcd1234", "myapp", "abcd1234") == ("c-out", "s-out")

    def test_falls_back_to_stack_naming(self):
        client = MockCloudFormationClient()
        client.add_stack("myapp-stack-abcd1234")
        assert ecs.resolve_service_target(client, "myapp-stack-abcd1234", "myapp", "abcd1234") == (
            "myapp-ecs-cluster-abcd1234",
            "myapp-fargate-service-abcd1234",
        )


class TestEnsureExists:

    def test_existing_cluster_and_service(self):
        client = MockECSClient()
        client.add_cluster("c1")
        client.add_service("c1", "s1")
        ecs.ensure_cluster_exists(client, "c1")
        ecs.ensure_service_exists(client, "c1", "s1")

    def test_missing_cluster(self):
        with pytest.raises(DeployError):
            ecs.ensure_cluster_exists(MockECSClient(), "c1")

    def test_inactive_service(self):
        client = MockECSClient()
        client.add_cluster("c1")
        client.add_service("c1", "s1", status="INACTIVE")
        with pytest.raises(DeployError):
            ecs.ensure_service_exists(client, "c1", "s1")


class TestRegisterAndUpdate:

    def test_register_then_update(self):
        client = MockECSClient()
        client.add_cluster("c1")
        client.add_service("c1", "s1")
        definitions = [{"name": "server", "image": "repo:abc1234"}]

        arn = ecs.register_task_definition(client, "myapp-task-definition-abcd1234", definitions)
        ecs.update_service(client, "c1", "s1", arn)

        assert arn.endswith("task-definition/myapp-task-definition-abcd1234:1")
        assert client.state["task_definitions"]["myapp-task-definition-abcd1234"][0]["containerDefinitions"] == definitions
        assert client.state["services"][("c1", "s1")]["taskDefinition"] == arn

    def test_revisions_increment(self):
        client = MockECSClient()
        first = ecs.register_task_definition(client, "fam", [])
        second = ecs.register_task_definition(client, "fam", [])
        assert first.endswith(":1")
        assert second.endswith(":2")
