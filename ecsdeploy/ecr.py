#!/usr/bin/env python3
"""
ECR repository management and image publishing.
"""
import base64

from . import utils
from . import docker


def ensure_repository(ecr_client, repository_name, allow_create=True):
    """
    Check if the ECR repository exists, create it if needed.
    Returns the repository URI.
    """
    utils.log(f"Checking if the ECR repository '{repository_name}' exists...")
    try:
        response = ecr_client.describe_repositories(repositoryNames=[repository_name])
        utils.log(f"ECR repository '{repository_name}' already exists.")
        return response['repositories'][0]['repositoryUri']
    except ecr_client.exceptions.RepositoryNotFoundException:
        if not allow_create:
            raise utils.DeployError(
                f"ECR repository '{repository_name}' does not exist and resource creation is disabled."
            )

    utils.log("ECR repository does not exist. Creating repository...")
    response = ecr_client.create_repository(repositoryName=repository_name)
    utils.log(f"ECR repository '{repository_name}' created.")
    return response['repository']['repositoryUri']


def registry_host(repository_uri):
    """Return the registry host part of a repository URI."""
    return repository_uri.split("/")[0]


def docker_login(ecr_client, repository_uri):
    """
    Log Docker in to the registry holding repository_uri, passing the token on stdin.
    """
    auth = ecr_client.get_authorization_token()['authorizationData'][0]
    username, password = base64.b64decode(auth['authorizationToken']).decode().split(":", 1)
    utils.log("Logging in to ECR...")
    utils.run_command(
        ["docker", "login", "--username", username, "--password-stdin", registry_host(repository_uri)],
        "Failed to login to ECR",
        capture=True,
        input_text=password,
    )


def build_and_push_image(ecr_client, repository_uri, image_name, image_tag,
                         dockerfile='Dockerfile', build_context='.'):
    """
    Build the Docker image, tag it for ECR and push it.
    Returns the pushed image URI.
    """
    local_image = f"{image_name}:{image_tag}"
    image_uri = f"{repository_uri}:{image_tag}"

    docker.ensure_docker_running()
    docker_login(ecr_client, repository_uri)

    utils.log(f"Building Docker image {local_image} using {dockerfile}...")
    utils.run_command(
        ["docker", "build", "-t", local_image, "-f", dockerfile, build_context],
        "Failed to build Docker image",
    )

    utils.log("Tagging Docker image for ECR...")
    utils.run_command(
        ["docker", "tag", local_image, image_uri],
        "Failed to tag Docker image",
    )

    utils.log("Pushing Docker image to ECR...")
    utils.run_command(
        ["docker", "push", image_uri],
        "Failed to push Docker image to ECR",
    )

    utils.log(f"Pushed image: {image_uri}")
    return image_uri
