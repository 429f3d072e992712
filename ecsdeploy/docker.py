#!/usr/bin/env python3
"""
Docker daemon checks.
"""
from . import utils


def ensure_docker_running():
    """
    Check that the Docker daemon is responding before a build.
    """
    utils.run_command(
        ["docker", "info"],
        "Docker daemon is not running; start Docker and try again",
        capture=True,
    )
    utils.log("Docker daemon is running")
