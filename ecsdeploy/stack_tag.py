#!/usr/bin/env python3
"""
Deployment tag persisted in a local file so repeated runs target the same stack.
"""
import os
import uuid

from .utils import DeployError, log


def generate_stack_tag():
    """Return a short random tag (first group of a UUID4)."""
    return str(uuid.uuid4()).split("-")[0]


def load_or_create_stack_tag(path):
    """
    Load the stack tag from path, or generate one and save it there.
    """
    if os.path.exists(path):
        log("Loading existing STACK_TAG from file...")
        try:
            with open(path, "r") as f:
                stack_tag = f.read().strip()
        except OSError as e:
            raise DeployError(f"Failed to read stack tag file '{path}': {e}")
        if not stack_tag:
            raise DeployError(f"Stack tag file '{path}' is empty; delete it to generate a new tag")
        log(f"Loaded existing STACK_TAG: {stack_tag}")
        return stack_tag

    log("Generating new STACK_TAG and saving to file...")
    stack_tag = generate_stack_tag()
    try:
        with open(path, "w") as f:
            f.write(stack_tag + "\n")
    except OSError as e:
        raise DeployError(f"Failed to write stack tag file '{path}': {e}")
    log(f"Generated new STACK_TAG: {stack_tag}")
    return stack_tag
