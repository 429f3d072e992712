#!/usr/bin/env python3
"""
Configuration loading and validation.
"""
import os
import sys

import yaml

from . import utils
from .task_definition import rendered_path

DEFAULT_CDK_APP = "npx ts-node src/main.ts"


def _resolve(path, base_dir):
    """Resolve path relative to base_dir unless it is absolute."""
    if os.path.isabs(path):
        return path
    return os.path.join(base_dir, path)


def _fail(message):
    """Log a configuration error the same way as a failed deploy step, then exit."""
    utils.log(f"Error: {message}")
    utils.log("An error occurred. Exiting with status 1")
    sys.exit(1)


def load_config(config_file):
    """
    Load configuration from YAML file.
    """
    try:
        with open(config_file, 'r') as f:
            config = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        _fail(f"Could not load configuration: {str(e)}")

    if not isinstance(config, dict):
        _fail("Configuration file is empty or not a mapping")

    aws_config = config.get('aws') or {}
    cdk_config = config.get('cdk') or {}
    task_def_config = config.get('task_definition') or {}

    # Validate required fields
    if not config.get('app_name'):
        _fail("'app_name' must be specified in the configuration")
    if 'region' not in aws_config:
        _fail("'region' must be specified in the AWS configuration")

    app_name = config['app_name']
    config_dir = os.path.dirname(os.path.abspath(config_file))

    template = _resolve(task_def_config.get('template', 'ecs-container-definitions.json'), config_dir)
    output = task_def_config.get('output')

    return {
        'app_name': app_name,
        'profile': aws_config.get('profile', 'default'),
        'region': aws_config['region'],
        'allow_create': config.get('allow_create', True),
        'stack_tag_file': _resolve(config.get('stack_tag_file', 'stack-tag.txt'), config_dir),
        'dockerfile': _resolve(config.get('dockerfile', 'Dockerfile'), config_dir),
        'build_context': _resolve(config.get('build_context', '.'), config_dir),
        'image_name': config.get('image_name', f"{app_name}-server"),
        'repository_name': config.get('repository_name', f"{app_name}-ecr-repository"),
        'stack_prefix': config.get('stack_prefix', f"{app_name}-stack-"),
        'cdk_app': cdk_config.get('app', DEFAULT_CDK_APP),
        'cdk_working_dir': _resolve(cdk_config.get('working_dir', '.'), config_dir),
        'task_definition_template': template,
        'task_definition_output': _resolve(output, config_dir) if output else rendered_path(template),
    }
