#!/usr/bin/env python3
"""
ECS deployment package: ECR image publishing, CDK stack deploys and service updates.
"""
from .deploy import deploy_to_ecs
from .config import load_config

__all__ = ['deploy_to_ecs', 'load_config']
