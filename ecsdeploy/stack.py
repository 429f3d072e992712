#!/usr/bin/env python3
"""
CloudFormation stack lookup and CDK deploys.
"""
from . import utils

ACTIVE_STACK_STATUSES = ['CREATE_COMPLETE', 'UPDATE_COMPLETE']


def find_existing_stack(cfn_client, prefix):
    """
    Return the name of the first active stack whose name starts with prefix, or None.
    """
    paginator = cfn_client.get_paginator('list_stacks')
    for page in paginator.paginate(StackStatusFilter=ACTIVE_STACK_STATUSES):
        for summary in page.get('StackSummaries', []):
            if summary['StackName'].startswith(prefix):
                return summary['StackName']
    return None


def stack_tag_from_name(stack_name, prefix):
    """Return the tag suffix of a stack named <prefix><tag>."""
    if not stack_name.startswith(prefix):
        raise utils.DeployError(f"Stack '{stack_name}' does not start with '{prefix}'")
    return stack_name[len(prefix):]


def get_stack_outputs(cfn_client, stack_name):
    """Return the stack outputs as an OutputKey -> OutputValue dict."""
    stacks = cfn_client.describe_stacks(StackName=stack_name)['Stacks']
    if not stacks:
        return {}
    return {o['OutputKey']: o['OutputValue'] for o in stacks[0].get('Outputs', [])}


def deploy_or_update_stack(cfn_client, prefix, stack_tag, cdk_app, cwd=None):
    """
    Deploy a new stack named <prefix><stack_tag>, or update the existing one.
    Returns the deployed stack name.
    """
    stack_name = find_existing_stack(cfn_client, prefix)

    if stack_name is None:
        stack_name = f"{prefix}{stack_tag}"
        utils.log(f"No stack found with prefix '{prefix}'. Creating {stack_name}...")
        command = [
            "npx", "cdk", "deploy",
            "--require-approval", "never",
            "--app", cdk_app,
            "--context", f"stackTag={stack_tag}",
            stack_name,
        ]
    else:
        utils.log(f"Updating existing stack {stack_name}...")
        command = [
            "npx", "cdk", "deploy", stack_name,
            "--require-approval", "never",
            "--app", cdk_app,
        ]

    utils.run_command(command, f"Failed to deploy stack {stack_name}", cwd=cwd)
    return stack_name
