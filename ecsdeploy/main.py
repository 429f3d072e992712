#!/usr/bin/env python3
"""
CLI entry point for ECS deployment.
"""
import argparse
import sys

from botocore.exceptions import BotoCoreError, ClientError

from . import config, deploy, utils


def main(argv=None):
    parser = argparse.ArgumentParser(description='Build, push and deploy an app to AWS ECS')
    parser.add_argument('--config', '-c', default='deploy.yaml', help='Path to YAML configuration file')
    parser.add_argument('--profile', type=str, help='AWS profile (overrides the configuration file)')
    args = parser.parse_args(argv)

    config_dict = config.load_config(args.config)
    if args.profile:
        config_dict['profile'] = args.profile

    try:
        deploy.deploy_to_ecs(config_dict=config_dict)
    except utils.DeployError as e:
        utils.log(f"Error: {e}")
        utils.log(f"An error occurred. Exiting with status {e.exit_code}")
        sys.exit(e.exit_code)
    except (ClientError, BotoCoreError, OSError) as e:
        utils.log(f"Error: {e}")
        utils.log("An error occurred. Exiting with status 1")
        sys.exit(1)


if __name__ == "__main__":
    main()
