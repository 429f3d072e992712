#!/usr/bin/env python3
"""
Utility functions for deployment scripts.
"""
import subprocess
from datetime import datetime


class DeployError(Exception):
    """A deployment step failed. exit_code is the status the run exits with."""

    def __init__(self, message, exit_code=1):
        super().__init__(message)
        self.exit_code = exit_code


class CommandError(DeployError):
    """An external command exited non-zero."""

    def __init__(self, command, returncode, error_message=None, stderr=None):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        message = error_message or f"Command failed: {' '.join(command)}"
        # Killed by a signal: report it the way a shell does (128 + signal number)
        exit_code = 128 - returncode if returncode < 0 else returncode
        super().__init__(message, exit_code=exit_code)


def log(message):
    """Print a message prefixed with a local ISO-8601 timestamp."""
    timestamp = datetime.now().astimezone().strftime("%Y-%m-%dT%H:%M:%S%z")
    print(f"[{timestamp}]: {message}", flush=True)


def run_command(command, error_message, capture=False, input_text=None, cwd=None, env=None):
    """
    Run a command (argument list, no shell) and raise CommandError if it fails.

    Args:
        command: List of program arguments
        error_message: Message attached to the CommandError on failure
        capture: If True, capture stdout/stderr instead of streaming to the terminal
        input_text: Optional text written to the command's stdin
        cwd: Working directory for the command
        env: Environment for the command (defaults to the current one)

    Returns:
        subprocess.CompletedProcess; stdout is stripped when capture is True
    """
    try:
        result = subprocess.run(
            command,
            shell=False,
            capture_output=capture,
            input=input_text,
            text=True,
            cwd=cwd,
            env=env,
        )
    except FileNotFoundError:
        raise CommandError(command, 127, f"{error_message}: '{command[0]}' not found")

    if result.returncode != 0:
        if capture and result.stderr:
            print(f"Details: {result.stderr.strip()}")
        raise CommandError(command, result.returncode, error_message, stderr=result.stderr)

    if capture and result.stdout is not None:
        result.stdout = result.stdout.strip()
    return result


def current_revision(cwd=None):
    """Return the short git revision of HEAD."""
    result = run_command(
        ["git", "rev-parse", "--short", "HEAD"],
        "Failed to read the current git revision",
        capture=True,
        cwd=cwd,
    )
    return result.stdout
