"""Shared fixtures: a recording stand-in for subprocess.run."""
import os
import subprocess
import sys

import pytest

_repo_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
if _repo_root not in sys.path:
    sys.path.insert(0, _repo_root)


def _matches(command, prefix):
    return tuple(command[:len(prefix)]) == tuple(prefix)


class FakeRunner:
    """Records every command; fails or answers commands by argument prefix."""

    def __init__(self):
        self.commands = []
        self.inputs = []
        self._failures = []
        self._outputs = [(("git", "rev-parse"), "abc1234\n")]
        self._hooks = []

    def fail(self, *prefix, returncode=1):
        self._failures.append((prefix, returncode))

    def answer(self, *prefix, output):
        self._outputs.append((prefix, output))

    def on(self, *prefix, callback):
        self._hooks.append((prefix, callback))

    def ran(self, *prefix):
        return [c for c in self.commands if _matches(c, prefix)]

    def __call__(self, command, **kwargs):
        command = list(command)
        self.commands.append(command)
        self.inputs.append(kwargs.get("input"))
        returncode = 0
        for prefix, code in self._failures:
            if _matches(command, prefix):
                returncode = code
        if returncode == 0:
            for prefix, callback in self._hooks:
                if _matches(command, prefix):
                    callback(command)
        stdout = ""
        for prefix, out in self._outputs:
            if _matches(command, prefix):
                stdout = out
        capture = kwargs.get("capture_output", False)
        return subprocess.CompletedProcess(
            command,
            returncode,
            stdout=stdout if capture else None,
            stderr=("command failed" if returncode else "") if capture else None,
        )


@pytest.fixture
def fake_run(monkeypatch):
    runner = FakeRunner()
    monkeypatch.setattr("ecsdeploy.utils.subprocess.run", runner)
    return runner
