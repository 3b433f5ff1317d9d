from __future__ import annotations

import os

import pytest

from dist_docker.runtime_version import RuntimeVersion
from dist_docker.settings import BuildConfig


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep DIST_DOCKER_* variables from the developer shell out of tests."""
    for key in list(os.environ):
        if key.upper().startswith("DIST_DOCKER_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def make_config(tmp_path):
    def _make(**overrides) -> BuildConfig:
        values = {"image_name": "invoker", "source_dir": tmp_path, "root_dir": tmp_path}
        values.update(overrides)
        return BuildConfig(**values)

    return _make


class RecordingExecutor:
    def __init__(self, fail_on: str | None = None):
        self.commands: list[list[str]] = []
        self.fail_on = fail_on

    def __call__(self, command, retries, timeout):
        self.commands.append(list(command))
        if self.fail_on is not None and self.fail_on in command:
            from dist_docker.errors import ExecutionFailed

            raise ExecutionFailed(command, 1, False, timeout)

    def subcommands(self) -> list[str]:
        verbs = {"build", "tag", "push"}
        return [next(arg for arg in cmd if arg in verbs) for cmd in self.commands]


@pytest.fixture
def recording_executor():
    return RecordingExecutor()


@pytest.fixture
def modern_docker():
    return lambda config: RuntimeVersion(runner="Docker", major=24, minor=0, patch=7)
