"""Unit tests for the dist-docker CLI."""

from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from dist_docker.cli.app import app
from dist_docker.errors import ExecutionFailed


@pytest.fixture
def runner():
    """Create CLI test runner."""
    return CliRunner()


class TestActions:
    @pytest.mark.parametrize("action", ["build", "build-coverage", "tag", "push"])
    def test_each_action_is_dispatched(self, runner, tmp_path, action):
        with patch("dist_docker.cli.app.Pipeline") as mock_pipeline:
            result = runner.invoke(
                app, ["--image-name", "invoker", "--source-dir", str(tmp_path), action]
            )

        assert result.exit_code == 0, result.output
        mock_pipeline.return_value.run.assert_called_once_with(action)

    def test_options_resolve_config(self, runner, tmp_path):
        with patch("dist_docker.cli.app.Pipeline") as mock_pipeline:
            result = runner.invoke(
                app,
                [
                    "--image-name",
                    "invoker",
                    "--registry",
                    "myregistry",
                    "--tag",
                    "1.0",
                    "--retries",
                    "5",
                    "--timeout",
                    "60",
                    "--host",
                    "tcp://builder:2376",
                    "--multi-arch",
                    "--build-arg",
                    "B=2",
                    "--build-arg",
                    "A=1",
                    "--source-dir",
                    str(tmp_path),
                    "build",
                ],
            )

        assert result.exit_code == 0, result.output
        config = mock_pipeline.call_args[0][0]
        assert config.tagged_image_name == "myregistry/whisk/invoker:1.0"
        assert config.retries == 5
        assert config.timeout == 60
        assert config.host == "tcp://builder:2376"
        assert config.multi_arch is True
        assert config.build_args == ["B=2", "A=1"]
        assert config.source_dir == tmp_path.resolve()

    def test_environment_fills_unset_options(self, runner, monkeypatch):
        monkeypatch.setenv("DIST_DOCKER_IMAGE_NAME", "controller")
        monkeypatch.setenv("DIST_DOCKER_PREFIX", "openwhisk")

        with patch("dist_docker.cli.app.Pipeline") as mock_pipeline:
            result = runner.invoke(app, ["tag"])

        assert result.exit_code == 0, result.output
        config = mock_pipeline.call_args[0][0]
        assert config.tagged_image_name == "openwhisk/controller:latest"


class TestErrors:
    def test_missing_image_name_fails_before_running(self, runner):
        with patch("dist_docker.cli.app.Pipeline") as mock_pipeline:
            result = runner.invoke(app, ["build"])

        assert result.exit_code == 1
        mock_pipeline.assert_not_called()

    def test_execution_failure_exits_non_zero(self, runner):
        with patch("dist_docker.cli.app.Pipeline") as mock_pipeline:
            mock_pipeline.return_value.run.side_effect = ExecutionFailed(
                ["docker", "push", "x"], 1, False, 840
            )
            result = runner.invoke(app, ["--image-name", "invoker", "push"])

        assert result.exit_code == 1

    def test_invalid_build_arg_is_rejected(self, runner):
        with patch("dist_docker.cli.app.Pipeline") as mock_pipeline:
            result = runner.invoke(
                app, ["--image-name", "invoker", "--build-arg", "=oops", "build"]
            )

        assert result.exit_code != 0
        mock_pipeline.assert_not_called()

    def test_staging_os_error_exits_non_zero(self, runner):
        with patch("dist_docker.cli.app.Pipeline") as mock_pipeline:
            mock_pipeline.return_value.run.side_effect = PermissionError(
                "Permission denied: 'build/tmp/docker-coverage'"
            )
            result = runner.invoke(app, ["--image-name", "invoker", "build-coverage"])

        assert result.exit_code == 1
        assert not isinstance(result.exception, PermissionError)
