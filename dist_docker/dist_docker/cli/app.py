"""Main CLI application."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

import typer
from typing_extensions import Annotated

from ..errors import DistDockerError
from ..pipeline import Pipeline
from ..settings import load_config
from .parsers import parse_build_args

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="dist-docker",
    help="Build, tag and push component images with retries and timeouts.",
    no_args_is_help=True,
)


@app.callback()
def configure(
    ctx: typer.Context,
    image_name: Annotated[
        Optional[str],
        typer.Option("--image-name", help="Name of the image to build (required)."),
    ] = None,
    registry: Annotated[
        Optional[str],
        typer.Option("--registry", help="Registry to push to; push is skipped without one."),
    ] = None,
    tag: Annotated[
        Optional[str], typer.Option("--tag", help="Image tag (default: latest).")
    ] = None,
    prefix: Annotated[
        Optional[str], typer.Option("--prefix", help="Image prefix (default: whisk).")
    ] = None,
    timeout: Annotated[
        Optional[int],
        typer.Option("--timeout", help="Seconds per attempt (default: 840).", metavar="SECONDS"),
    ] = None,
    retries: Annotated[
        Optional[int],
        typer.Option("--retries", help="Attempts per command (default: 3)."),
    ] = None,
    binary: Annotated[
        Optional[str],
        typer.Option("--binary", help="Container binary (default: docker)."),
    ] = None,
    dockerfile_suffix: Annotated[
        Optional[str],
        typer.Option(
            "--dockerfile-suffix",
            help="Use Dockerfile<SUFFIX> when present, else Dockerfile.",
            metavar="SUFFIX",
        ),
    ] = None,
    multi_arch: Annotated[
        Optional[bool],
        typer.Option("--multi-arch/--no-multi-arch", help="Build with buildx."),
    ] = None,
    host: Annotated[
        Optional[str],
        typer.Option("--host", help="Daemon host passed to the container binary."),
    ] = None,
    build_args: Annotated[
        Optional[list[str]],
        typer.Option(
            "--build-arg",
            help="Build argument KEY=VALUE. Repeatable; order is preserved.",
            metavar="KEY=VALUE",
        ),
    ] = None,
    source_dir: Annotated[
        Optional[Path],
        typer.Option("--source-dir", help="Dockerfile directory and build context (default: cwd)."),
    ] = None,
    root_dir: Annotated[
        Optional[Path],
        typer.Option("--root-dir", help="Project root passed to coverage builds (default: cwd)."),
    ] = None,
    coverage_dirs: Annotated[
        Optional[list[Path]],
        typer.Option("--coverage-dir", help="Instrumented classes directory. Repeatable."),
    ] = None,
    coverage_libs: Annotated[
        Optional[list[Path]],
        typer.Option("--coverage-lib", help="Coverage runtime jar or directory. Repeatable."),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging."),
    ] = False,
) -> None:
    """Resolve configuration shared by every action."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s: %(message)s",
    )
    ctx.obj = {
        "image_name": image_name,
        "registry": registry,
        "tag": tag,
        "prefix": prefix,
        "timeout": timeout,
        "retries": retries,
        "binary": binary,
        "dockerfile_suffix": dockerfile_suffix,
        "multi_arch": multi_arch,
        "host": host,
        "build_args": parse_build_args(build_args),
        "source_dir": source_dir,
        "root_dir": root_dir,
        "coverage_dirs": coverage_dirs,
        "coverage_libs": coverage_libs,
    }


def _run(overrides: dict[str, Any], action: str) -> None:
    try:
        config = load_config(**overrides)
        Pipeline(config).run(action)
    except (DistDockerError, OSError) as exc:
        logger.error("%s failed: %s", action, exc)
        raise typer.Exit(code=1) from exc


@app.command()
def build(ctx: typer.Context) -> None:
    """Build the image, then tag it and push it when a registry is set."""
    _run(ctx.obj, "build")


@app.command("build-coverage")
def build_coverage(ctx: typer.Context) -> None:
    """Build the coverage image from Dockerfile.cov and tag it as ':cov'."""
    _run(ctx.obj, "build-coverage")


@app.command()
def tag(ctx: typer.Context) -> None:
    """Tag the built image with its registry/prefix/tag name."""
    _run(ctx.obj, "tag")


@app.command()
def push(ctx: typer.Context) -> None:
    """Tag the image and push it to the configured registry."""
    _run(ctx.obj, "push")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
