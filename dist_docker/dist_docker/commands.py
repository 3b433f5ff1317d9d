from __future__ import annotations

from pathlib import Path

from .settings import BuildConfig, ImageRef


def binary_prefix(config: BuildConfig) -> list[str]:
    cmd = [config.binary]
    if config.host:
        cmd += ["--host", config.host]
    return cmd


def build_args(config: BuildConfig) -> list[str]:
    supplied = list(config.build_args)
    if config.multi_arch and not any(arg.startswith("BASE=") for arg in supplied):
        supplied.append(f"BASE={config.scala_base_image_name}")

    args: list[str] = []
    for arg in supplied:
        args += ["--build-arg", arg]
    return args


def build_command(config: BuildConfig, dockerfile: Path) -> list[str]:
    cmd = binary_prefix(config)
    if config.multi_arch:
        cmd.append("buildx")
    cmd += [
        "build",
        *build_args(config),
        "-f",
        str(dockerfile),
        "-t",
        config.image_name,
        str(config.source_dir),
    ]
    if config.multi_arch:
        cmd.append("--load")
    return cmd


def coverage_build_command(
    config: BuildConfig, dockerfile: Path, image_name: str
) -> list[str]:
    args: list[str] = []
    for arg in [f"OW_ROOT_DIR={config.root_dir}", *config.build_args]:
        args += ["--build-arg", arg]
    return [
        *binary_prefix(config),
        "build",
        *args,
        "-f",
        str(dockerfile),
        "-t",
        image_name,
        str(config.source_dir),
    ]


def tag_command(config: BuildConfig, ref: ImageRef, *, force: bool = False) -> list[str]:
    cmd = [*binary_prefix(config), "tag"]
    if force:
        cmd.append("-f")
    return cmd + [ref.local, ref.tagged]


def push_command(config: BuildConfig, ref: ImageRef) -> list[str]:
    return [*binary_prefix(config), "push", ref.tagged]


def version_command(config: BuildConfig) -> list[str]:
    return [*binary_prefix(config), "-v"]
