"""Stage precompiled coverage artifacts into the image build context."""

from __future__ import annotations

import logging
from pathlib import Path
from shutil import copy2, copytree
from typing import Iterable

from .settings import BuildConfig

logger = logging.getLogger(__name__)

STAGING_DIR = Path("build") / "tmp" / "docker-coverage"


def staging_root(config: BuildConfig) -> Path:
    return config.source_dir / STAGING_DIR


def _copy_libs(libs: Iterable[Path], destination: Path) -> int:
    destination.mkdir(parents=True, exist_ok=True)
    copied = 0
    for lib in libs:
        if not lib.exists():
            raise FileNotFoundError(f"Coverage library not found: {lib}")
        if lib.is_dir():
            for item in sorted(p for p in lib.rglob("*") if p.is_file()):
                copy2(item, destination / item.name)
                copied += 1
        else:
            copy2(lib, destination / lib.name)
            copied += 1
    return copied


def _copy_classes(dirs: Iterable[Path], destination: Path) -> None:
    destination.mkdir(parents=True, exist_ok=True)
    for source in dirs:
        if not source.is_dir():
            raise FileNotFoundError(f"Coverage classes directory not found: {source}")
        copytree(source, destination, dirs_exist_ok=True)


def stage_coverage_artifacts(config: BuildConfig) -> Path:
    root = staging_root(config)
    copied = _copy_libs(config.coverage_libs, root / "ext-lib")
    _copy_classes(config.coverage_dirs, root / "classes")
    logger.info(
        "Staged %d coverage jar(s) and %d classes dir(s) into %s",
        copied,
        len(config.coverage_dirs),
        root,
    )
    return root
