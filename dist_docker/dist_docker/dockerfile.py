from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

DOCKERFILE = "Dockerfile"
COVERAGE_SUFFIX = ".cov"


def resolve_dockerfile(source_dir: Path, suffix: str = "") -> Path:
    default = source_dir / DOCKERFILE
    candidate = source_dir / f"{DOCKERFILE}{suffix}"
    if not candidate.exists():
        logger.info("Using default Dockerfile since '%s' does not exist", candidate)
        return default
    return candidate


def coverage_dockerfile(source_dir: Path) -> Path:
    return source_dir / f"{DOCKERFILE}{COVERAGE_SUFFIX}"
