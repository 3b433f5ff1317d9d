"""Container runtime version detection for the tag compatibility shim."""

from __future__ import annotations

import logging
import re
import subprocess
from dataclasses import dataclass

from ._utils import capture_output
from .commands import version_command
from .errors import VersionParseFailed
from .settings import BuildConfig

logger = logging.getLogger(__name__)

_VERSION_PATTERN = re.compile(r"^(\S+) version (\d+)\.(\d+)\.(\d+)")


@dataclass(frozen=True)
class RuntimeVersion:
    runner: str
    major: int
    minor: int
    patch: int

    @property
    def needs_force_tag(self) -> bool:
        # Docker before 1.12 refuses to retag an existing name without -f.
        return self.runner == "Docker" and self.major == 1 and self.minor < 12


def parse_version(text: str) -> RuntimeVersion:
    """Parse the first line of ``<binary> -v`` output.

    Args:
        text: Raw version output, e.g. ``Docker version 24.0.7, build afdd53b``

    Returns:
        Parsed runtime version
    """
    lines = text.strip().splitlines()
    match = _VERSION_PATTERN.match(lines[0]) if lines else None
    if match is None:
        raise VersionParseFailed(text)
    runner, major, minor, patch = match.groups()
    return RuntimeVersion(
        runner=runner, major=int(major), minor=int(minor), patch=int(patch)
    )


def detect_runtime_version(config: BuildConfig) -> RuntimeVersion:
    cmd = version_command(config)
    try:
        output = capture_output(cmd, timeout=config.timeout)
    except (OSError, subprocess.TimeoutExpired) as exc:
        raise VersionParseFailed(
            "", reason=f"Unable to query version with '{' '.join(cmd)}': {exc}"
        ) from exc
    version = parse_version(output)
    logger.debug(
        "Detected %s %d.%d.%d", version.runner, version.major, version.minor, version.patch
    )
    return version
