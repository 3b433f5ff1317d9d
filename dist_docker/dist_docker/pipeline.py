"""Build -> tag -> push pipeline for a single component image."""

from __future__ import annotations

import datetime as dt
import logging
import time
from typing import Callable, Sequence

from .commands import build_command, coverage_build_command, push_command, tag_command
from .coverage import stage_coverage_artifacts
from .dockerfile import coverage_dockerfile, resolve_dockerfile
from .errors import ConfigurationError
from .executor import execute
from .runtime_version import RuntimeVersion, detect_runtime_version
from .settings import BuildConfig, ImageRef

logger = logging.getLogger(__name__)

Executor = Callable[[Sequence[str], int, float], object]
VersionDetector = Callable[[BuildConfig], RuntimeVersion]

ACTIONS = ("build", "build-coverage", "tag", "push")


def _elapsed(start: float) -> dt.timedelta:
    return dt.timedelta(seconds=round(time.monotonic() - start, 3))


class Pipeline:
    """Runs the named build actions against one resolved configuration.

    ``build`` is finalized by ``push``, ``push`` depends on ``tag`` and only
    talks to the registry when one is configured. ``build-coverage`` is
    finalized by ``tag`` of the coverage image.
    """

    def __init__(
        self,
        config: BuildConfig,
        *,
        executor: Executor = execute,
        version_detector: VersionDetector = detect_runtime_version,
    ) -> None:
        self.config = config
        self._executor = executor
        self._version_detector = version_detector

    def _execute(self, cmd: Sequence[str]) -> None:
        self._executor(cmd, self.config.retries, self.config.timeout)

    def build(self) -> None:
        start = time.monotonic()
        dockerfile = resolve_dockerfile(
            self.config.source_dir, self.config.dockerfile_suffix
        )
        self._execute(build_command(self.config, dockerfile))
        logger.info(
            "Building '%s' took %s", self.config.image_name, _elapsed(start)
        )
        self.push()

    def build_coverage(self) -> None:
        start = time.monotonic()
        ref = self.config.coverage_image_ref()
        stage_coverage_artifacts(self.config)
        dockerfile = coverage_dockerfile(self.config.source_dir)
        self._execute(coverage_build_command(self.config, dockerfile, ref.local))
        logger.info("Building '%s' took %s", ref.local, _elapsed(start))
        self.tag(ref)

    def tag(self, ref: ImageRef | None = None) -> None:
        ref = ref or self.config.image_ref()
        version = self._version_detector(self.config)
        self._execute(tag_command(self.config, ref, force=version.needs_force_tag))

    def push(self, ref: ImageRef | None = None) -> None:
        ref = ref or self.config.image_ref()
        self.tag(ref)
        if not self.config.registry:
            logger.info("No registry configured; skipping push of '%s'", ref.tagged)
            return
        self._execute(push_command(self.config, ref))

    def run(self, action: str) -> None:
        handlers: dict[str, Callable[[], None]] = {
            "build": self.build,
            "build-coverage": self.build_coverage,
            "tag": self.tag,
            "push": self.push,
        }
        handler = handlers.get(action)
        if handler is None:
            raise ConfigurationError(
                f"Unknown action '{action}'; expected one of: {', '.join(ACTIONS)}"
            )
        logger.debug("Running action '%s'", action)
        handler()
