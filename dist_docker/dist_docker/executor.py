"""Bounded, immediate retries around a single external command."""

from __future__ import annotations

import logging
from typing import Callable, Sequence

from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_none,
)

from ._utils import ExecutionResult, run_streaming
from .errors import ExecutionFailed

logger = logging.getLogger(__name__)

Runner = Callable[[Sequence[str], float], ExecutionResult]


def _attempt(command: Sequence[str], timeout: float, runner: Runner) -> ExecutionResult:
    logger.info("Executing '%s'", " ".join(command))
    result = runner(command, timeout)
    if not result.succeeded:
        raise ExecutionFailed(command, result.exit_code, result.killed, timeout)
    return result


def _retry_logger(attempts: int) -> Callable[[RetryCallState], None]:
    def _log(retry_state: RetryCallState) -> None:
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        left = attempts - retry_state.attempt_number
        logger.warning("%s, %d retries left, retrying...", exc, left)

    return _log


def execute(
    command: Sequence[str],
    max_retries: int,
    timeout: float,
    *,
    runner: Runner = run_streaming,
) -> ExecutionResult:
    """Run ``command`` until it exits with 0, at most ``max_retries`` times.

    Every attempt gets the same ``timeout``; there is no wait between
    attempts. The last failure is raised as :class:`ExecutionFailed`.
    """
    attempts = max(max_retries, 1)
    retrying = Retrying(
        reraise=True,
        retry=retry_if_exception_type(ExecutionFailed),
        stop=stop_after_attempt(attempts),
        wait=wait_none(),
        before_sleep=_retry_logger(attempts),
    )
    try:
        return retrying(_attempt, list(command), timeout, runner)
    except ExecutionFailed as exc:
        logger.error("%s, no more retries left, aborting...", exc)
        raise
