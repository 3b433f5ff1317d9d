from __future__ import annotations

import os
import signal
import subprocess
import sys
import threading
from dataclasses import dataclass
from typing import IO, Sequence

# Exit status a JVM-style runtime reports for a child terminated by SIGTERM.
TIMEOUT_EXIT_CODE = 143
# Shell convention for "command not found".
NOT_FOUND_EXIT_CODE = 127
KILL_GRACE_SECONDS = 10.0
# Upper bound on waiting for the output readers once the child is gone.
DRAIN_SECONDS = 5.0


@dataclass(frozen=True)
class ExecutionResult:
    exit_code: int

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0

    @property
    def killed(self) -> bool:
        return self.exit_code == TIMEOUT_EXIT_CODE


def _forward(stream: IO[str] | None, writer: IO[str]) -> None:
    if stream is None:
        return
    for line in iter(stream.readline, ""):
        writer.write(line)
        writer.flush()
    stream.close()


def _signal_group(proc: subprocess.Popen[str], sig: int) -> None:
    try:
        os.killpg(proc.pid, sig)
    except ProcessLookupError:
        pass


def _terminate(proc: subprocess.Popen[str]) -> None:
    # The child leads its own session, so the signal also reaches helpers
    # (buildx plugins, shell wrappers) that inherited its pipes.
    _signal_group(proc, signal.SIGTERM)
    try:
        proc.wait(timeout=KILL_GRACE_SECONDS)
    except subprocess.TimeoutExpired:
        _signal_group(proc, signal.SIGKILL)
        proc.wait()
    else:
        _signal_group(proc, signal.SIGKILL)


def run_streaming(cmd: Sequence[str], timeout: float) -> ExecutionResult:
    """
    Run a subprocess once, streaming stdout/stderr live to the caller.
    A process still running after ``timeout`` seconds is terminated together
    with its process group and reported with exit code 143, unless it exits
    cleanly while being terminated.
    """
    try:
        proc = subprocess.Popen(
            list(cmd),
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            errors="replace",
            start_new_session=True,
        )
    except OSError as exc:
        sys.stderr.write(f"failed to start {cmd[0]}: {exc}\n")
        return ExecutionResult(exit_code=NOT_FOUND_EXIT_CODE)

    threads = [
        threading.Thread(target=_forward, args=(proc.stdout, sys.stdout), daemon=True),
        threading.Thread(target=_forward, args=(proc.stderr, sys.stderr), daemon=True),
    ]
    for thread in threads:
        thread.start()

    try:
        returncode = proc.wait(timeout=timeout)
    except subprocess.TimeoutExpired:
        _terminate(proc)
        returncode = 0 if proc.returncode == 0 else TIMEOUT_EXIT_CODE

    for thread in threads:
        thread.join(timeout=DRAIN_SECONDS)

    return ExecutionResult(exit_code=returncode)


def capture_output(cmd: Sequence[str], timeout: float) -> str:
    """Run a subprocess once and return its combined stdout and stderr."""
    result = subprocess.run(
        list(cmd),
        capture_output=True,
        text=True,
        errors="replace",
        timeout=timeout,
        check=False,
    )
    return (result.stdout or "") + (result.stderr or "")
