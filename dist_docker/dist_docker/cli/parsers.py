"""CLI argument parsers and validators."""

from __future__ import annotations

from typing import Optional

import typer


def parse_build_arg(value: str) -> str:
    """Validate a build argument in format KEY=VALUE (or a bare KEY)."""
    key = value.split("=", 1)[0]
    if not key or key != key.strip() or " " in key:
        raise typer.BadParameter(f"Must be KEY=VALUE, got: {value!r}")
    return value


def parse_build_args(values: Optional[list[str]]) -> Optional[list[str]]:
    """Validate repeatable --build-arg values, preserving their order."""
    if not values:
        return None
    return [parse_build_arg(value) for value in values]
