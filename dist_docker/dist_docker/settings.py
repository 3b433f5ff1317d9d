"""Build configuration resolved once at startup."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError


@dataclass(frozen=True)
class ImageRef:
    """Local image name and the name it is tagged (and pushed) as."""

    local: str
    tagged: str


class BuildConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="DIST_DOCKER_", case_sensitive=False, frozen=True
    )

    image_name: str = Field(..., min_length=1, description="Image to build")
    registry: str = ""
    tag: str = "latest"
    prefix: str = "whisk"
    timeout: int = Field(default=840, ge=1, description="Seconds per attempt")
    retries: int = Field(default=3, ge=1, description="Attempts per command")
    binary: str = Field(default="docker", min_length=1)
    dockerfile_suffix: str = ""
    multi_arch: bool = False
    host: str | None = None
    build_args: list[str] = Field(default_factory=list)
    source_dir: Path = Field(default_factory=Path.cwd)
    root_dir: Path = Field(default_factory=Path.cwd)
    coverage_dirs: list[Path] = Field(default_factory=list)
    coverage_libs: list[Path] = Field(default_factory=list)

    @field_validator("image_name")
    @classmethod
    def _strip_image_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("image name must not be blank")
        return value

    @field_validator("registry")
    @classmethod
    def _strip_registry(cls, value: str) -> str:
        return value.strip().rstrip("/")

    @field_validator("source_dir", "root_dir")
    @classmethod
    def _absolute(cls, value: Path) -> Path:
        return value.expanduser().resolve()

    @property
    def registry_prefix(self) -> str:
        return f"{self.registry}/" if self.registry else ""

    @property
    def tagged_image_name(self) -> str:
        return f"{self.registry_prefix}{self.prefix}/{self.image_name}:{self.tag}"

    @property
    def scala_base_image_name(self) -> str:
        return f"{self.registry_prefix}{self.prefix}/scala:{self.tag}"

    def image_ref(self) -> ImageRef:
        return ImageRef(local=self.image_name, tagged=self.tagged_image_name)

    def coverage_image_ref(self) -> ImageRef:
        # The coverage image replaces the regular one locally; it is never
        # qualified with the registry.
        return ImageRef(
            local=f"{self.image_name}-cov",
            tagged=f"{self.prefix}/{self.image_name}:cov",
        )


def load_config(**overrides: Any) -> BuildConfig:
    """Resolve the build configuration from overrides and the environment.

    Overrides set to ``None`` (or empty lists) defer to the environment and
    then the defaults.
    """
    explicit = {
        key: value
        for key, value in overrides.items()
        if value is not None and value != []
    }
    try:
        return BuildConfig(**explicit)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or 'config'}: {error['msg']}"
            for error in exc.errors()
        )
        raise ConfigurationError(f"Invalid build configuration: {problems}") from exc
