"""spring-scaffold configuration.

Vocabularies, defaults and input validation for the values a user can choose
when scaffolding a project.  Defaults live in a Pydantic v2 model so they can
be validated at construction time and overridden from environment variables
without boiler-plate.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import TYPE_CHECKING, Any, Literal

from pydantic import BaseModel, Field, ValidationError, field_validator

from spring_scaffold.errors import ConfigError

if TYPE_CHECKING:
    from spring_scaffold.scaffolder.generator import ProjectConfig


# ---------------------------------------------------------------------------
# Vocabularies
# ---------------------------------------------------------------------------

BUILD_TOOLS: tuple[str, ...] = ("gradle", "maven")
JAVA_VERSIONS: tuple[str, ...] = ("25", "21", "17")
BOOT_VERSIONS: tuple[str, ...] = ("4.0.3", "4.1.0-M1")
DATABASES: tuple[str, ...] = ("postgresql", "mysql", "mongodb", "h2", "none")
FEATURES: tuple[str, ...] = (
    "actuator",
    "security",
    "validation",
    "modulith",
    "native",
    "webflux",
    "docker-compose",
)

DEFAULT_PROJECT_NAME = "my-service"
DEFAULT_PACKAGE = "com.example"
DEFAULT_DESCRIPTION = "Spring Boot 4 microservice"
DEFAULT_BUILD_TOOL = "gradle"
DEFAULT_JAVA_VERSION = "25"
DEFAULT_BOOT_VERSION = "4.0.3"
DEFAULT_DATABASE = "postgresql"
DEFAULT_FEATURES: tuple[str, ...] = ("actuator", "security", "validation")

ENV_PREFIX = "SPRING_SCAFFOLD_"

_PROJECT_NAME_RE = re.compile(r"^[a-z][a-z0-9-]*$")
_PACKAGE_NAME_RE = re.compile(r"^[a-z][a-z0-9.]*$")


# ---------------------------------------------------------------------------
# Validators
# ---------------------------------------------------------------------------


def validate_project_name(name: str) -> str:
    """Return *name* if it is a valid project name, else raise ``ConfigError``."""
    if not _PROJECT_NAME_RE.match(name):
        raise ConfigError(
            f"Invalid project name {name!r}: use lowercase letters, numbers, and hyphens"
        )
    return name


def validate_package_name(name: str) -> str:
    """Return *name* if it is a valid base package, else raise ``ConfigError``."""
    if not _PACKAGE_NAME_RE.match(name):
        raise ConfigError(
            f"Invalid package name {name!r}: use lowercase letters, numbers, and dots"
        )
    return name


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


class Settings(BaseModel):
    """Default answers for every scaffolding question.

    Instances are created once by the CLI (usually through
    :meth:`from_env`) and turned into a ``ProjectConfig`` per run.
    """

    package_name: str = Field(default=DEFAULT_PACKAGE)
    description: str = Field(default=DEFAULT_DESCRIPTION)
    build_tool: Literal["gradle", "maven"] = Field(default=DEFAULT_BUILD_TOOL)
    java_version: Literal["25", "21", "17"] = Field(default=DEFAULT_JAVA_VERSION)
    boot_version: str = Field(default=DEFAULT_BOOT_VERSION)
    database: Literal["postgresql", "mysql", "mongodb", "h2", "none"] = Field(
        default=DEFAULT_DATABASE
    )
    features: list[str] = Field(default_factory=lambda: list(DEFAULT_FEATURES))
    enable_preview: bool = Field(default=True)
    output_dir: Path = Field(default=Path("."))

    @field_validator("package_name")
    @classmethod
    def _check_package(cls, value: str) -> str:
        if not _PACKAGE_NAME_RE.match(value):
            raise ValueError("use lowercase letters, numbers, and dots")
        return value

    @field_validator("features")
    @classmethod
    def _check_features(cls, value: list[str]) -> list[str]:
        unknown = [f for f in value if f not in FEATURES]
        if unknown:
            raise ValueError(f"unknown feature(s): {', '.join(unknown)}")
        return value

    @classmethod
    def from_env(cls) -> "Settings":
        """Build ``Settings`` from environment variables.

        Recognised variables (all optional):
            SPRING_SCAFFOLD_PACKAGE, SPRING_SCAFFOLD_DESCRIPTION,
            SPRING_SCAFFOLD_BUILD_TOOL, SPRING_SCAFFOLD_JAVA_VERSION,
            SPRING_SCAFFOLD_BOOT_VERSION, SPRING_SCAFFOLD_DATABASE,
            SPRING_SCAFFOLD_FEATURES (comma-separated), SPRING_SCAFFOLD_OUTPUT_DIR.

        Raises:
            ConfigError: If any variable holds an unsupported value.
        """
        env_fields = {
            "PACKAGE": "package_name",
            "DESCRIPTION": "description",
            "BUILD_TOOL": "build_tool",
            "JAVA_VERSION": "java_version",
            "BOOT_VERSION": "boot_version",
            "DATABASE": "database",
            "OUTPUT_DIR": "output_dir",
        }
        kwargs: dict[str, Any] = {}
        for suffix, field_name in env_fields.items():
            value = os.environ.get(ENV_PREFIX + suffix)
            if value:
                kwargs[field_name] = value.strip()

        features_str = os.environ.get(ENV_PREFIX + "FEATURES")
        if features_str is not None:
            kwargs["features"] = [f.strip() for f in features_str.split(",") if f.strip()]

        try:
            return cls(**kwargs)
        except ValidationError as exc:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
            )
            raise ConfigError(f"Invalid {ENV_PREFIX}* environment: {problems}") from exc

    def to_project_config(self, project_name: str, **overrides: Any) -> "ProjectConfig":
        """Combine these defaults with a project name into a ``ProjectConfig``.

        Keyword overrides replace individual defaults (e.g. ``build_tool="maven"``).
        """
        from spring_scaffold.scaffolder.generator import ProjectConfig

        values = self.model_dump(exclude={"output_dir"})
        values.update(overrides)
        return ProjectConfig(project_name=validate_project_name(project_name), **values)
