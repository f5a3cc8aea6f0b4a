"""Shared pytest fixtures for the spring-scaffold test suite.

Provides reusable fixtures for:
- A clean ``SPRING_SCAFFOLD_*`` environment
- Project configurations for the common scaffolding scenarios
- A throwaway template directory for renderer tests
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from spring_scaffold.config import ENV_PREFIX
from spring_scaffold.scaffolder.generator import ProjectConfig


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Strip any SPRING_SCAFFOLD_* variables leaking in from the host shell."""
    for name in list(os.environ):
        if name.startswith(ENV_PREFIX):
            monkeypatch.delenv(name, raising=False)


# ---------------------------------------------------------------------------
# Project configurations
# ---------------------------------------------------------------------------

@pytest.fixture
def smoke_config() -> ProjectConfig:
    """The non-interactive smoke scenario: Gradle, no database, no features."""
    return ProjectConfig(
        project_name="smoke-test-project",
        package_name="com.example",
        build_tool="gradle",
        database="none",
        features=[],
    )


@pytest.fixture
def full_config() -> ProjectConfig:
    """Gradle project with PostgreSQL and every optional feature."""
    return ProjectConfig(
        project_name="order-service",
        package_name="com.acme.orders",
        description="Order management API",
        build_tool="gradle",
        java_version="25",
        database="postgresql",
        features=[
            "actuator",
            "security",
            "validation",
            "modulith",
            "native",
            "docker-compose",
        ],
    )


@pytest.fixture
def maven_config() -> ProjectConfig:
    """Maven project backed by MongoDB with Spring Modulith."""
    return ProjectConfig(
        project_name="catalog-service",
        package_name="com.acme.catalog",
        build_tool="maven",
        java_version="21",
        database="mongodb",
        features=["actuator", "modulith", "docker-compose"],
    )


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------

@pytest.fixture
def template_dir(tmp_path: Path) -> Path:
    """A small template directory with one file per markup kind."""
    root = tmp_path / "templates"
    (root / "basic").mkdir(parents=True)
    (root / "basic" / "greeting.txt.template").write_text(
        "Hello {{name}}{{#if excited}}!{{/if}}\n", encoding="utf-8"
    )
    (root / "basic" / "list.txt.template").write_text(
        "{{#each items}}- {{item}}\n{{/each}}", encoding="utf-8"
    )
    (root / "top.template").write_text("{{title}}", encoding="utf-8")
    return root
