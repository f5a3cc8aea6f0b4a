"""spring-scaffold scaffolder -- generates Spring Boot project structures.

This package takes a ``ProjectConfig`` and renders the project's build
descriptor, application class, configuration and tests from the placeholder
templates under ``templates/``.

Quick usage::

    from spring_scaffold.scaffolder import ProjectConfig, ProjectGenerator

    config = ProjectConfig(
        project_name="order-service",
        package_name="com.acme.orders",
        build_tool="maven",
        database="postgresql",
        features=["actuator", "docker-compose"],
    )
    project_path = await ProjectGenerator(config).generate("/tmp/output")
"""

from spring_scaffold.scaffolder.generator import ProjectConfig, ProjectGenerator, build_context
from spring_scaffold.scaffolder.templates import TemplateRenderer, render

__all__ = [
    "ProjectConfig",
    "ProjectGenerator",
    "TemplateRenderer",
    "build_context",
    "render",
]
