"""Command-line entry point for spring-scaffold.

Usage::

    create-spring-app order-service
    create-spring-app order-service --maven --database mysql --feature actuator
    python -m spring_scaffold order-service --minimal --output ./projects
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from rich.markup import escape

from spring_scaffold import __version__
from spring_scaffold.config import (
    BOOT_VERSIONS,
    DATABASES,
    DEFAULT_PROJECT_NAME,
    FEATURES,
    JAVA_VERSIONS,
    Settings,
    validate_package_name,
)
from spring_scaffold.errors import ScaffoldError
from spring_scaffold.scaffolder import ProjectConfig, ProjectGenerator
from spring_scaffold.utils import (
    console,
    create_progress,
    print_error,
    print_panel,
    print_success,
    print_summary_table,
    print_warning,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="create-spring-app",
        description="Scaffold a Spring Boot 4.x / Java 25 project",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  create-spring-app order-service\n"
            "  create-spring-app order-service --maven --database mysql\n"
            "  create-spring-app order-service --feature actuator --feature docker-compose\n"
            "\n"
            "Defaults can be set with SPRING_SCAFFOLD_* environment variables.\n"
        ),
    )
    parser.add_argument(
        "project_name",
        nargs="?",
        default=DEFAULT_PROJECT_NAME,
        help=f"Project name (default: {DEFAULT_PROJECT_NAME})",
    )
    build = parser.add_mutually_exclusive_group()
    build.add_argument(
        "--gradle", dest="build_tool", action="store_const", const="gradle",
        help="Use Gradle Kotlin DSL (default)",
    )
    build.add_argument(
        "--maven", dest="build_tool", action="store_const", const="maven",
        help="Use Maven instead of Gradle",
    )
    parser.add_argument("--package", "-p", dest="package_name", help="Base package, e.g. com.acme")
    parser.add_argument("--description", "-d", help="Project description")
    parser.add_argument("--java", dest="java_version", choices=JAVA_VERSIONS, help="Java version")
    parser.add_argument(
        "--boot-version", choices=BOOT_VERSIONS, help="Spring Boot version",
    )
    parser.add_argument("--database", choices=DATABASES, help="Database")
    parser.add_argument(
        "--feature", "-f",
        dest="features",
        action="append",
        choices=FEATURES,
        help="Enable a feature (repeatable; replaces the default set)",
    )
    parser.add_argument(
        "--minimal", action="store_true",
        help="API only: no Actuator, Security, or Validation",
    )
    parser.add_argument(
        "--no-preview", dest="enable_preview", action="store_false", default=None,
        help="Disable Java preview features",
    )
    parser.add_argument("--output", "-o", help="Parent directory for the project (default: .)")
    parser.add_argument("--quiet", "-q", action="store_true", help="Only print errors")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def config_from_args(opts: argparse.Namespace, settings: Settings) -> ProjectConfig:
    """Merge parsed CLI options over *settings* into a ``ProjectConfig``."""
    overrides: dict[str, object] = {}
    for name in ("build_tool", "description", "java_version", "boot_version", "database"):
        value = getattr(opts, name)
        if value is not None:
            overrides[name] = value
    if opts.package_name is not None:
        overrides["package_name"] = validate_package_name(opts.package_name)
    if opts.enable_preview is not None:
        overrides["enable_preview"] = opts.enable_preview
    if opts.minimal:
        overrides["features"] = []
    elif opts.features:
        overrides["features"] = list(dict.fromkeys(opts.features))
    return settings.to_project_config(opts.project_name, **overrides)


def print_next_steps(config: ProjectConfig) -> None:
    run = "./mvnw spring-boot:run" if config.build_tool == "maven" else "./gradlew bootRun"
    print_panel(
        f"[cyan]cd {escape(config.project_name)}[/cyan]\n[cyan]{run}[/cyan]",
        title="Next steps",
    )


def run_cli(argv: list[str] | None = None) -> int:
    """Run the CLI with given arguments. Returns the exit code."""
    opts = build_parser().parse_args(argv)

    try:
        settings = Settings.from_env()
        config = config_from_args(opts, settings)
        output_dir = Path(opts.output) if opts.output else settings.output_dir

        if not opts.quiet:
            print_summary_table(
                {
                    "Project": config.project_name,
                    "Package": config.package_name,
                    "Build tool": config.build_tool,
                    "Java": config.java_version,
                    "Spring Boot": config.boot_version,
                    "Database": config.database,
                    "Features": ", ".join(config.features) or "(none)",
                },
                title="Spring Boot project",
            )

        if opts.quiet:
            project_root = asyncio.run(ProjectGenerator(config).generate(output_dir))
        else:
            with create_progress() as progress:
                task = progress.add_task("Generating project...", total=None)
                generator = ProjectGenerator(
                    config,
                    on_progress=lambda msg: progress.update(task, description=escape(msg)),
                )
                project_root = asyncio.run(generator.generate(output_dir))
    except KeyboardInterrupt:
        print_warning("\n  Cancelled.")
        return 0
    except ScaffoldError as exc:
        print_error(f"Error: {exc}")
        return 1

    if not opts.quiet:
        print_success(f"Project created at {project_root.resolve()}")
        print_next_steps(config)
        console.print()
    return 0


def main() -> None:
    """CLI entry point for ``create-spring-app`` and ``python -m spring_scaffold``."""
    sys.exit(run_cli())


if __name__ == "__main__":
    main()
