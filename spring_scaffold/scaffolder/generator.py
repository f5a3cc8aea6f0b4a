"""Main scaffolding orchestrator.

Takes a ``ProjectConfig`` and generates a Spring Boot 4 project directory:
a Gradle Kotlin DSL or Maven build descriptor, the application class,
``application.yaml``, a context-load test, and optionally a ``compose.yaml``
and a Spring Modulith module skeleton.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from datetime import date
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from spring_scaffold.config import (
    DEFAULT_BOOT_VERSION,
    DEFAULT_BUILD_TOOL,
    DEFAULT_DATABASE,
    DEFAULT_DESCRIPTION,
    DEFAULT_JAVA_VERSION,
    DEFAULT_PACKAGE,
)
from spring_scaffold.errors import translate_os_error
from spring_scaffold.utils import package_to_path, to_pascal

from .compose_gen import ComposeGenerator
from .templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Template sets
# ---------------------------------------------------------------------------

GRADLE_TEMPLATE_SET = "gradle-kotlin"
MAVEN_TEMPLATE_SET = "maven"

# The Gradle set doubles as the shared base for artifacts a set does not carry.
BASE_TEMPLATE_SET = GRADLE_TEMPLATE_SET

BUILD_FILES: dict[str, str] = {
    GRADLE_TEMPLATE_SET: "build.gradle.kts",
    MAVEN_TEMPLATE_SET: "pom.xml",
}

MODULITH_MODULES: tuple[str, ...] = ("orders", "inventory", "shared")


# ---------------------------------------------------------------------------
# Database dependency tables
# ---------------------------------------------------------------------------

RELATIONAL_DATABASES: frozenset[str] = frozenset({"postgresql", "mysql", "h2"})
DOCUMENT_DATABASES: frozenset[str] = frozenset({"mongodb"})

# Databases that run as a container; H2 is in-memory.
COMPOSE_DATABASES: frozenset[str] = frozenset({"postgresql", "mysql", "mongodb"})

GRADLE_DB_DEPENDENCIES: dict[str, str] = {
    "postgresql": 'runtimeOnly("org.postgresql:postgresql")',
    "mysql": 'runtimeOnly("com.mysql:mysql-connector-j")',
    "mongodb": 'implementation("org.springframework.boot:spring-boot-starter-data-mongodb")',
    "h2": 'runtimeOnly("com.h2database:h2")',
    "none": "",
}

MAVEN_DB_DEPENDENCIES: dict[str, str] = {
    "postgresql": (
        "<groupId>org.postgresql</groupId>"
        "<artifactId>postgresql</artifactId>"
        "<scope>runtime</scope>"
    ),
    "mysql": (
        "<groupId>com.mysql</groupId>"
        "<artifactId>mysql-connector-j</artifactId>"
        "<scope>runtime</scope>"
    ),
    "mongodb": (
        "<groupId>org.springframework.boot</groupId>"
        "<artifactId>spring-boot-starter-data-mongodb</artifactId>"
    ),
    "h2": (
        "<groupId>com.h2database</groupId>"
        "<artifactId>h2</artifactId>"
        "<scope>runtime</scope>"
    ),
    "none": "",
}

GRADLE_MODULITH_DEPENDENCIES: dict[str, str] = {
    "relational": 'implementation("org.springframework.modulith:spring-modulith-starter-jpa")',
    "document": 'implementation("org.springframework.modulith:spring-modulith-starter-mongodb")',
}

MAVEN_MODULITH_DEPENDENCIES: dict[str, str] = {
    "relational": (
        "<groupId>org.springframework.modulith</groupId>"
        "<artifactId>spring-modulith-starter-jpa</artifactId>"
    ),
    "document": (
        "<groupId>org.springframework.modulith</groupId>"
        "<artifactId>spring-modulith-starter-mongodb</artifactId>"
    ),
}


# ---------------------------------------------------------------------------
# Configuration model
# ---------------------------------------------------------------------------


class ProjectConfig(BaseModel):
    """Pydantic model describing the project to scaffold.

    ``build_tool`` and ``database`` are deliberately plain strings: the CLI
    validates them, and the generator falls back to the Gradle set and to
    empty dependency snippets for anything it does not recognise.
    """

    project_name: str = Field(..., description="Project identifier, e.g. 'order-service'")
    package_name: str = Field(default=DEFAULT_PACKAGE, description="Dotted base package")
    description: str = Field(default=DEFAULT_DESCRIPTION)
    build_tool: str = Field(default=DEFAULT_BUILD_TOOL, description="'gradle' or 'maven'")
    java_version: str = Field(default=DEFAULT_JAVA_VERSION)
    boot_version: str = Field(default=DEFAULT_BOOT_VERSION)
    database: str = Field(default=DEFAULT_DATABASE)
    features: list[str] = Field(
        default_factory=list,
        description="Feature tokens, e.g. 'actuator', 'modulith', 'docker-compose'",
    )
    enable_preview: bool = Field(
        default=True, description="Enable Java preview features (Java 25 only)"
    )


# ---------------------------------------------------------------------------
# Context derivation
# ---------------------------------------------------------------------------


def resolve_template_set(build_tool: str) -> str:
    """Return the template set directory for a build tool."""
    return MAVEN_TEMPLATE_SET if build_tool == "maven" else GRADLE_TEMPLATE_SET


def db_dependency(database: str, template_set: str = GRADLE_TEMPLATE_SET) -> str:
    """Dependency declaration for *database* in the given build dialect.

    Unknown databases yield an empty string.
    """
    table = MAVEN_DB_DEPENDENCIES if template_set == MAVEN_TEMPLATE_SET else GRADLE_DB_DEPENDENCIES
    return table.get(database, "")


def modulith_data_dependency(
    features: list[str], database: str, template_set: str = GRADLE_TEMPLATE_SET
) -> str:
    """Spring Modulith persistence starter for the chosen database.

    Empty unless the ``modulith`` feature is enabled and the database belongs
    to the relational or document family.
    """
    if "modulith" not in features:
        return ""
    if database in RELATIONAL_DATABASES:
        family = "relational"
    elif database in DOCUMENT_DATABASES:
        family = "document"
    else:
        return ""
    table = (
        MAVEN_MODULITH_DEPENDENCIES
        if template_set == MAVEN_TEMPLATE_SET
        else GRADLE_MODULITH_DEPENDENCIES
    )
    return table[family]


def build_context(config: ProjectConfig) -> dict[str, Any]:
    """Build the template context from the project config.

    Keys are camelCase because they are the names the templates reference.
    Every key is always present, even when a given template does not use it.
    """
    features = list(config.features)
    database = config.database
    template_set = resolve_template_set(config.build_tool)

    return {
        "projectName": config.project_name,
        "packageName": config.package_name,
        "description": config.description or DEFAULT_DESCRIPTION,
        "buildTool": config.build_tool,
        "javaVersion": config.java_version,
        "bootVersion": config.boot_version,
        "database": database,
        "features": features,
        "templateSet": template_set,
        "appName": to_pascal(config.project_name),
        "packagePath": package_to_path(config.package_name),
        "dbDependency": db_dependency(database, GRADLE_TEMPLATE_SET),
        "dbMavenDep": db_dependency(database, MAVEN_TEMPLATE_SET),
        "hasDatabase": database in RELATIONAL_DATABASES or database in DOCUMENT_DATABASES,
        "hasJpa": database in RELATIONAL_DATABASES,
        "hasMongo": database in DOCUMENT_DATABASES,
        "hasPostgresql": database == "postgresql",
        "hasMysql": database == "mysql",
        "hasComposeService": database in COMPOSE_DATABASES,
        "hasActuator": "actuator" in features,
        "hasSecurity": "security" in features,
        "hasValidation": "validation" in features,
        "hasModulith": "modulith" in features,
        "hasNative": "native" in features,
        "hasWebFlux": "webflux" in features,
        "hasDockerCompose": "docker-compose" in features,
        "enablePreview": config.enable_preview and config.java_version == "25",
        "year": date.today().year,
        "modulithDataDep": modulith_data_dependency(features, database, GRADLE_TEMPLATE_SET),
        "modulithMavenDataDep": modulith_data_dependency(features, database, MAVEN_TEMPLATE_SET),
    }


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class ProjectGenerator:
    """Main scaffolding orchestrator.

    Given a ``ProjectConfig``, writes into ``<output_dir>/<project_name>``:
    - ``build.gradle.kts`` or ``pom.xml``
    - ``src/main/java/<package>/<AppName>Application.java``
    - ``src/main/resources/application.yaml``
    - ``src/test/java/<package>/<AppName>ApplicationTests.java``
    - ``compose.yaml`` (``docker-compose`` feature)
    - ``<package>/{orders,inventory,shared}/internal`` (``modulith`` feature)

    Artifacts are written one after another.  A failure aborts the run and
    leaves whatever was already written on disk.
    """

    def __init__(
        self,
        config: ProjectConfig,
        renderer: TemplateRenderer | None = None,
        on_progress: Callable[[str], None] | None = None,
    ) -> None:
        self.config = config
        self.renderer = renderer or TemplateRenderer()
        self.compose_gen = ComposeGenerator(self.renderer)
        self.on_progress = on_progress
        self.template_set = resolve_template_set(config.build_tool)

    # -- Public API --------------------------------------------------------

    async def generate(self, output_dir: str | Path = ".") -> Path:
        """Generate the project structure.

        Args:
            output_dir: Parent directory where the project folder will be
                created.

        Returns:
            Path to the generated project root.

        Raises:
            ScaffoldIOError: On any file-system failure.
        """
        project_root = Path(output_dir) / self.config.project_name
        await _mkdir(project_root)

        context = build_context(self.config)
        features = context["features"]

        # 1. Build descriptor
        await self._render_build_file(project_root, context)

        # 2. Application class
        await self._render_application_class(project_root, context)

        # 3. application.yaml
        await self._render_application_yaml(project_root, context)

        # 4. Context-load test
        await self._render_application_tests(project_root, context)

        # 5. compose.yaml
        if "docker-compose" in features:
            path = await self.compose_gen.generate(project_root, self.template_set, context)
            self._report(path)

        # 6. Spring Modulith skeleton
        if "modulith" in features:
            await self._create_modulith_structure(project_root, context)

        return project_root

    # -- Template lookup ---------------------------------------------------

    def _template(self, relative: str) -> str:
        """Resolve *relative* in the active set, falling back to the base set."""
        candidate = f"{self.template_set}/{relative}"
        if self.renderer.exists(candidate):
            return candidate
        return f"{BASE_TEMPLATE_SET}/{relative}"

    # -- Artifacts ---------------------------------------------------------

    async def _render_build_file(self, root: Path, ctx: dict[str, Any]) -> None:
        build_file = BUILD_FILES[self.template_set]
        path = await self.renderer.render_to_file(
            f"{self.template_set}/{build_file}.template", root / build_file, ctx
        )
        self._report(path)

    async def _render_application_class(self, root: Path, ctx: dict[str, Any]) -> None:
        src_dir = root / "src" / "main" / "java" / ctx["packagePath"]
        path = await self.renderer.render_to_file(
            self._template("src/main/java/com/example/app/Application.java.template"),
            src_dir / f"{ctx['appName']}Application.java",
            ctx,
        )
        self._report(path)

    async def _render_application_yaml(self, root: Path, ctx: dict[str, Any]) -> None:
        path = await self.renderer.render_to_file(
            self._template("src/main/resources/application.yaml.template"),
            root / "src" / "main" / "resources" / "application.yaml",
            ctx,
        )
        self._report(path)

    async def _render_application_tests(self, root: Path, ctx: dict[str, Any]) -> None:
        test_dir = root / "src" / "test" / "java" / ctx["packagePath"]
        path = await self.renderer.render_to_file(
            self._template("src/test/java/com/example/app/ApplicationTests.java.template"),
            test_dir / f"{ctx['appName']}ApplicationTests.java",
            ctx,
        )
        self._report(path)

    async def _create_modulith_structure(self, root: Path, ctx: dict[str, Any]) -> None:
        """Create the example module packages with an ``internal`` sub-package each."""
        base = root / "src" / "main" / "java" / ctx["packagePath"]
        for module in MODULITH_MODULES:
            module_dir = base / module / "internal"
            await _mkdir(module_dir)
            self._report(module_dir)

    # -- Progress ----------------------------------------------------------

    def _report(self, path: Path) -> None:
        if self.on_progress is not None:
            self.on_progress(f"Created {path}")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def _mkdir(path: Path) -> None:
    try:
        await asyncio.to_thread(path.mkdir, parents=True, exist_ok=True)
    except OSError as exc:
        raise translate_os_error(exc, path) from exc
