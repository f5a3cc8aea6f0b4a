"""Docker Compose file generation.

Renders ``compose.yaml`` for the generated project so Spring Boot's Docker
Compose support can start the chosen database alongside the application.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from .templates import TemplateRenderer


class ComposeGenerator:
    """Generates the project's ``compose.yaml``."""

    TEMPLATE_NAME = "compose.yaml.template"
    OUTPUT_NAME = "compose.yaml"
    FALLBACK_SET = "gradle-kotlin"

    def __init__(self, renderer: TemplateRenderer) -> None:
        self.renderer = renderer

    async def generate(
        self,
        output_dir: Path,
        template_set: str,
        context: dict[str, Any],
    ) -> Path:
        """Render ``compose.yaml`` into *output_dir*.

        Args:
            output_dir: Project root directory.
            template_set: Active template set; the Gradle set's template is
                used when the set has none of its own.
            context: Template rendering context.

        Returns:
            Path of the written file.
        """
        template = f"{template_set}/{self.TEMPLATE_NAME}"
        if not self.renderer.exists(template):
            template = f"{self.FALLBACK_SET}/{self.TEMPLATE_NAME}"
        return await self.renderer.render_to_file(
            template, output_dir / self.OUTPUT_NAME, context
        )
