"""Placeholder template rendering for project scaffolding.

Templates are plain text files with three kinds of markup:

* ``{{key}}`` -- replaced with the text of ``context[key]``.
* ``{{#if key}}...{{/if}}`` / ``{{#if !key}}...{{/if}}`` -- the body is kept
  when the (possibly negated) context value is truthy.
* ``{{#each key}}...{{item}}...{{/each}}`` -- the body is repeated once per
  element of the list ``context[key]``.

Each kind is resolved by its own regex pass over the whole text, in the fixed
order conditionals, iteration, interpolation.  Bodies kept by an earlier pass
are therefore expanded by the later ones.  Blocks do not nest: matching is
non-greedy and the first closing marker ends the block, so a ``{{#if}}``
inside another ``{{#if}}`` (or an ``{{#each}}`` inside an ``{{#each}}``) is
unsupported and renders unpredictably.
"""

from __future__ import annotations

import asyncio
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from spring_scaffold.errors import TemplateKeyError, translate_os_error


# ---------------------------------------------------------------------------
# Markup grammar
# ---------------------------------------------------------------------------

_IF_RE = re.compile(r"\{\{#if (!?)(\w+)\}\}(.*?)\{\{/if\}\}", re.DOTALL | re.ASCII)
_EACH_RE = re.compile(r"\{\{#each (\w+)\}\}(.*?)\{\{/each\}\}", re.DOTALL | re.ASCII)
_VAR_RE = re.compile(r"\{\{(\w+)\}\}", re.ASCII)
_ITEM_MARKER = "{{item}}"

TEMPLATE_SUFFIX = ".template"

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# Value coercion
# ---------------------------------------------------------------------------


def is_truthy(value: Any) -> bool:
    """Truthiness used by ``{{#if}}`` blocks.

    ``False``, ``None``, numeric zero and the empty string are falsy.
    Everything else is truthy -- including empty lists, which differs from
    Python's own ``bool()``.
    """
    if value is None or value is False:
        return False
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value != 0
    if isinstance(value, str):
        return value != ""
    return True


def to_text(value: Any) -> str:
    """Convert a context value to the text inserted into a template."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


# ---------------------------------------------------------------------------
# Rendering passes
# ---------------------------------------------------------------------------


def _lookup(context: Mapping[str, Any], key: str, strict: bool, template: str | None) -> Any:
    if strict and key not in context:
        raise TemplateKeyError(key, template)
    return context.get(key)


def _resolve_conditionals(
    source: str, context: Mapping[str, Any], strict: bool, template: str | None
) -> str:
    def replacer(match: re.Match[str]) -> str:
        negate, key, body = match.groups()
        value = is_truthy(_lookup(context, key, strict, template))
        if negate:
            value = not value
        return body if value else ""

    return _IF_RE.sub(replacer, source)


def _expand_iterations(
    source: str, context: Mapping[str, Any], strict: bool, template: str | None
) -> str:
    def replacer(match: re.Match[str]) -> str:
        key, body = match.groups()
        items = _lookup(context, key, strict, template)
        if not isinstance(items, (list, tuple)):
            return ""
        return "".join(body.replace(_ITEM_MARKER, to_text(item)) for item in items)

    return _EACH_RE.sub(replacer, source)


def _interpolate(
    source: str, context: Mapping[str, Any], strict: bool, template: str | None
) -> str:
    def replacer(match: re.Match[str]) -> str:
        return to_text(_lookup(context, match.group(1), strict, template))

    return _VAR_RE.sub(replacer, source)


def render(
    source: str,
    context: Mapping[str, Any],
    *,
    strict: bool = False,
    template_name: str | None = None,
) -> str:
    """Render template text against a context mapping.

    Args:
        source: Template text.
        context: Values referenced by the template.
        strict: Raise ``TemplateKeyError`` for keys absent from *context*
            instead of rendering them as empty/falsy.  Keys that are present
            with a ``None`` value never raise.
        template_name: Optional name used in strict-mode error messages.

    Returns:
        The rendered text.
    """
    text = _resolve_conditionals(source, context, strict, template_name)
    text = _expand_iterations(text, context, strict, template_name)
    return _interpolate(text, context, strict, template_name)


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders ``*.template`` files from a template directory.

    The default directory is the ``templates/`` folder shipped next to this
    module, which holds one sub-directory per template set
    (``gradle-kotlin/`` and ``maven/``).
    """

    def __init__(self, template_dir: str | Path | None = None, *, strict: bool = False) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.strict = strict

    # -- Single template rendering -----------------------------------------

    def render(self, template_path: str, context: Mapping[str, Any]) -> str:
        """Read a template relative to the template directory and render it.

        Raises:
            PathNotFoundError: If the template file does not exist.
        """
        path = self.template_dir / template_path
        try:
            source = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise translate_os_error(exc, path) from exc
        return render(source, context, strict=self.strict, template_name=template_path)

    def render_string(self, template_string: str, context: Mapping[str, Any]) -> str:
        """Render an inline template string with the provided context."""
        return render(template_string, context, strict=self.strict)

    def exists(self, template_path: str) -> bool:
        return (self.template_dir / template_path).is_file()

    # -- File-based rendering (async) --------------------------------------

    async def render_to_file(
        self,
        template_path: str,
        output_path: str | Path,
        context: Mapping[str, Any],
    ) -> Path:
        """Render a template and write the result to *output_path*.

        Parent directories are created automatically.  Returns the output
        path.
        """
        content = self.render(template_path, context)
        out = Path(output_path)
        await asyncio.to_thread(_write_file, out, content)
        return out

    # -- Utility -----------------------------------------------------------

    def list_templates(self, prefix: str = "") -> list[str]:
        """Return a sorted list of all template paths under *prefix*.

        Paths are relative to the template root directory and always use
        forward slashes.
        """
        search_dir = self.template_dir / prefix if prefix else self.template_dir
        if not search_dir.is_dir():
            return []
        return sorted(
            p.relative_to(self.template_dir).as_posix()
            for p in search_dir.rglob(f"*{TEMPLATE_SUFFIX}")
        )


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _write_file(path: Path, content: str) -> None:
    """Synchronous helper: create parent dirs and write content."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise translate_os_error(exc, path) from exc
