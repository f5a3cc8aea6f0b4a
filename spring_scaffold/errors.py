"""Exception hierarchy for the scaffolder.

Template lookups are permissive, so the engine only raises in strict mode.
File-system failures are translated from ``OSError`` into path-carrying
``ScaffoldIOError`` subclasses so the CLI can print a friendly message
instead of a traceback.
"""

from __future__ import annotations

import errno
from pathlib import Path


class ScaffoldError(Exception):
    """Base class for every error raised by spring-scaffold."""


class ConfigError(ScaffoldError):
    """Raised when user-supplied configuration is invalid."""


class TemplateKeyError(ScaffoldError, KeyError):
    """Raised in strict mode when a template references an unknown key."""

    def __init__(self, key: str, template: str | None = None) -> None:
        self.key = key
        self.template = template
        where = f" in template {template!r}" if template else ""
        super().__init__(f"Missing context key {key!r}{where}")

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return str(self.args[0])


MissingKeyError = TemplateKeyError


class ScaffoldIOError(ScaffoldError):
    """A file-system operation failed while writing the project."""

    reason = "I/O error"

    def __init__(self, path: str | Path, detail: str = "") -> None:
        self.path = Path(path)
        self.detail = detail
        message = f"{self.reason}: {self.path}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class DestinationExistsError(ScaffoldIOError):
    reason = "Destination already exists"


class PermissionDeniedError(ScaffoldIOError):
    reason = "Permission denied"


class PathNotFoundError(ScaffoldIOError):
    reason = "Path not found"


_ERRNO_MAP: dict[int, type[ScaffoldIOError]] = {
    errno.EEXIST: DestinationExistsError,
    errno.ENOTEMPTY: DestinationExistsError,
    errno.EACCES: PermissionDeniedError,
    errno.EPERM: PermissionDeniedError,
    errno.ENOENT: PathNotFoundError,
}


def translate_os_error(exc: OSError, path: str | Path | None = None) -> ScaffoldIOError:
    """Map an ``OSError`` onto the matching ``ScaffoldIOError`` subclass.

    Args:
        exc: The original file-system error.
        path: The path being operated on.  Falls back to ``exc.filename``.

    Returns:
        A new exception instance; callers should ``raise ... from exc``.
    """
    target = path if path is not None else (exc.filename or "")
    if isinstance(exc, FileExistsError):
        cls: type[ScaffoldIOError] = DestinationExistsError
    elif isinstance(exc, PermissionError):
        cls = PermissionDeniedError
    elif isinstance(exc, FileNotFoundError):
        cls = PathNotFoundError
    else:
        cls = _ERRNO_MAP.get(exc.errno or 0, ScaffoldIOError)
    return cls(target, exc.strerror or "")
