from __future__ import annotations

from typing import Sequence


class PyQuartoError(Exception):
    """Base class for every error raised by pyquarto."""


class NotFoundError(PyQuartoError, LookupError):
    """Unknown tool name, or a target file/resource that does not exist."""

    def __init__(self, message: str, *, name: str | None = None):
        super().__init__(message)
        self.name = name


class DuplicateToolError(PyQuartoError, ValueError):
    pass


class ValidationError(PyQuartoError, ValueError):
    """Aggregated parameter violations for one tool invocation."""

    def __init__(self, tool: str, errors: Sequence[str]):
        self.tool = tool
        self.errors = list(errors)
        super().__init__(f"Parameter validation failed for '{tool}': {', '.join(self.errors)}")


class ParseError(PyQuartoError, ValueError):
    """Malformed YAML/JSON content. Line numbers are 1-based and inclusive."""

    def __init__(
        self,
        message: str,
        *,
        source: str | None = None,
        line_start: int | None = None,
        line_end: int | None = None,
    ):
        self.source = source
        self.line_start = line_start
        self.line_end = line_end
        where = ""
        if line_start is not None:
            where = f" (lines {line_start}-{line_end})" if line_end and line_end != line_start else f" (line {line_start})"
        prefix = f"{source}: " if source else ""
        super().__init__(f"{prefix}{message}{where}")


class ExternalCollaboratorError(PyQuartoError, RuntimeError):
    """A subprocess exited non-zero, timed out, or an HTTP call failed."""

    def __init__(
        self,
        collaborator: str,
        message: str,
        *,
        returncode: int | None = None,
        status_code: int | None = None,
        detail: str = "",
    ):
        self.collaborator = collaborator
        self.returncode = returncode
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"{collaborator}: {message}")
