from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional

from ..errors import DuplicateToolError, NotFoundError, ValidationError
from .base import Tool, ToolContext, ToolResult, ToolSpec
from .validation import ValidationResult


@dataclass
class ManifestReport:
    complete: bool
    missing: list[str]
    extra: list[str]
    implemented: int
    defined: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "complete": self.complete,
            "missing": list(self.missing),
            "extra": list(self.extra),
            "implemented": self.implemented,
            "defined": self.defined,
        }


@dataclass
class ToolRegistry:
    """Name -> tool mapping with a validate-then-execute dispatch.

    Built once by an explicit builder; nothing mutates it while tools run.
    """

    _tools: Dict[str, Tool] = field(default_factory=dict)

    def register(self, tool: Tool) -> None:
        name = tool.spec.name
        if name in self._tools:
            raise DuplicateToolError(f"Tool already registered: {name}")
        self._tools[name] = tool

    def get(self, name: str) -> Tool:
        if name not in self._tools:
            raise NotFoundError(f"Tool '{name}' not found", name=name)
        return self._tools[name]

    def get_optional(self, name: str) -> Optional[Tool]:
        """Return a tool if registered, otherwise None."""
        return self._tools.get(name)

    def names(self) -> list[str]:
        return list(self._tools.keys())

    def list_specs(self) -> list[ToolSpec]:
        return [t.spec for t in self._tools.values()]

    def validate(self, name: str, params: Any) -> ValidationResult:
        """Pre-flight ``params`` for ``name`` without running anything."""
        return self.get(name).validate_params(params)

    async def execute(self, name: str, params: Any, ctx: ToolContext) -> ToolResult:
        tool = self.get(name)
        result = tool.validate_params(params)
        if not result.valid:
            raise ValidationError(name, result.errors)
        # params are handed over verbatim; defaults belong to the tool
        return await tool.execute(ctx, params)

    def validate_against_manifest(self, manifest_names: Iterable[str]) -> ManifestReport:
        defined = list(dict.fromkeys(manifest_names))
        implemented = self.names()
        missing = [n for n in defined if n not in self._tools]
        defined_set = set(defined)
        extra = [n for n in implemented if n not in defined_set]
        return ManifestReport(
            complete=not missing,
            missing=missing,
            extra=extra,
            implemented=len(implemented),
            defined=len(defined),
        )
