from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol

import httpx
from rich.console import Console
from rich.markup import escape

from ..config.models import Settings
from ..util.fs import resolve_path
from .validation import ValidationResult, validate_params

# stdout is reserved for results; tool chatter goes to stderr
console = Console(stderr=True)


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    parameters: dict[str, Any]   # JSONSchema (draft 7)


class Tool(Protocol):
    spec: ToolSpec
    def validate_params(self, params: Any) -> ValidationResult: ...
    async def execute(self, ctx: "ToolContext", params: dict[str, Any]) -> "ToolResult": ...


@dataclass
class ToolResult:
    data: dict[str, Any] = field(default_factory=dict)
    # files written by the tool, absolute paths
    touched: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"success": True, **self.data}
        if self.touched:
            out["paths_touched"] = list(self.touched)
        return out


@dataclass
class ToolContext:
    cwd: str
    settings: Settings = field(default_factory=Settings)
    # injected by tests to fake HTTP collaborators
    transport: httpx.AsyncBaseTransport | None = None

    def path(self, path_str: str) -> Path:
        return resolve_path(Path(self.cwd), path_str, confine=self.settings.confine_paths)


class BaseTool:
    """Shared behaviour for built-in tools: schema validation and console logging."""

    spec: ToolSpec
    quiet: bool = False

    def validate_params(self, params: Any) -> ValidationResult:
        return validate_params(self.spec.parameters, params)

    async def execute(self, ctx: ToolContext, params: dict[str, Any]) -> ToolResult:
        raise NotImplementedError(f"{type(self).__name__}.execute")

    def log(self, message: str) -> None:
        if not self.quiet:
            console.print(f"[blue]\\[{self.spec.name}][/blue] {escape(message)}")

    def error(self, message: str) -> None:
        if not self.quiet:
            console.print(f"[red]\\[{self.spec.name}] ERROR:[/red] {escape(message)}")

    def success(self, message: str) -> None:
        if not self.quiet:
            console.print(f"[green]\\[{self.spec.name}] SUCCESS:[/green] {escape(message)}")
