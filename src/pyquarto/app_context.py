from __future__ import annotations

import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import httpx

from .config.loader import load_settings
from .config.models import Settings
from .events.store import EventStore
from .tools.base import ToolContext
from .tools.builtin import build_registry
from .tools.manifest import load_manifest
from .tools.registry import ManifestReport, ToolRegistry


@dataclass
class Toolkit:
    """Registry plus the context every dispatch runs in."""

    cwd: Path
    settings: Settings
    tools: ToolRegistry
    events: EventStore | None = None
    transport: httpx.AsyncBaseTransport | None = None

    @staticmethod
    def from_env(
        cwd: Path,
        *,
        config_path: Path | None = None,
        quiet: bool = False,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "Toolkit":
        cwd = cwd.expanduser().resolve()
        settings = load_settings(cwd=cwd, explicit_path=config_path)
        if quiet:
            settings.quiet = True
        return Toolkit(
            cwd=cwd,
            settings=settings,
            tools=build_registry(quiet=settings.quiet),
            events=EventStore.open() if settings.journal else None,
            transport=transport,
        )

    def context(self) -> ToolContext:
        return ToolContext(cwd=str(self.cwd), settings=self.settings, transport=self.transport)

    async def execute(self, name: str, params: Any) -> dict[str, Any]:
        """Validate and run one tool; returns the result mapping (``success`` first)."""
        started = time.monotonic()
        try:
            result = await self.tools.execute(name, params, self.context())
        except Exception as e:
            self._record(name, started, error=str(e))
            raise
        self._record(name, started)
        return result.to_dict()

    def _record(self, name: str, started: float, error: str | None = None) -> None:
        if self.events is None:
            return
        self.events.record(
            name, ok=error is None, duration_ms=int((time.monotonic() - started) * 1000), error=error
        )

    def list_tool_names(self) -> list[str]:
        return self.tools.names()

    def validate_against_manifest(self) -> ManifestReport:
        entries = load_manifest(self.settings.manifest_path)
        return self.tools.validate_against_manifest(e.name for e in entries)
