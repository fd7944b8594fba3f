from __future__ import annotations

import json
import time
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from platformdirs import user_data_dir

from ..config.loader import APP_NAME


def _events_dir(root: Path | None = None) -> Path:
    d = (root or Path(user_data_dir(APP_NAME))) / "events"
    d.mkdir(parents=True, exist_ok=True)
    return d


@dataclass
class Invocation:
    ts: float
    tool: str
    ok: bool
    duration_ms: int
    error: str | None = None


@dataclass
class EventStore:
    """Append-only jsonl journal of tool invocations, one file per day."""

    path: Path

    @staticmethod
    def open(root: Path | None = None) -> "EventStore":
        day = time.strftime("%Y-%m-%d")
        return EventStore(path=_events_dir(root) / f"{day}.jsonl")

    def record(self, tool: str, *, ok: bool, duration_ms: int, error: str | None = None) -> None:
        ev = Invocation(ts=time.time(), tool=tool, ok=ok, duration_ms=duration_ms, error=error)
        with self.path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(asdict(ev), ensure_ascii=False) + "\n")

    def iter_invocations(self) -> list[Invocation]:
        if not self.path.exists():
            return []
        out: list[Invocation] = []
        for line in self.path.read_text(encoding="utf-8", errors="replace").splitlines():
            if not line.strip():
                continue
            try:
                obj: dict[str, Any] = json.loads(line)
            except json.JSONDecodeError:
                # a torn final line from a crashed writer
                continue
            out.append(
                Invocation(
                    ts=float(obj.get("ts", 0.0)),
                    tool=str(obj.get("tool")),
                    ok=bool(obj.get("ok")),
                    duration_ms=int(obj.get("duration_ms", 0)),
                    error=obj.get("error"),
                )
            )
        return out
