from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from ..errors import NotFoundError, ParseError

_PACKAGED = Path(__file__).resolve().parent.parent / "data" / "tools_manifest.json"


@dataclass(frozen=True)
class ManifestEntry:
    name: str
    description: str = ""


def _parse(text: str, source: str) -> list[ManifestEntry]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(f"invalid JSON: {e.msg}", source=source, line_start=e.lineno, line_end=e.lineno) from e
    if not isinstance(data, list):
        raise ParseError("tool manifest must be a JSON array", source=source)
    out: list[ManifestEntry] = []
    for item in data:
        if isinstance(item, dict) and isinstance(item.get("name"), str):
            out.append(ManifestEntry(name=item["name"], description=str(item.get("description") or "")))
    return out


def load_manifest(path: Path | None = None) -> list[ManifestEntry]:
    """Load the tool manifest: an explicit file, or the one shipped with the package."""
    if path is not None:
        if not path.exists():
            raise NotFoundError(f"Tool manifest not found: {path}", name=str(path))
        return _parse(path.read_text(encoding="utf-8"), str(path))
    return _parse(_PACKAGED.read_text(encoding="utf-8"), _PACKAGED.name)
