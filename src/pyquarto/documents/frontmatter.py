"""Front matter documents: a ``---`` delimited YAML header plus an opaque body.

Only the header is interpreted. The body is carried through byte for byte,
so tools can rewrite a header without touching the Markdown below it.
"""
from __future__ import annotations

import copy
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Mapping

from ..errors import NotFoundError, ParseError
from ..util.fs import read_text, write_text_atomic
from .yaml_file import dump_yaml, load_yaml

DELIMITER = "---"


@dataclass
class FrontMatterDocument:
    header: dict[str, Any] = field(default_factory=dict)
    body: str = ""
    # whether the source text actually carried a header block
    had_header: bool = False

    def dumps(self) -> str:
        return serialize_front_matter(self.header, self.body)


def _is_delimiter(line: str) -> bool:
    return line.strip() == DELIMITER


def parse_front_matter(text: str, *, source: str | None = None) -> FrontMatterDocument:
    """Split ``text`` into header mapping and body.

    The header must open on the first non-blank line. Text with fewer than two
    delimiter lines (or with content before the first one) is all body.
    """
    lines = text.split("\n")
    start = -1
    for i, line in enumerate(lines):
        if _is_delimiter(line.lstrip("\ufeff") if i == 0 else line):
            start = i
            break
        if line.strip():
            break
    if start == -1:
        return FrontMatterDocument(header={}, body=text)

    end = -1
    for i in range(start + 1, len(lines)):
        if _is_delimiter(lines[i]):
            end = i
            break
    if end == -1:
        return FrontMatterDocument(header={}, body=text)

    header_text = "\n".join(lines[start + 1:end])
    # header region is 1-based lines start+2 .. end
    data = load_yaml(header_text, source=source, line_offset=start + 1)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ParseError(
            f"front matter must be a mapping, got {type(data).__name__}",
            source=source,
            line_start=start + 2,
            line_end=max(start + 2, end),
        )
    body = "\n".join(lines[end + 1:])
    return FrontMatterDocument(header=data, body=body, had_header=True)


def serialize_front_matter(header: Mapping[str, Any], body: str) -> str:
    return f"{DELIMITER}\n{dump_yaml(dict(header))}{DELIMITER}\n{body}"


def merge_header(header: Mapping[str, Any], updates: Mapping[str, Any]) -> dict[str, Any]:
    """Apply ``updates`` on a copy of ``header``.

    Scalars overwrite. A mapping merged onto a mapping is merged one level deep
    (siblings kept, addressed sub-keys replaced). Sequences replace wholesale;
    callers that want to append must read, concatenate and write back.
    """
    out = copy.deepcopy(dict(header))
    for key, value in updates.items():
        current = out.get(key)
        if isinstance(value, Mapping) and isinstance(current, dict):
            merged = dict(current)
            for sub_key, sub_value in value.items():
                merged[sub_key] = copy.deepcopy(sub_value)
            out[key] = merged
        else:
            out[key] = copy.deepcopy(value)
    return out


def read_front_matter(path: Path) -> FrontMatterDocument:
    if not path.exists() or not path.is_file():
        raise NotFoundError(f"File {path} does not exist", name=str(path))
    return parse_front_matter(read_text(path), source=str(path))


def update_front_matter(
    path: Path,
    updates: Mapping[str, Any] | None = None,
    mutate: Callable[[dict[str, Any]], None] | None = None,
) -> FrontMatterDocument:
    """Read, change and rewrite the header of the document at ``path``.

    The new text is built completely before anything is written, so a parse
    failure leaves the file untouched. Concurrent updates to one path race.
    """
    doc = read_front_matter(path)
    header = merge_header(doc.header, updates or {})
    if mutate is not None:
        mutate(header)
    new_doc = FrontMatterDocument(header=header, body=doc.body, had_header=True)
    write_text_atomic(path, new_doc.dumps(), mkdirs=False)
    return new_doc
