"""YAML encoding shared by the front-matter engine and whole-file configs.

PyYAML follows YAML 1.1, where bare ``on``/``off``/``yes``/``no`` load as
booleans. GitHub workflow files key their triggers with ``on:``, so both the
loader and the dumper here only treat true/false as booleans (YAML 1.2 rules).
"""
from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import yaml

from ..errors import NotFoundError, ParseError
from ..util.fs import read_text, write_text_atomic

_BOOL_TAG = "tag:yaml.org,2002:bool"
_BOOL_RE = re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$")


def _core_bools(cls: type) -> None:
    cls.yaml_implicit_resolvers = {
        first: [(tag, rx) for tag, rx in resolvers if tag != _BOOL_TAG]
        for first, resolvers in cls.yaml_implicit_resolvers.items()
    }
    cls.add_implicit_resolver(_BOOL_TAG, _BOOL_RE, list("tTfF"))


class _Loader(yaml.SafeLoader):
    pass


class _Dumper(yaml.SafeDumper):
    def increase_indent(self, flow: bool = False, indentless: bool = False):  # type: ignore[override]
        # indent block sequences under their key, like the reference YAML tools do
        return super().increase_indent(flow, False)


_core_bools(_Loader)
_core_bools(_Dumper)


def load_yaml(text: str, *, source: str | None = None, line_offset: int = 0) -> Any:
    """Parse YAML text. ``line_offset`` shifts reported line numbers (1-based)."""
    try:
        return yaml.load(text, Loader=_Loader)
    except yaml.YAMLError as e:
        mark = getattr(e, "problem_mark", None)
        problem = getattr(e, "problem", None) or str(e)
        n_lines = max(1, text.count("\n") + 1)
        if mark is not None:
            line = line_offset + mark.line + 1
            raise ParseError(f"invalid YAML: {problem}", source=source, line_start=line, line_end=line) from e
        raise ParseError(
            f"invalid YAML: {problem}", source=source, line_start=line_offset + 1, line_end=line_offset + n_lines
        ) from e


def dump_yaml(data: Any) -> str:
    """Block-style YAML keeping mapping insertion order. Empty mappings dump to ''."""
    if data is None or (isinstance(data, dict) and not data):
        return ""
    return yaml.dump(
        data,
        Dumper=_Dumper,
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
        width=4096,
    )


def load_yaml_mapping(path: Path, *, missing_ok: bool = False) -> dict[str, Any]:
    if not path.exists():
        if missing_ok:
            return {}
        raise NotFoundError(f"File not found: {path}", name=str(path))
    data = load_yaml(read_text(path), source=str(path))
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ParseError(f"expected a YAML mapping at top level, got {type(data).__name__}", source=str(path))
    return data


def write_yaml_mapping(path: Path, data: dict[str, Any]) -> str:
    content = dump_yaml(data)
    write_text_atomic(path, content)
    return content


def child_mapping(parent: dict[str, Any], key: str) -> dict[str, Any]:
    """Return ``parent[key]``, replacing it with an empty mapping when it is not one."""
    child = parent.get(key)
    if not isinstance(child, dict):
        child = {}
        parent[key] = child
    return child
