from __future__ import annotations

import json
import os
import re
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir

from .models import Settings, Timeouts

APP_NAME = "pyquarto"

_ENV_PATTERN = re.compile(r"\$\{(\w+)\}")

_STR_FIELDS = (
    "quarto_bin",
    "r_bin",
    "git_bin",
    "github_api_url",
    "openai_base_url",
    "openai_chat_model",
    "openai_image_model",
    "github_token_env",
    "default_branch",
)
_BOOL_FIELDS = ("confine_paths", "journal", "quiet")


def _project_candidate_paths(cwd: Path) -> list[Path]:
    # the hidden file wins when both exist
    return [cwd / ".pyquarto.json", cwd / "pyquarto.json"]


def _global_candidate_paths() -> list[Path]:
    return [Path(user_config_dir(APP_NAME)) / "pyquarto.json"]


def _read_layer(p: Path) -> dict[str, Any] | None:
    """A settings file as a mapping; missing, unreadable or non-object files give None."""
    if not p.is_file():
        return None
    try:
        obj = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return None
    return obj if isinstance(obj, dict) else None


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(value, dict) and isinstance(current, dict):
            merged[key] = _deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def _layers(cwd: Path, explicit_path: Path | None) -> list[tuple[Path, dict[str, Any]]]:
    """Readable settings files, lowest priority first."""
    layers: list[tuple[Path, dict[str, Any]]] = []
    for p in _global_candidate_paths():
        data = _read_layer(p)
        if data is not None:
            layers.append((p, data))
    for p in _project_candidate_paths(cwd):
        data = _read_layer(p)
        if data is not None:
            layers.append((p, data))
            break
    if explicit_path is not None:
        p = explicit_path.expanduser().resolve()
        data = _read_layer(p)
        if data is not None:
            layers.append((p, data))
    return layers


def _expand_env_placeholders(s: str) -> str:
    # unset variables expand to an empty string
    return _ENV_PATTERN.sub(lambda m: os.getenv(m.group(1), ""), s)


def load_settings(*, cwd: Path, explicit_path: Path | None = None) -> Settings:
    """Merge global, project and explicit settings files (later wins) into ``Settings``."""
    merged: dict[str, Any] = {}
    loaded_from: Path | None = None
    for path, data in _layers(cwd, explicit_path):
        merged = _deep_merge(merged, data)
        loaded_from = path

    cfg = Settings()
    cfg.loaded_from = loaded_from

    for name in _STR_FIELDS:
        v = merged.get(name)
        if isinstance(v, str) and v.strip():
            v = _expand_env_placeholders(v.strip())
            if v:
                setattr(cfg, name, v)

    for name in _BOOL_FIELDS:
        v = merged.get(name)
        if isinstance(v, bool):
            setattr(cfg, name, v)

    mp = merged.get("manifest_path")
    if isinstance(mp, str) and mp.strip():
        cfg.manifest_path = (cwd / _expand_env_placeholders(mp.strip())).expanduser()

    cfg.timeouts = Timeouts.from_obj(merged.get("timeouts"))
    return cfg
