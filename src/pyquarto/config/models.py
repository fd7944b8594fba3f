from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass
class Timeouts:
    """Seconds allowed for each kind of external call."""

    render: int = 300
    install: int = 300
    snapshot: int = 120
    status: int = 60
    git: int = 120
    http: int = 60

    @staticmethod
    def from_obj(obj: Any) -> "Timeouts":
        t = Timeouts()
        if not isinstance(obj, dict):
            return t
        for name in ("render", "install", "snapshot", "status", "git", "http"):
            v = obj.get(name)
            if isinstance(v, (int, float)) and not isinstance(v, bool) and v > 0:
                setattr(t, name, int(v))
        return t


@dataclass
class Settings:
    """Settings loaded from pyquarto.json files.

    Only collaborators (subprocesses, HTTP clients) consume these; the
    registry and the document engine never look at them.
    """

    quarto_bin: str = "quarto"
    r_bin: str = "R"
    git_bin: str = "git"
    github_api_url: str = "https://api.github.com"
    openai_base_url: str = "https://api.openai.com/v1"
    openai_chat_model: str = "gpt-4"
    openai_image_model: str = "dall-e-3"
    github_token_env: str = "GITHUB_TOKEN"
    default_branch: str = "main"
    confine_paths: bool = False
    journal: bool = False
    quiet: bool = False
    manifest_path: Path | None = None
    timeouts: Timeouts = field(default_factory=Timeouts)

    loaded_from: Path | None = None

    def github_token(self) -> str | None:
        return os.getenv(self.github_token_env) or None

