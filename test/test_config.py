from __future__ import annotations

import json

import pytest

from pyquarto.config import loader
from pyquarto.config.loader import load_settings
from pyquarto.config.models import Settings


@pytest.fixture(autouse=True)
def no_global_config(monkeypatch):
    monkeypatch.setattr(loader, "_global_candidate_paths", lambda: [])


def test_defaults_without_files(tmp_path):
    cfg = load_settings(cwd=tmp_path)
    assert cfg == Settings()
    assert cfg.loaded_from is None


def test_project_file_with_env_placeholders(tmp_path, monkeypatch):
    monkeypatch.setenv("MY_QUARTO", "/opt/quarto/bin/quarto")
    (tmp_path / ".pyquarto.json").write_text(json.dumps({
        "quarto_bin": "${MY_QUARTO}",
        "journal": True,
        "timeouts": {"render": 10, "git": -5, "http": "fast"},
    }))
    cfg = load_settings(cwd=tmp_path)
    assert cfg.quarto_bin == "/opt/quarto/bin/quarto"
    assert cfg.journal is True
    assert cfg.timeouts.render == 10
    # invalid values keep their defaults
    assert cfg.timeouts.git == 120
    assert cfg.timeouts.http == 60
    assert cfg.loaded_from == tmp_path / ".pyquarto.json"


def test_hidden_project_file_wins(tmp_path):
    (tmp_path / ".pyquarto.json").write_text(json.dumps({"r_bin": "Rhidden"}))
    (tmp_path / "pyquarto.json").write_text(json.dumps({"r_bin": "Rplain"}))
    assert load_settings(cwd=tmp_path).r_bin == "Rhidden"


def test_explicit_file_overrides_project(tmp_path):
    (tmp_path / "pyquarto.json").write_text(json.dumps({"default_branch": "trunk", "git_bin": "git2"}))
    explicit = tmp_path / "ci.json"
    explicit.write_text(json.dumps({"default_branch": "release"}))
    cfg = load_settings(cwd=tmp_path, explicit_path=explicit)
    assert cfg.default_branch == "release"
    assert cfg.git_bin == "git2"


def test_malformed_file_is_ignored(tmp_path):
    (tmp_path / ".pyquarto.json").write_text("{ nope")
    (tmp_path / "pyquarto.json").write_text(json.dumps({"r_bin": "Rscript-ish"}))
    assert load_settings(cwd=tmp_path).r_bin == "Rscript-ish"


def test_manifest_path_is_relative_to_cwd(tmp_path):
    (tmp_path / "pyquarto.json").write_text(json.dumps({"manifest_path": "tools.json"}))
    assert load_settings(cwd=tmp_path).manifest_path == tmp_path / "tools.json"


def test_github_token_uses_env_name(monkeypatch):
    cfg = Settings(github_token_env="MY_GH")
    monkeypatch.setenv("MY_GH", "abc")
    assert cfg.github_token() == "abc"
