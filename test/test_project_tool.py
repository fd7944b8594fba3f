from __future__ import annotations

import shutil

import pytest

from pyquarto.config.models import Settings
from pyquarto.documents.frontmatter import parse_front_matter
from pyquarto.documents.yaml_file import load_yaml_mapping
from pyquarto.errors import ExternalCollaboratorError
from pyquarto.tools.base import ToolContext


async def run(registry, ctx, name, **params):
    return (await registry.execute(name, params, ctx)).to_dict()


@pytest.mark.asyncio
async def test_create_project_without_git_or_renv(registry, ctx, tmp_path):
    out = await run(
        registry, ctx, "quarto_create_project_with_renv_and_git",
        project_directory_name="my-site", create_git_repo=False, use_renv=False,
    )
    project = tmp_path / "my-site"
    assert out["project_path"] == str(project)
    config = load_yaml_mapping(project / "_quarto.yml")
    assert config["project"] == {"type": "website"}
    assert config["website"]["title"] == "my-site"
    assert parse_front_matter((project / "index.qmd").read_text()).header == {"title": "my-site"}
    readme = (project / "README.md").read_text()
    assert "renv::restore" not in readme
    assert "1. Render the project" in readme
    assert not (project / ".gitignore").exists()


@pytest.mark.asyncio
async def test_create_project_refuses_existing_directory(registry, ctx, tmp_path):
    (tmp_path / "taken").mkdir()
    with pytest.raises(FileExistsError):
        await run(
            registry, ctx, "quarto_create_project_with_renv_and_git",
            project_directory_name="taken", create_git_repo=False, use_renv=False,
        )


@pytest.mark.asyncio
@pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")
async def test_create_project_with_git(registry, ctx, tmp_path):
    out = await run(
        registry, ctx, "quarto_create_project_with_renv_and_git",
        project_directory_name="with-git", create_git_repo=True, use_renv=False,
    )
    project = tmp_path / "with-git"
    assert (project / ".git").is_dir()
    assert ".Renviron" in (project / ".gitignore").read_text()
    assert str(project / ".gitignore") in out["paths_touched"]


@pytest.mark.asyncio
async def test_failed_scaffold_is_removed(registry, tmp_path):
    settings = Settings(git_bin="pyquarto-no-such-git-binary")
    ctx = ToolContext(cwd=str(tmp_path), settings=settings)
    with pytest.raises(ExternalCollaboratorError) as exc:
        await run(
            registry, ctx, "quarto_create_project_with_renv_and_git",
            project_directory_name="broken", create_git_repo=True, use_renv=False,
        )
    assert "not found" in str(exc.value)
    assert not (tmp_path / "broken").exists()


@pytest.mark.asyncio
async def test_create_project_requires_flags(registry, ctx):
    result = registry.validate("quarto_create_project_with_renv_and_git", {"project_directory_name": "x"})
    assert result.errors == ["create_git_repo is required", "use_renv is required"]


@pytest.mark.asyncio
@pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")
async def test_git_push_project_to_local_remote(registry, ctx, tmp_path, monkeypatch):
    import subprocess

    for var in ("GIT_AUTHOR_NAME", "GIT_COMMITTER_NAME"):
        monkeypatch.setenv(var, "pyquarto tests")
    for var in ("GIT_AUTHOR_EMAIL", "GIT_COMMITTER_EMAIL"):
        monkeypatch.setenv(var, "tests@example.com")
    remote = tmp_path / "remote.git"
    subprocess.run(["git", "init", "--bare", str(remote)], check=True, capture_output=True)

    await run(
        registry, ctx, "quarto_create_project_with_renv_and_git",
        project_directory_name="pushme", create_git_repo=True, use_renv=False,
    )
    out = await run(
        registry, ctx, "git_push_project",
        local_project_path="pushme", github_repo_url=str(remote), commit_message="first",
    )
    assert out["committed"] is True
    assert out["branch"] == "main"
    log = subprocess.run(
        ["git", "--git-dir", str(remote), "log", "--format=%s", "main"], check=True, capture_output=True, text=True
    )
    assert log.stdout.strip() == "first"

    # nothing new to commit, push still succeeds
    out = await run(registry, ctx, "git_push_project", local_project_path="pushme", github_repo_url=str(remote))
    assert out["committed"] is False


@pytest.mark.asyncio
async def test_git_push_missing_project(registry, ctx):
    from pyquarto.errors import NotFoundError

    with pytest.raises(NotFoundError):
        await run(registry, ctx, "git_push_project", local_project_path="nope", github_repo_url="x")


@pytest.mark.asyncio
async def test_external_binaries_missing(registry, tmp_path):
    settings = Settings(r_bin="pyquarto-no-such-R", quarto_bin="pyquarto-no-such-quarto")
    ctx = ToolContext(cwd=str(tmp_path), settings=settings)
    with pytest.raises(ExternalCollaboratorError) as exc:
        await run(registry, ctx, "r_package_renv_install_package", package_name="dplyr")
    assert exc.value.collaborator == "pyquarto-no-such-R"
    with pytest.raises(ExternalCollaboratorError):
        await run(registry, ctx, "r_package_renv_status")
    with pytest.raises(ExternalCollaboratorError):
        await run(registry, ctx, "quarto_render_local")
