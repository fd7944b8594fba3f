from __future__ import annotations

import json

import httpx
import pytest

from pyquarto.config.models import Settings
from pyquarto.errors import ExternalCollaboratorError, NotFoundError
from pyquarto.tools.base import ToolContext


class FakeGitHub:
    """Route table standing in for api.github.com."""

    def __init__(self, routes):
        self.routes = routes
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        assert request.headers["Authorization"] == "Bearer test-token"
        key = (request.method, request.url.path)
        if key not in self.routes:
            return httpx.Response(404, json={"message": "Not Found"})
        status, body = self.routes[key]
        return httpx.Response(status, json=body)

    def body_of(self, method: str, path: str):
        for r in self.requests:
            if r.method == method and r.url.path == path:
                return json.loads(r.content) if r.content else None
        raise AssertionError(f"no {method} {path}")


@pytest.fixture(autouse=True)
def github_token(monkeypatch):
    monkeypatch.setenv("GITHUB_TOKEN", "test-token")


def _ctx(tmp_path, fake) -> ToolContext:
    return ToolContext(cwd=str(tmp_path), settings=Settings(), transport=httpx.MockTransport(fake))


async def run(registry, ctx, name, **params):
    return (await registry.execute(name, params, ctx)).to_dict()


@pytest.mark.asyncio
async def test_create_repository(registry, tmp_path):
    fake = FakeGitHub({
        ("POST", "/user/repos"): (201, {
            "html_url": "https://github.com/octo/site",
            "clone_url": "https://github.com/octo/site.git",
            "ssh_url": "git@github.com:octo/site.git",
        }),
    })
    out = await run(registry, _ctx(tmp_path, fake), "github_create_repository", repository_name="site", visibility="private")
    assert out["repository_url"] == "https://github.com/octo/site"
    assert fake.body_of("POST", "/user/repos") == {
        "name": "site", "private": True, "auto_init": False, "description": "Quarto project: site",
    }


@pytest.mark.asyncio
async def test_create_repository_without_token(registry, tmp_path, monkeypatch):
    monkeypatch.delenv("GITHUB_TOKEN")
    fake = FakeGitHub({})
    with pytest.raises(ExternalCollaboratorError) as exc:
        await run(registry, _ctx(tmp_path, fake), "github_create_repository", repository_name="site", visibility="public")
    assert "GITHUB_TOKEN" in str(exc.value)
    assert fake.requests == []


@pytest.mark.asyncio
async def test_create_repository_http_error(registry, tmp_path):
    fake = FakeGitHub({("POST", "/user/repos"): (422, {"message": "name already exists on this account"})})
    with pytest.raises(ExternalCollaboratorError) as exc:
        await run(registry, _ctx(tmp_path, fake), "github_create_repository", repository_name="site", visibility="public")
    assert exc.value.status_code == 422
    assert "name already exists" in str(exc.value)


@pytest.mark.asyncio
async def test_create_gh_pages_branch_from_default_branch(registry, tmp_path):
    fake = FakeGitHub({
        ("GET", "/user"): (200, {"login": "octo"}),
        ("GET", "/repos/octo/site/branches/main"): (200, {"commit": {"sha": "abc123"}}),
        ("POST", "/repos/octo/site/git/refs"): (201, {"ref": "refs/heads/gh-pages"}),
    })
    out = await run(registry, _ctx(tmp_path, fake), "github_create_gh_pages_branch", repository_name="site")
    assert out["created"] is True
    assert fake.body_of("POST", "/repos/octo/site/git/refs") == {"ref": "refs/heads/gh-pages", "sha": "abc123"}


@pytest.mark.asyncio
async def test_create_gh_pages_branch_already_exists(registry, tmp_path):
    fake = FakeGitHub({
        ("GET", "/user"): (200, {"login": "octo"}),
        ("GET", "/repos/octo/site/branches/gh-pages"): (200, {"commit": {"sha": "def"}}),
    })
    out = await run(registry, _ctx(tmp_path, fake), "github_create_gh_pages_branch", repository_name="site")
    assert out["created"] is False
    assert all(r.method == "GET" for r in fake.requests)


@pytest.mark.asyncio
async def test_create_gh_pages_branch_missing_base(registry, tmp_path):
    fake = FakeGitHub({("GET", "/user"): (200, {"login": "octo"})})
    with pytest.raises(NotFoundError) as exc:
        await run(registry, _ctx(tmp_path, fake), "github_create_gh_pages_branch", repository_name="site")
    assert exc.value.name == "main"


@pytest.mark.asyncio
async def test_configure_pages_source(registry, tmp_path):
    fake = FakeGitHub({
        ("GET", "/user"): (200, {"login": "octo"}),
        ("POST", "/repos/octo/site/pages"): (201, {"url": "x"}),
    })
    out = await run(registry, _ctx(tmp_path, fake), "github_pages_configure_deployment_source", repository_name="site")
    assert out["pages_url"] == "https://octo.github.io/site/"
    assert fake.body_of("POST", "/repos/octo/site/pages") == {"source": {"branch": "gh-pages", "path": "/"}}


@pytest.mark.asyncio
async def test_configure_pages_source_already_enabled(registry, tmp_path):
    fake = FakeGitHub({
        ("GET", "/user"): (200, {"login": "octo"}),
        ("POST", "/repos/octo/site/pages"): (409, {"message": "GitHub Pages is already enabled."}),
    })
    out = await run(registry, _ctx(tmp_path, fake), "github_pages_configure_deployment_source", repository_name="site")
    assert out["success"] is True
    assert out["message"] == "GitHub Pages already configured"


@pytest.mark.asyncio
async def test_monitor_workflow_live(registry, tmp_path):
    fake = FakeGitHub({
        ("GET", "/repos/octo/site/actions/runs/42"): (200, {
            "id": 42, "status": "completed", "conclusion": "failure", "html_url": "https://github.com/octo/site/actions/runs/42",
        }),
        ("GET", "/repos/octo/site/actions/runs/42/jobs"): (200, {"jobs": [
            {"id": 1, "name": "build", "status": "completed", "conclusion": "failure",
             "steps": [{"name": "Render", "status": "completed", "conclusion": "failure"}]},
        ]}),
    })
    out = await run(
        registry, _ctx(tmp_path, fake), "github_actions_monitor_workflow", workflow_run_id="42", repository="octo/site"
    )
    assert out["status"]["conclusion"] == "failure"
    assert out["status"]["jobs"][0]["steps"] == [{"name": "Render", "status": "completed", "conclusion": "failure"}]


@pytest.mark.asyncio
async def test_rerun_workflow_live_and_offline(registry, tmp_path, monkeypatch):
    fake = FakeGitHub({("POST", "/repos/octo/site/actions/runs/42/rerun"): (201, {})})
    out = await run(
        registry, _ctx(tmp_path, fake), "github_actions_rerun_workflow", workflow_run_id=42, repository="octo/site"
    )
    assert out["rerun_requested"] is True

    monkeypatch.delenv("GITHUB_TOKEN")
    out = await run(
        registry, _ctx(tmp_path, fake), "github_actions_rerun_workflow", workflow_run_id=42, repository="octo/site"
    )
    assert out["rerun_requested"] is False
    assert out["cli_command"] == "gh run rerun 42"
    assert len(fake.requests) == 1


def test_repository_pattern_is_validated(registry):
    result = registry.validate("github_actions_monitor_workflow", {"workflow_run_id": "1", "repository": "not a repo"})
    assert not result.valid
