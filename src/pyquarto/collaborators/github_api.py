from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

from ..config.models import Settings
from ..errors import ExternalCollaboratorError


@dataclass
class GitHubClient:
    """Thin async wrapper over the GitHub REST endpoints used by the tools."""

    token: str
    base_url: str = "https://api.github.com"
    timeout: float = 60
    transport: httpx.AsyncBaseTransport | None = None

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }

    async def _request(self, method: str, path: str, json: Any = None) -> httpx.Response:
        if not self.token:
            raise ExternalCollaboratorError("github", "Missing GitHub token")
        url = self.base_url.rstrip("/") + path
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                return await client.request(method, url, json=json, headers=self._headers())
        except httpx.HTTPError as e:
            raise ExternalCollaboratorError("github", f"{method} {path} failed: {e}") from e

    async def _call(self, method: str, path: str, json: Any = None) -> Any:
        resp = await self._request(method, path, json)
        if resp.status_code >= 400:
            message = resp.text
            try:
                message = resp.json().get("message", message)
            except ValueError:
                pass
            raise ExternalCollaboratorError(
                "github",
                f"{method} {path} returned HTTP {resp.status_code}: {message}",
                status_code=resp.status_code,
                detail=resp.text,
            )
        if not resp.content:
            return {}
        return resp.json()

    async def authenticated_user(self) -> dict[str, Any]:
        return await self._call("GET", "/user")

    async def create_repository(self, name: str, *, private: bool, description: str = "") -> dict[str, Any]:
        return await self._call(
            "POST",
            "/user/repos",
            {"name": name, "private": private, "auto_init": False, "description": description},
        )

    async def get_branch(self, owner: str, repo: str, branch: str) -> dict[str, Any] | None:
        """Branch details, or None when the branch does not exist."""
        try:
            return await self._call("GET", f"/repos/{owner}/{repo}/branches/{branch}")
        except ExternalCollaboratorError as e:
            if e.status_code == 404:
                return None
            raise

    async def create_ref(self, owner: str, repo: str, ref: str, sha: str) -> dict[str, Any]:
        return await self._call("POST", f"/repos/{owner}/{repo}/git/refs", {"ref": ref, "sha": sha})

    async def create_pages_site(self, owner: str, repo: str, branch: str, path: str = "/") -> dict[str, Any]:
        return await self._call(
            "POST", f"/repos/{owner}/{repo}/pages", {"source": {"branch": branch, "path": path}}
        )

    async def get_workflow_run(self, repository: str, run_id: str) -> dict[str, Any]:
        return await self._call("GET", f"/repos/{repository}/actions/runs/{run_id}")

    async def list_run_jobs(self, repository: str, run_id: str) -> list[dict[str, Any]]:
        obj = await self._call("GET", f"/repos/{repository}/actions/runs/{run_id}/jobs")
        return list(obj.get("jobs") or [])

    async def rerun_workflow(self, repository: str, run_id: str) -> None:
        await self._call("POST", f"/repos/{repository}/actions/runs/{run_id}/rerun")

    @classmethod
    def from_settings(cls, settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> "GitHubClient":
        token = settings.github_token()
        if not token:
            raise ExternalCollaboratorError("github", f"{settings.github_token_env} environment variable is required")
        return cls(token=token, base_url=settings.github_api_url, timeout=settings.timeouts.http, transport=transport)
