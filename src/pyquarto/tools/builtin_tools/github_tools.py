from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ...collaborators.github_api import GitHubClient
from ...errors import ExternalCollaboratorError, NotFoundError
from ...util.subprocess import check_cmd, run_cmd
from ..base import BaseTool, ToolContext, ToolResult, ToolSpec

_REPO_NAME = {"type": "string", "minLength": 1, "description": "Repository name owned by the token's user."}


@dataclass
class CreateRepositoryTool(BaseTool):
    spec: ToolSpec = ToolSpec(
        name="github_create_repository",
        description="Create a new GitHub repository (public or private) for the project.",
        parameters={
            "type": "object",
            "properties": {
                "repository_name": _REPO_NAME,
                "visibility": {"type": "string", "enum": ["public", "private"]},
            },
            "required": ["repository_name", "visibility"],
        },
    )

    async def execute(self, ctx: ToolContext, params: dict[str, Any]) -> ToolResult:
        name = params["repository_name"]
        visibility = params["visibility"]
        self.log(f"Creating GitHub repository: {name} ({visibility})")
        gh = GitHubClient.from_settings(ctx.settings, ctx.transport)
        repo = await gh.create_repository(
            name, private=visibility == "private", description=f"Quarto project: {name}"
        )
        self.success(f"Repository created: {repo.get('html_url')}")
        return ToolResult(
            {
                "repository_name": name,
                "repository_url": repo.get("html_url"),
                "clone_url": repo.get("clone_url"),
                "ssh_url": repo.get("ssh_url"),
                "message": "GitHub repository created successfully",
            }
        )


@dataclass
class GitPushProjectTool(BaseTool):
    spec: ToolSpec = ToolSpec(
        name="git_push_project",
        description="Stage, commit and push local Quarto project to the remote GitHub repo.",
        parameters={
            "type": "object",
            "properties": {
                "local_project_path": {"type": "string", "minLength": 1},
                "github_repo_url": {"type": "string", "minLength": 1},
                "branch": {"type": "string", "description": "Remote branch; defaults to the configured default."},
                "commit_message": {"type": "string", "default": "Initial commit from pyquarto"},
            },
            "required": ["local_project_path", "github_repo_url"],
        },
    )

    async def execute(self, ctx: ToolContext, params: dict[str, Any]) -> ToolResult:
        project = ctx.path(params["local_project_path"])
        url = params["github_repo_url"]
        branch = params.get("branch") or ctx.settings.default_branch
        message = params.get("commit_message") or "Initial commit from pyquarto"
        if not project.is_dir():
            raise NotFoundError(f"Local project path does not exist: {project}", name=str(project))

        git = ctx.settings.git_bin
        cwd = str(project)
        timeout = ctx.settings.timeouts.git
        self.log(f"Pushing {project} to {url}")

        if not (project / ".git").exists():
            self.log("Initializing git repository")
            await check_cmd([git, "init"], cwd=cwd, timeout=timeout)

        has_origin = (await run_cmd([git, "remote", "get-url", "origin"], cwd=cwd, timeout=timeout)).returncode == 0
        if has_origin:
            self.log("Remote origin already exists, updating URL")
            await check_cmd([git, "remote", "set-url", "origin", url], cwd=cwd, timeout=timeout)
        else:
            self.log("Adding remote origin")
            await check_cmd([git, "remote", "add", "origin", url], cwd=cwd, timeout=timeout)

        await check_cmd([git, "add", "."], cwd=cwd, timeout=timeout)
        diff = await run_cmd([git, "diff", "--staged", "--quiet"], cwd=cwd, timeout=timeout)
        committed = diff.returncode != 0
        if committed:
            await check_cmd([git, "commit", "-m", message], cwd=cwd, timeout=timeout)
        else:
            self.log("No changes to commit")

        await check_cmd([git, "push", "-u", "origin", f"HEAD:{branch}"], cwd=cwd, timeout=timeout)
        self.success(f"Project pushed to {url}")
        return ToolResult(
            {
                "local_project_path": cwd,
                "github_repo_url": url,
                "branch": branch,
                "committed": committed,
                "message": "Project pushed to GitHub successfully",
            }
        )


@dataclass
class CreateGhPagesBranchTool(BaseTool):
    spec: ToolSpec = ToolSpec(
        name="github_create_gh_pages_branch",
        description="Create a `gh-pages` branch (used by GitHub-Pages).",
        parameters={
            "type": "object",
            "properties": {"repository_name": _REPO_NAME},
            "required": ["repository_name"],
        },
    )

    async def execute(self, ctx: ToolContext, params: dict[str, Any]) -> ToolResult:
        repo = params["repository_name"]
        self.log(f"Creating gh-pages branch for {repo}")
        gh = GitHubClient.from_settings(ctx.settings, ctx.transport)
        owner = (await gh.authenticated_user())["login"]

        if await gh.get_branch(owner, repo, "gh-pages") is not None:
            self.log("gh-pages branch already exists")
            return ToolResult(
                {"repository_name": repo, "branch_name": "gh-pages", "created": False,
                 "message": "gh-pages branch already exists"}
            )

        base = ctx.settings.default_branch
        source = await gh.get_branch(owner, repo, base)
        if source is None:
            raise NotFoundError(f"Branch '{base}' not found in {owner}/{repo}", name=base)
        await gh.create_ref(owner, repo, "refs/heads/gh-pages", source["commit"]["sha"])
        self.success(f"gh-pages branch created for {repo}")
        return ToolResult(
            {"repository_name": repo, "branch_name": "gh-pages", "created": True,
             "message": "gh-pages branch created successfully"}
        )


@dataclass
class ConfigurePagesSourceTool(BaseTool):
    spec: ToolSpec = ToolSpec(
        name="github_pages_configure_deployment_source",
        description="Tell GitHub-Pages to serve from `gh-pages` branch /root folder.",
        parameters={
            "type": "object",
            "properties": {
                "repository_name": _REPO_NAME,
                "branch_name": {"type": "string", "default": "gh-pages"},
            },
            "required": ["repository_name"],
        },
    )

    async def execute(self, ctx: ToolContext, params: dict[str, Any]) -> ToolResult:
        repo = params["repository_name"]
        branch = params.get("branch_name") or "gh-pages"
        self.log(f"Configuring GitHub Pages for {repo}")
        gh = GitHubClient.from_settings(ctx.settings, ctx.transport)
        owner = (await gh.authenticated_user())["login"]
        pages_url = f"https://{owner}.github.io/{repo}/"
        try:
            await gh.create_pages_site(owner, repo, branch)
        except ExternalCollaboratorError as e:
            if e.status_code == 409 or "already" in str(e).lower():
                self.log("GitHub Pages already configured")
                return ToolResult(
                    {"repository_name": repo, "branch_name": branch, "pages_url": pages_url,
                     "message": "GitHub Pages already configured"}
                )
            raise
        self.success(f"GitHub Pages configured for {repo}")
        return ToolResult(
            {"repository_name": repo, "branch_name": branch, "pages_url": pages_url,
             "message": "GitHub Pages deployment configured"}
        )
