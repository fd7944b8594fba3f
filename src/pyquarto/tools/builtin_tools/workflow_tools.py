"""GitHub Actions workflow files, secrets and run management."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ...collaborators.github_api import GitHubClient
from ...documents.yaml_file import child_mapping, load_yaml_mapping, write_yaml_mapping
from ...generators.workflows import PUBLISH_WORKFLOW, secret_env_reference
from ...util.fs import write_text_atomic
from ..base import BaseTool, ToolContext, ToolResult, ToolSpec

_WORKFLOW_PATH = {"type": "string", "minLength": 1, "description": "Path to a .github/workflows/*.yml file."}
_RUN_ID = {"type": ["string", "integer"], "minLength": 1, "description": "Workflow run id."}
_REPOSITORY = {"type": "string", "pattern": r"^[\w.-]+/[\w.-]+$", "description": "owner/repo, enables live API calls."}


def _triggers(workflow: dict[str, Any]) -> dict[str, Any]:
    """The `on:` block as a mapping; `on: push` and `on: [push, pull_request]` are promoted."""
    on = workflow.get("on")
    if isinstance(on, dict):
        return on
    if isinstance(on, str):
        promoted: dict[str, Any] = {on: None}
    elif isinstance(on, list):
        promoted = {str(t): None for t in on}
    else:
        promoted = {}
    workflow["on"] = promoted
    return promoted


@dataclass
class ConfigurePublishingWorkflowTool(BaseTool):
    spec: ToolSpec = ToolSpec(
        name="github_actions_configure_publishing_workflow",
        description=(
            "Create `.github/workflows/publish.yml` that installs R + Quarto, restores renv, "
            "renders and deploys to GitHub-Pages on every push to main."
        ),
        parameters={
            "type": "object",
            "properties": {
                "workflow_file_path": _WORKFLOW_PATH,
                "quarto_docs_workflow_content": {"type": "string", "description": "Custom workflow YAML."},
            },
            "required": ["workflow_file_path"],
        },
    )

    async def execute(self, ctx: ToolContext, params: dict[str, Any]) -> ToolResult:
        path = ctx.path(params["workflow_file_path"])
        content = params.get("quarto_docs_workflow_content") or PUBLISH_WORKFLOW
        self.log(f"Creating GitHub Actions workflow: {path}")
        write_text_atomic(path, content)
        self.success(f"GitHub Actions workflow created: {path}")
        return ToolResult(
            {"workflow_file_path": str(path), "message": "GitHub Actions publishing workflow configured"},
            [str(path)],
        )


@dataclass
class ScheduleWorkflowTool(BaseTool):
    spec: ToolSpec = ToolSpec(
        name="github_actions_schedule_workflow",
        description="Insert a cron schedule into an existing workflow file.",
        parameters={
            "type": "object",
            "properties": {
                "workflow_yml_path": _WORKFLOW_PATH,
                "cron_expression": {
                    "type": "string",
                    "minLength": 1,
                    "pattern": r"^\s*\S+(\s+\S+){4}\s*$",
                    "description": "Five-field cron expression (UTC).",
                },
            },
            "required": ["workflow_yml_path", "cron_expression"],
        },
    )

    async def execute(self, ctx: ToolContext, params: dict[str, Any]) -> ToolResult:
        path = ctx.path(params["workflow_yml_path"])
        cron = " ".join(params["cron_expression"].split())
        self.log(f"Adding cron schedule to workflow: {path}")
        workflow = load_yaml_mapping(path)
        # replaces any previous schedule so re-running stays idempotent
        _triggers(workflow)["schedule"] = [{"cron": cron}]
        write_yaml_mapping(path, workflow)
        self.success(f"Cron schedule added to workflow: {cron}")
        return ToolResult(
            {"workflow_yml_path": str(path), "cron_expression": cron, "message": "Workflow scheduled successfully"},
            [str(path)],
        )


@dataclass
class DefineWorkflowEnvTool(BaseTool):
    spec: ToolSpec = ToolSpec(
        name="github_actions_define_workflow_env",
        description=(
            "Add an env-map entry so that `${{ secrets.XXX }}` becomes `Sys.getenv('YYY')` "
            "inside R scripts during the workflow."
        ),
        parameters={
            "type": "object",
            "properties": {
                "workflow_yml_path": _WORKFLOW_PATH,
                "r_script_env_name": {"type": "string", "minLength": 1},
                "github_secret_name": {"type": "string", "minLength": 1},
            },
            "required": ["workflow_yml_path", "r_script_env_name", "github_secret_name"],
        },
    )

    async def execute(self, ctx: ToolContext, params: dict[str, Any]) -> ToolResult:
        path = ctx.path(params["workflow_yml_path"])
        env_name = params["r_script_env_name"]
        secret = params["github_secret_name"]
        self.log(f"Adding environment mapping to workflow: {path}")

        workflow = load_yaml_mapping(path)
        jobs = child_mapping(workflow, "jobs")
        if not jobs:
            jobs["build"] = {"runs-on": "ubuntu-latest", "steps": []}
        for job_name in list(jobs):
            child_mapping(child_mapping(jobs, job_name), "env")[env_name] = secret_env_reference(secret)
        write_yaml_mapping(path, workflow)

        self.success(f"Added environment mapping: {env_name} -> secrets.{secret}")
        return ToolResult(
            {
                "workflow_path": str(path),
                "env_name": env_name,
                "secret_name": secret,
                "jobs": list(jobs),
                "usage_in_r": f'Sys.getenv("{env_name}")',
            },
            [str(path)],
        )


@dataclass
class CreateSecretTool(BaseTool):
    spec: ToolSpec = ToolSpec(
        name="github_actions_create_secret",
        description="Create or update an encrypted repo secret (masked in logs).",
        parameters={
            "type": "object",
            "properties": {
                "repository_name": {"type": "string", "minLength": 1, "description": "owner/repo"},
                "secret_name": {"type": "string", "minLength": 1},
                "secret_value": {"type": "string", "minLength": 1},
            },
            "required": ["repository_name", "secret_name", "secret_value"],
        },
    )

    async def execute(self, ctx: ToolContext, params: dict[str, Any]) -> ToolResult:
        repo = params["repository_name"]
        name = params["secret_name"]
        self.log(f"Preparing secret '{name}' for repository '{repo}'")
        # the value never leaves this call: output only carries a mask
        instructions = f"""
To create the secret '{name}' in repository '{repo}':

1. Go to GitHub repository: https://github.com/{repo}
2. Navigate to Settings > Secrets and variables > Actions
3. Click "New repository secret"
4. Name: {name}
5. Value: [REDACTED]
6. Click "Add secret"

Or use GitHub CLI:
gh secret set {name} --repo {repo}
"""
        self.success(f"Secret '{name}' setup instructions created")
        return ToolResult(
            {
                "secret_name": name,
                "repository_name": repo,
                "instructions": instructions,
                "cli_command": f'gh secret set {name} --body "***" --repo {repo}',
            }
        )


def _run_urls(repository: str | None, run_id: str) -> tuple[str, str]:
    repo = repository or "OWNER/REPO"
    return (
        f"https://github.com/{repo}/actions/runs/{run_id}",
        f"https://api.github.com/repos/{repo}/actions/runs/{run_id}",
    )


@dataclass
class MonitorWorkflowTool(BaseTool):
    spec: ToolSpec = ToolSpec(
        name="github_actions_monitor_workflow",
        description="Return live logs and status of a given workflow run.",
        parameters={
            "type": "object",
            "properties": {"workflow_run_id": _RUN_ID, "repository": _REPOSITORY},
            "required": ["workflow_run_id"],
        },
    )

    async def execute(self, ctx: ToolContext, params: dict[str, Any]) -> ToolResult:
        run_id = str(params["workflow_run_id"])
        repository = params.get("repository")
        web_url, api_url = _run_urls(repository, run_id)
        self.log(f"Monitoring workflow run: {run_id}")
        data: dict[str, Any] = {
            "workflow_run_id": run_id,
            "monitoring_instructions": f"""
To monitor workflow run {run_id}:

1. GitHub CLI:
   gh run view {run_id} --log

2. GitHub API:
   curl -H "Authorization: Bearer $GITHUB_TOKEN" {api_url}

3. Web interface:
   {web_url}
""",
        }
        if repository and ctx.settings.github_token():
            gh = GitHubClient.from_settings(ctx.settings, ctx.transport)
            run = await gh.get_workflow_run(repository, run_id)
            jobs = await gh.list_run_jobs(repository, run_id)
            data["status"] = {
                "id": run.get("id"),
                "status": run.get("status"),
                "conclusion": run.get("conclusion"),
                "html_url": run.get("html_url"),
                "created_at": run.get("created_at"),
                "updated_at": run.get("updated_at"),
                "jobs": [
                    {
                        "id": j.get("id"),
                        "name": j.get("name"),
                        "status": j.get("status"),
                        "conclusion": j.get("conclusion"),
                        "steps": [
                            {"name": s.get("name"), "status": s.get("status"), "conclusion": s.get("conclusion")}
                            for s in j.get("steps") or []
                        ],
                    }
                    for j in jobs
                ],
            }
            self.success(f"Workflow run {run_id} is {run.get('status')}")
        else:
            self.log("No repository or token given, returning instructions only")
        return ToolResult(data)


@dataclass
class RerunWorkflowTool(BaseTool):
    spec: ToolSpec = ToolSpec(
        name="github_actions_rerun_workflow",
        description="Re-trigger a failed workflow run after you fixed the issue.",
        parameters={
            "type": "object",
            "properties": {"workflow_run_id": _RUN_ID, "repository": _REPOSITORY},
            "required": ["workflow_run_id"],
        },
    )

    async def execute(self, ctx: ToolContext, params: dict[str, Any]) -> ToolResult:
        run_id = str(params["workflow_run_id"])
        repository = params.get("repository")
        web_url, api_url = _run_urls(repository, run_id)
        self.log(f"Preparing to rerun workflow: {run_id}")
        data: dict[str, Any] = {
            "workflow_run_id": run_id,
            "rerun_instructions": f"""
To rerun workflow {run_id}:

1. GitHub CLI:
   gh run rerun {run_id}

2. GitHub CLI (rerun failed jobs only):
   gh run rerun {run_id} --failed

3. GitHub API:
   curl -X POST -H "Authorization: Bearer $GITHUB_TOKEN" {api_url}/rerun

4. Web interface:
   {web_url} and click "Re-run jobs"
""",
            "cli_command": f"gh run rerun {run_id}",
            "api_endpoint": f"{api_url}/rerun",
            "rerun_requested": False,
        }
        if repository and ctx.settings.github_token():
            gh = GitHubClient.from_settings(ctx.settings, ctx.transport)
            await gh.rerun_workflow(repository, run_id)
            data["rerun_requested"] = True
            self.success(f"Rerun requested for workflow run {run_id}")
        return ToolResult(data)
