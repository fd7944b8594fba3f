from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ...collaborators.r_runner import run_r_script
from ...generators import rcode
from ..base import BaseTool, ToolContext, ToolResult, ToolSpec

_NO_PARAMS = {"type": "object", "properties": {}}


@dataclass
class RenvInstallPackageTool(BaseTool):
    spec: ToolSpec = ToolSpec(
        name="r_package_renv_install_package",
        description="Install an R package into the project's renv library.",
        parameters={
            "type": "object",
            "properties": {
                "package_name": {"type": "string", "minLength": 1, "description": "CRAN name, or a renv remote spec."},
            },
            "required": ["package_name"],
        },
    )

    async def execute(self, ctx: ToolContext, params: dict[str, Any]) -> ToolResult:
        package = params["package_name"]
        self.log(f"Installing R package: {package}")
        res = await run_r_script(
            ctx.settings.r_bin, rcode.renv_install(package), cwd=ctx.cwd, timeout=ctx.settings.timeouts.install
        )
        self.success(f"Package '{package}' installed successfully")
        return ToolResult(
            {"package_name": package, "output": res.stdout, "message": f"Package {package} installed via renv"}
        )


@dataclass
class RenvSnapshotTool(BaseTool):
    spec: ToolSpec = ToolSpec(
        name="r_package_renv_snapshot",
        description="Record the current package versions in renv.lock.",
        parameters=_NO_PARAMS,
    )

    async def execute(self, ctx: ToolContext, params: dict[str, Any]) -> ToolResult:
        self.log("Creating renv snapshot")
        res = await run_r_script(
            ctx.settings.r_bin, rcode.RENV_SNAPSHOT, cwd=ctx.cwd, timeout=ctx.settings.timeouts.snapshot
        )
        self.success("renv snapshot created")
        lock = ctx.path("renv.lock")
        return ToolResult(
            {"lockfile": str(lock), "output": res.stdout, "message": "renv.lock updated"},
            [str(lock)] if lock.exists() else [],
        )


@dataclass
class RenvStatusTool(BaseTool):
    spec: ToolSpec = ToolSpec(
        name="r_package_renv_status",
        description="Report whether the renv library and lockfile are in sync.",
        parameters=_NO_PARAMS,
    )

    async def execute(self, ctx: ToolContext, params: dict[str, Any]) -> ToolResult:
        self.log("Checking renv status")
        res = await run_r_script(
            ctx.settings.r_bin, rcode.RENV_STATUS, cwd=ctx.cwd, timeout=ctx.settings.timeouts.status
        )
        return ToolResult({"status_output": res.stdout, "message": "renv status retrieved"})
