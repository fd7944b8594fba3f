"""Dashboard tools: header edits on a single .qmd document."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ...documents.frontmatter import update_front_matter
from ..base import BaseTool, ToolContext, ToolResult, ToolSpec

_QMD_PATH = {"type": "string", "minLength": 1, "description": "Path to the .qmd document."}


@dataclass
class DefineDashboardFormatTool(BaseTool):
    spec: ToolSpec = ToolSpec(
        name="quarto_define_dashboard_format",
        description="Set `format: dashboard` in the YAML header of a .qmd file.",
        parameters={
            "type": "object",
            "properties": {
                "qmd_file_path": _QMD_PATH,
                "format_type": {"type": "string", "default": "dashboard"},
            },
            "required": ["qmd_file_path"],
        },
    )

    async def execute(self, ctx: ToolContext, params: dict[str, Any]) -> ToolResult:
        path = ctx.path(params["qmd_file_path"])
        format_type = params.get("format_type") or "dashboard"
        self.log(f"Setting format {format_type} on {path}")
        doc = update_front_matter(path, {"format": format_type})
        self.success(f"Dashboard format set for {path}")
        return ToolResult(
            {"file_path": str(path), "format_type": format_type, "header": doc.header,
             "message": f"Format set to {format_type}"},
            [str(path)],
        )


@dataclass
class DefineDashboardLayoutTool(BaseTool):
    spec: ToolSpec = ToolSpec(
        name="quarto_define_dashboard_layout",
        description="Write a layout block (rows/columns with widths & heights) into the dashboard YAML.",
        parameters={
            "type": "object",
            "properties": {
                "qmd_file_path": _QMD_PATH,
                "layout_structure": {"type": "object", "description": "Rows/columns mapping."},
                "orientation": {"type": "string", "enum": ["rows", "columns"], "default": "columns"},
            },
            "required": ["qmd_file_path", "layout_structure"],
        },
    )

    async def execute(self, ctx: ToolContext, params: dict[str, Any]) -> ToolResult:
        path = ctx.path(params["qmd_file_path"])
        orientation = params.get("orientation") or "columns"
        self.log(f"Setting dashboard layout for {path}")
        doc = update_front_matter(
            path,
            {"format": "dashboard", "layout": params["layout_structure"], "orientation": orientation},
        )
        self.success(f"Dashboard layout configured for {path}")
        return ToolResult(
            {"file_path": str(path), "layout_structure": doc.header["layout"], "orientation": orientation,
             "message": "Dashboard layout configured"},
            [str(path)],
        )


@dataclass
class AddDashboardLogoTool(BaseTool):
    spec: ToolSpec = ToolSpec(
        name="quarto_add_dashboard_logo",
        description="Reference a logo image in the dashboard YAML so it appears in the header.",
        parameters={
            "type": "object",
            "properties": {
                "qmd_file_path": _QMD_PATH,
                "logo_image_path": {"type": "string", "minLength": 1},
            },
            "required": ["qmd_file_path", "logo_image_path"],
        },
    )

    async def execute(self, ctx: ToolContext, params: dict[str, Any]) -> ToolResult:
        path = ctx.path(params["qmd_file_path"])
        logo = params["logo_image_path"]
        self.log(f"Adding logo {logo} to {path}")
        update_front_matter(path, {"logo": logo})
        self.success(f"Logo added to {path}")
        return ToolResult(
            {"file_path": str(path), "logo_image_path": logo, "message": "Logo added to dashboard"},
            [str(path)],
        )
