from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import PurePath
from typing import Any

from ...documents.yaml_file import child_mapping, load_yaml_mapping, write_yaml_mapping
from ...generators.workflows import DEFAULT_GITIGNORE
from ...util.fs import write_text_atomic
from ...util.subprocess import check_cmd
from ..base import BaseTool, ToolContext, ToolResult, ToolSpec


def _json_list_or_value(value: Any, field: str) -> Any:
    """A string that looks like a JSON array becomes a list of strings; anything else is kept."""
    if isinstance(value, str):
        s = value.strip()
        if s.startswith("[") and s.endswith("]"):
            try:
                value = json.loads(s)
            except json.JSONDecodeError:
                return value
    if isinstance(value, list) and not all(isinstance(v, str) for v in value):
        raise ValueError(f"{field} must contain only strings")
    return value


def page_title(page: str) -> str:
    stem = PurePath(page).name
    if stem.endswith(".qmd"):
        stem = stem[: -len(".qmd")]
    return stem[:1].upper() + stem[1:]


@dataclass
class ConfigureSiteYmlTool(BaseTool):
    spec: ToolSpec = ToolSpec(
        name="quarto_configure_site_yml",
        description="Edit _quarto.yml to set project type, nav-bar, theme, output dir, etc.",
        parameters={
            "type": "object",
            "properties": {
                "quarto_yml_path": {"type": "string", "minLength": 1},
                "project_type": {"type": "string", "minLength": 1, "description": "website, book, manuscript..."},
                "output_dir": {"type": "string", "default": "_site"},
                "navigation_type": {"type": "string", "enum": ["navbar", "sidebar"]},
                "pages_list": {
                    "type": ["array", "string"],
                    "items": {"type": "string"},
                    "description": "Pages for the navigation, or a JSON array string.",
                },
                "theme_config": {
                    "type": ["string", "array"],
                    "description": "Theme name, or a JSON array of themes/scss files.",
                },
            },
            "required": ["quarto_yml_path", "project_type"],
        },
    )

    async def execute(self, ctx: ToolContext, params: dict[str, Any]) -> ToolResult:
        path = ctx.path(params["quarto_yml_path"])
        project_type = params["project_type"]
        self.log(f"Configuring Quarto site: {path}")

        config = load_yaml_mapping(path, missing_ok=True)
        project = child_mapping(config, "project")
        project["type"] = project_type
        project["output-dir"] = params.get("output_dir") or "_site"

        pages = _json_list_or_value(params.get("pages_list"), "pages_list")
        if isinstance(pages, str):
            pages = [pages]
        nav = params.get("navigation_type")
        if project_type == "website" and nav:
            website = child_mapping(config, "website")
            if nav == "navbar":
                navbar = child_mapping(website, "navbar")
                if pages:
                    navbar["left"] = [{"href": p, "text": page_title(p)} for p in pages]
            else:
                sidebar = child_mapping(website, "sidebar")
                if pages:
                    sidebar["contents"] = list(pages)

        html = child_mapping(child_mapping(config, "format"), "html")
        theme = params.get("theme_config")
        if theme:
            html["theme"] = _json_list_or_value(theme, "theme_config")

        write_yaml_mapping(path, config)
        self.success(f"Quarto configuration updated: {path}")
        return ToolResult(
            {"file_path": str(path), "config": config, "message": "Quarto site configuration updated"},
            [str(path)],
        )


@dataclass
class RenderLocalTool(BaseTool):
    spec: ToolSpec = ToolSpec(
        name="quarto_render_local",
        description="Run `quarto render` on a file or whole project for local preview.",
        parameters={
            "type": "object",
            "properties": {
                "qmd_file_path": {"type": "string", "description": "File to render; omit for the whole project."},
            },
        },
    )

    async def execute(self, ctx: ToolContext, params: dict[str, Any]) -> ToolResult:
        cmd = [ctx.settings.quarto_bin, "render"]
        target = params.get("qmd_file_path")
        if target:
            cmd.append(str(ctx.path(target)))
        self.log(f"Rendering {target or 'project'}")
        res = await check_cmd(cmd, cwd=ctx.cwd, timeout=ctx.settings.timeouts.render)
        self.success("Quarto project rendered successfully")
        return ToolResult(
            {
                "file_path": target or "whole project",
                "output": res.stdout + res.stderr,
                "preview_command": f"{ctx.settings.quarto_bin} preview",
                "message": "Quarto project rendered locally",
            }
        )


@dataclass
class CreateGitignoreTool(BaseTool):
    spec: ToolSpec = ToolSpec(
        name="quarto_create_gitignore",
        description="Create or overwrite .gitignore with standard Quarto/R exclusions.",
        parameters={
            "type": "object",
            "properties": {
                "target_folder": {"type": "string", "minLength": 1},
                "gitignore_content": {"type": "string", "description": "Custom content; defaults to Quarto/R rules."},
            },
            "required": ["target_folder"],
        },
    )

    async def execute(self, ctx: ToolContext, params: dict[str, Any]) -> ToolResult:
        folder = ctx.path(params["target_folder"])
        path = folder / ".gitignore"
        content = params.get("gitignore_content") or DEFAULT_GITIGNORE
        self.log(f"Creating .gitignore in {folder}")
        write_text_atomic(path, content)
        self.success(f".gitignore created in {folder}")
        return ToolResult(
            {"file_path": str(path), "content": content, "message": ".gitignore file created"},
            [str(path)],
        )


@dataclass
class ApplyScssThemeTool(BaseTool):
    spec: ToolSpec = ToolSpec(
        name="quarto_apply_scss_theme",
        description="Append a custom SCSS file to the theme list in _quarto.yml.",
        parameters={
            "type": "object",
            "properties": {
                "quarto_yml_path": {"type": "string", "minLength": 1},
                "scss_file_path": {"type": "string", "minLength": 1},
            },
            "required": ["quarto_yml_path", "scss_file_path"],
        },
    )

    async def execute(self, ctx: ToolContext, params: dict[str, Any]) -> ToolResult:
        path = ctx.path(params["quarto_yml_path"])
        scss = params["scss_file_path"]
        self.log(f"Applying SCSS theme: {scss}")
        config = load_yaml_mapping(path)
        html = child_mapping(child_mapping(config, "format"), "html")

        # append-if-absent, so repeated calls leave the list unchanged
        current = html.get("theme")
        if isinstance(current, list):
            themes = list(current)
        elif isinstance(current, str) and current:
            themes = [current]
        else:
            themes = []
        if scss not in themes:
            themes.append(scss)
        html["theme"] = themes

        write_yaml_mapping(path, config)
        self.success(f"SCSS theme applied: {scss}")
        return ToolResult(
            {"quarto_yml_path": str(path), "scss_file_path": scss, "theme_config": themes,
             "message": "SCSS theme applied"},
            [str(path)],
        )
