from __future__ import annotations

import shutil
from dataclasses import dataclass
from typing import Any

from ...collaborators.r_runner import run_r_script
from ...documents.yaml_file import write_yaml_mapping
from ...generators import rcode, templates
from ...generators.workflows import PROJECT_GITIGNORE
from ...util.fs import write_text_atomic
from ...util.subprocess import check_cmd
from ..base import BaseTool, ToolContext, ToolResult, ToolSpec


@dataclass
class CreateProjectTool(BaseTool):
    spec: ToolSpec = ToolSpec(
        name="quarto_create_project_with_renv_and_git",
        description="Scaffold a new Quarto project folder, initialise renv, git, and a GitHub-ready README.",
        parameters={
            "type": "object",
            "properties": {
                "project_directory_name": {"type": "string", "minLength": 1, "description": "Directory to create."},
                "create_git_repo": {"type": "boolean", "description": "Run git init and write a .gitignore."},
                "use_renv": {"type": "boolean", "description": "Initialise renv inside the project."},
            },
            "required": ["project_directory_name", "create_git_repo", "use_renv"],
        },
    )

    async def execute(self, ctx: ToolContext, params: dict[str, Any]) -> ToolResult:
        name = params["project_directory_name"]
        project = ctx.path(name)
        self.log(f"Creating Quarto project: {name}")
        if project.exists():
            raise FileExistsError(f"Directory '{name}' already exists")

        project.mkdir(parents=True)
        touched: list[str] = []
        try:
            title = project.name
            files = {
                "index.qmd": templates.index_qmd(title),
                "styles.css": templates.project_styles_css(title),
            }
            write_yaml_mapping(project / "_quarto.yml", templates.quarto_project_config(title))
            touched.append(str(project / "_quarto.yml"))
            for fname, content in files.items():
                write_text_atomic(project / fname, content)
                touched.append(str(project / fname))

            if params["create_git_repo"]:
                self.log("Initializing git repository")
                await check_cmd([ctx.settings.git_bin, "init"], cwd=str(project), timeout=ctx.settings.timeouts.git)
                write_text_atomic(project / ".gitignore", PROJECT_GITIGNORE)
                touched.append(str(project / ".gitignore"))

            if params["use_renv"]:
                self.log("Initializing renv")
                await run_r_script(
                    ctx.settings.r_bin, rcode.RENV_INIT, cwd=str(project), timeout=ctx.settings.timeouts.install
                )

            readme = project / "README.md"
            write_text_atomic(readme, templates.project_readme(name, use_renv=params["use_renv"]))
            touched.append(str(readme))
        except Exception:
            shutil.rmtree(project, ignore_errors=True)
            self.error(f"Failed to create project '{name}', removed {project}")
            raise

        self.success(f"Project '{name}' created successfully")
        return ToolResult(
            {
                "project_path": str(project),
                "git_initialized": params["create_git_repo"],
                "renv_initialized": params["use_renv"],
                "message": f"Quarto project created at {project}",
            },
            touched,
        )
