from __future__ import annotations
import asyncio
import json
import tempfile
from pathlib import Path

from pyquarto.tools.base import ToolContext
from pyquarto.tools.builtin import build_registry


async def run(registry, ctx, name, params):
    result = (await registry.execute(name, params, ctx)).to_dict()
    print(f"{name}:", json.dumps(result, default=str)[:200])
    return result


async def main():
    registry = build_registry(quiet=True)
    with tempfile.TemporaryDirectory() as td:
        cwd = Path(td)
        ctx = ToolContext(cwd=str(cwd))

        # scaffold without external tools
        await run(registry, ctx, "quarto_create_project_with_renv_and_git",
                  {"project_directory_name": "site", "create_git_repo": False, "use_renv": False})

        # header edits on index.qmd
        await run(registry, ctx, "quarto_define_dashboard_format", {"qmd_file_path": "site/index.qmd"})
        await run(registry, ctx, "quarto_define_dashboard_layout",
                  {"qmd_file_path": "site/index.qmd", "layout_structure": {"rows": [{"height": "70%"}]}})
        print("INDEX:\n" + (cwd / "site" / "index.qmd").read_text())

        # site config and theme
        await run(registry, ctx, "quarto_configure_site_yml",
                  {"quarto_yml_path": "site/_quarto.yml", "project_type": "website",
                   "navigation_type": "navbar", "pages_list": ["index.qmd"]})
        await run(registry, ctx, "quarto_generate_custom_scss",
                  {"target_folder": "site", "font_family": "Lora", "primary_color": "#0b3d91",
                   "secondary_color": "#f4a261", "accent_color": "#e76f51"})
        await run(registry, ctx, "quarto_apply_scss_theme",
                  {"quarto_yml_path": "site/_quarto.yml", "scss_file_path": "custom.scss"})
        print("QUARTO:\n" + (cwd / "site" / "_quarto.yml").read_text())

        # workflow with schedule and env
        wf = "site/.github/workflows/publish.yml"
        await run(registry, ctx, "github_actions_configure_publishing_workflow", {"workflow_file_path": wf})
        cron = await run(registry, ctx, "chatgpt_generate_cron_expression",
                         {"natural_language_time_description": "every day at 08:00 ET"})
        await run(registry, ctx, "github_actions_schedule_workflow",
                  {"workflow_yml_path": wf, "cron_expression": cron["cron_expression"]})
        await run(registry, ctx, "github_actions_define_workflow_env",
                  {"workflow_yml_path": wf, "r_script_env_name": "API_KEY", "github_secret_name": "API_KEY"})
        print("WORKFLOW:\n" + (cwd / wf).read_text())

        # snippets
        await run(registry, ctx, "quarto_name_code_chunk",
                  {"code_chunk_header": "```{r echo=FALSE}", "chunk_name": "Load Data"})
        await run(registry, ctx, "quarto_embed_youtube_iframe",
                  {"youtube_embed_code": "https://www.youtube.com/watch?v=dQw4w9WgXcQ"})


if __name__ == "__main__":
    asyncio.run(main())
