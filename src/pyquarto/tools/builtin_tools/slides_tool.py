from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ...generators import templates
from ...util.fs import write_text_atomic
from ..base import BaseTool, ToolContext, ToolResult, ToolSpec


@dataclass
class RevealJsSlidesTool(BaseTool):
    spec: ToolSpec = ToolSpec(
        name="quarto_generate_revealjs_slides",
        description=(
            "Create a starter slides.qmd ready for RevealJS with your theme, "
            "title slide background image, and highlight style."
        ),
        parameters={
            "type": "object",
            "properties": {
                "target_folder": {"type": "string", "minLength": 1},
                "title": {"type": "string", "minLength": 1},
                "author": {"type": "string", "minLength": 1},
                "theme_file": {"type": "string", "minLength": 1, "description": "Built-in theme or .scss path."},
                "highlight_style": {"type": "string", "default": "atom-one"},
                "title_slide_background_image": {"type": "string"},
            },
            "required": ["target_folder", "title", "author", "theme_file"],
        },
    )

    async def execute(self, ctx: ToolContext, params: dict[str, Any]) -> ToolResult:
        folder = ctx.path(params["target_folder"])
        title = params["title"]
        highlight = params.get("highlight_style") or "atom-one"
        background = params.get("title_slide_background_image") or None
        self.log(f"Generating RevealJS slides: {title}")

        slides = folder / "slides.qmd"
        css = folder / "styles.css"
        write_text_atomic(
            slides,
            templates.revealjs_slides(title, params["author"], params["theme_file"], highlight, background),
        )
        write_text_atomic(css, templates.SLIDES_CSS)
        self.success(f"RevealJS slides generated: {slides}")
        return ToolResult(
            {
                "slides_path": str(slides),
                "css_path": str(css),
                "title": title,
                "author": params["author"],
                "theme_file": params["theme_file"],
                "highlight_style": highlight,
                "background_image": background,
                "render_command": f'{ctx.settings.quarto_bin} render "{slides}"',
            },
            [str(slides), str(css)],
        )
