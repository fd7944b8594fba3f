from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from ...collaborators.openai_api import OpenAIClient
from ...errors import ExternalCollaboratorError
from ...generators.scss import custom_theme_scss, google_font_url
from ...util.fs import write_bytes, write_text_atomic
from ..base import BaseTool, ToolContext, ToolResult, ToolSpec

THEME_KEYS = ("font_family", "primary_color", "secondary_color", "accent_color")
_API_KEY = {"type": "string", "minLength": 1, "description": "OpenAI API key."}
_COLOR = {"type": "string", "minLength": 1, "description": "CSS color, e.g. #2c3e50."}

THEME_PROMPT = """Create a cohesive color palette and font recommendation for a "{theme}" theme.
Return ONLY a JSON object with these exact keys:
{{
  "font_family": "recommended Google Font name",
  "primary_color": "#hex color for primary elements",
  "secondary_color": "#hex color for secondary elements",
  "accent_color": "#hex color for highlights and accents"
}}

The colors should work well together and match the theme aesthetic. Choose colors that have good contrast and accessibility."""


def parse_theme_reply(reply: str) -> dict[str, Any]:
    """Read the palette JSON out of a chat reply, tolerating prose around it."""
    try:
        data = json.loads(reply)
    except json.JSONDecodeError:
        start = reply.find("{")
        if start < 0:
            raise ExternalCollaboratorError("openai", "Could not parse theme recommendations as JSON", detail=reply)
        try:
            # first complete object; anything after it is ignored
            data, _ = json.JSONDecoder().raw_decode(reply, start)
        except json.JSONDecodeError as e:
            raise ExternalCollaboratorError(
                "openai", "Could not parse theme recommendations as JSON", detail=reply
            ) from e
    if not isinstance(data, dict):
        raise ExternalCollaboratorError("openai", "Theme recommendations are not a JSON object", detail=reply)
    missing = [k for k in THEME_KEYS if not data.get(k)]
    if missing:
        raise ExternalCollaboratorError("openai", f"Missing required field: {', '.join(missing)}", detail=reply)
    return data


@dataclass
class ThemeRecommendationsTool(BaseTool):
    spec: ToolSpec = ToolSpec(
        name="openai_generate_theme_recommendations",
        description="Ask GPT for a font and colour palette matching a theme description.",
        parameters={
            "type": "object",
            "properties": {
                "api_key": _API_KEY,
                "user_theme_input": {"type": "string", "minLength": 1, "description": "e.g. 'ocean sunset'."},
            },
            "required": ["api_key", "user_theme_input"],
        },
    )

    async def execute(self, ctx: ToolContext, params: dict[str, Any]) -> ToolResult:
        theme = params["user_theme_input"]
        self.log(f"Generating theme recommendations for: {theme}")
        client = OpenAIClient.from_settings(params["api_key"], ctx.settings, ctx.transport)
        reply = await client.chat(THEME_PROMPT.format(theme=theme))
        data = parse_theme_reply(reply)
        self.success("Theme recommendations generated successfully")
        return ToolResult(
            {"theme_data": data, "user_theme_input": theme, "message": "Theme recommendations generated"}
        )


@dataclass
class GenerateImageTool(BaseTool):
    spec: ToolSpec = ToolSpec(
        name="openai_generate_image",
        description="Call DALL-E /images/generations and save the returned image locally.",
        parameters={
            "type": "object",
            "properties": {
                "api_key": _API_KEY,
                "prompt": {"type": "string", "minLength": 1},
                "output_file_path": {"type": "string", "minLength": 1},
            },
            "required": ["api_key", "prompt", "output_file_path"],
        },
    )

    async def execute(self, ctx: ToolContext, params: dict[str, Any]) -> ToolResult:
        prompt = params["prompt"]
        out = ctx.path(params["output_file_path"])
        self.log(f"Generating image: {prompt}")
        client = OpenAIClient.from_settings(params["api_key"], ctx.settings, ctx.transport)
        url = await client.generate_image(prompt)
        data = await client.download(url)
        write_bytes(out, data)
        self.success(f"Image saved to: {out}")
        return ToolResult(
            {
                "prompt": prompt,
                "output_file_path": str(out),
                "image_url": url,
                "bytes_written": len(data),
                "message": "Image generated and saved successfully",
            },
            [str(out)],
        )


@dataclass
class CustomScssTool(BaseTool):
    spec: ToolSpec = ToolSpec(
        name="quarto_generate_custom_scss",
        description="Write a custom.scss file that imports Google fonts and sets CSS variables for the theme.",
        parameters={
            "type": "object",
            "properties": {
                "target_folder": {"type": "string", "minLength": 1},
                "font_family": {"type": "string", "minLength": 1},
                "primary_color": _COLOR,
                "secondary_color": _COLOR,
                "accent_color": _COLOR,
            },
            "required": ["target_folder", "font_family", "primary_color", "secondary_color", "accent_color"],
        },
    )

    async def execute(self, ctx: ToolContext, params: dict[str, Any]) -> ToolResult:
        folder = ctx.path(params["target_folder"])
        font = params["font_family"]
        path = folder / "custom.scss"
        self.log(f"Generating custom SCSS in {folder}")
        content = custom_theme_scss(font, params["primary_color"], params["secondary_color"], params["accent_color"])
        write_text_atomic(path, content)
        self.success(f"Custom SCSS written: {path}")
        return ToolResult(
            {
                "scss_file_path": str(path),
                "font_family": font,
                "font_url": google_font_url(font),
                "scss_content": content,
                "message": "Custom SCSS file generated",
            },
            [str(path)],
        )
