from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ...generators import embeds
from ..base import BaseTool, ToolContext, ToolResult, ToolSpec


@dataclass
class YoutubeEmbedTool(BaseTool):
    spec: ToolSpec = ToolSpec(
        name="quarto_embed_youtube_iframe",
        description="Turn a YouTube URL or embed code into an iframe block for a .qmd page.",
        parameters={
            "type": "object",
            "properties": {
                "youtube_embed_code": {"type": "string", "minLength": 1, "description": "Video URL or <iframe>."},
            },
            "required": ["youtube_embed_code"],
        },
    )

    async def execute(self, ctx: ToolContext, params: dict[str, Any]) -> ToolResult:
        self.log("Embedding YouTube iframe")
        embed = embeds.youtube_embed(params["youtube_embed_code"])
        self.success("YouTube embed generated")
        return ToolResult(
            {
                "original_code": params["youtube_embed_code"],
                "embed_code": embed.embed_code,
                "quarto_content": embed.quarto_content,
                "responsive_version": embed.responsive_version,
                "video_id": embed.video_id,
            }
        )


@dataclass
class SpotifyEmbedTool(BaseTool):
    spec: ToolSpec = ToolSpec(
        name="quarto_embed_spotify_iframe",
        description="Turn a Spotify URL or embed code into compact and full player iframes.",
        parameters={
            "type": "object",
            "properties": {
                "spotify_embed_code": {"type": "string", "minLength": 1, "description": "Spotify URL or <iframe>."},
            },
            "required": ["spotify_embed_code"],
        },
    )

    async def execute(self, ctx: ToolContext, params: dict[str, Any]) -> ToolResult:
        self.log("Embedding Spotify iframe")
        embed = embeds.spotify_embed(params["spotify_embed_code"])
        self.success("Spotify embed generated")
        return ToolResult(
            {
                "original_code": params["spotify_embed_code"],
                "embed_code": embed.embed_code,
                "compact_embed": embed.compact_embed,
                "full_embed": embed.full_embed,
                "quarto_content": embed.quarto_content,
                "responsive_version": embed.responsive_version,
                "content_type": embed.content_type,
                "content_id": embed.content_id,
            }
        )


@dataclass
class ShinyEmbedTool(BaseTool):
    spec: ToolSpec = ToolSpec(
        name="quarto_embed_shiny_app_iframe",
        description="Embed an externally-hosted Shiny app via iframe.",
        parameters={
            "type": "object",
            "properties": {
                "shiny_app_url": {"type": "string", "minLength": 1},
                "iframe_height": {"type": "string", "default": "600px"},
                "iframe_width": {"type": "string", "default": "100%"},
            },
            "required": ["shiny_app_url"],
        },
    )

    async def execute(self, ctx: ToolContext, params: dict[str, Any]) -> ToolResult:
        url = params["shiny_app_url"]
        height = params.get("iframe_height") or "600px"
        width = params.get("iframe_width") or "100%"
        if not embeds.is_http_url(url):
            raise ValueError(f"Invalid URL format: {url}")
        self.log(f"Embedding Shiny app: {url}")
        embed_code = embeds.shiny_iframe(url, width, height)
        responsive = embeds.shiny_responsive_iframe(url, height)
        return ToolResult(
            {
                "shiny_app_url": url,
                "embed_code": embed_code,
                "responsive_embed_code": responsive,
                "quarto_content": f"\n## Shiny Application\n\n{embed_code}\n",
                "enhanced_content": embeds.shiny_enhanced_block(responsive),
                "troubleshooting": embeds.shiny_troubleshooting(url),
                "iframe_height": height,
                "iframe_width": width,
            }
        )
