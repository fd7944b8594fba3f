from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ...generators.cron import cron_from_phrase
from ..base import BaseTool, ToolContext, ToolResult, ToolSpec


@dataclass
class CronExpressionTool(BaseTool):
    spec: ToolSpec = ToolSpec(
        name="chatgpt_generate_cron_expression",
        description="Convert a plain-English schedule into a UTC cron expression for GitHub Actions.",
        parameters={
            "type": "object",
            "properties": {
                "natural_language_time_description": {
                    "type": "string",
                    "minLength": 1,
                    "description": "e.g. 'every weekday at 7:30 pm ET'.",
                },
                "time_zone": {"type": "string", "description": "ET, PT, UTC, Europe/Berlin..."},
            },
            "required": ["natural_language_time_description"],
        },
    )

    async def execute(self, ctx: ToolContext, params: dict[str, Any]) -> ToolResult:
        phrase = params["natural_language_time_description"]
        tz = params.get("time_zone") or None
        self.log(f"Generating cron expression for: {phrase}")
        expr = cron_from_phrase(phrase, tz)
        self.success(f"Cron expression generated: {expr}")
        return ToolResult(
            {
                "cron_expression": expr,
                "natural_language_time_description": phrase,
                "time_zone": tz,
                "message": f"Cron expression generated: {expr}",
            }
        )
