from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ...generators.embeds import COMMON_IFRAME_CUSTOMIZATIONS, set_iframe_attribute
from ..base import BaseTool, ToolContext, ToolResult, ToolSpec


@dataclass
class IframeAttributesTool(BaseTool):
    spec: ToolSpec = ToolSpec(
        name="html_iframe_customize_attributes",
        description="Add or replace one attribute (width, style, sandbox...) on an iframe tag.",
        parameters={
            "type": "object",
            "properties": {
                "iframe_html": {"type": "string", "minLength": 1},
                "attribute_name": {"type": "string", "minLength": 1, "pattern": r"^[A-Za-z_:][-A-Za-z0-9_:.]*$"},
                "attribute_value": {"type": "string"},
            },
            "required": ["iframe_html", "attribute_name", "attribute_value"],
        },
    )

    async def execute(self, ctx: ToolContext, params: dict[str, Any]) -> ToolResult:
        name = params["attribute_name"]
        self.log(f"Customizing iframe attribute: {name}")
        html, existed = set_iframe_attribute(params["iframe_html"], name, params["attribute_value"])
        self.log(f"{'Updated existing' if existed else 'Added new'} attribute: {name}")
        return ToolResult(
            {
                "original_html": params["iframe_html"],
                "modified_html": html,
                "attribute_name": name,
                "attribute_value": params["attribute_value"],
                "attribute_existed": existed,
                "common_customizations": COMMON_IFRAME_CUSTOMIZATIONS,
            }
        )
