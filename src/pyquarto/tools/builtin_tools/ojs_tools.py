from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ...generators.chunks import (
    dropdown_snippet,
    dropdown_variable_name,
    iframe_update_snippet,
    ojs_chunk,
    transpose_snippet,
)
from ..base import BaseTool, ToolContext, ToolResult, ToolSpec


@dataclass
class TransposeDataTool(BaseTool):
    spec: ToolSpec = ToolSpec(
        name="ojs_transpose_data",
        description="Transpose column-oriented data from R into row objects for OJS.",
        parameters={
            "type": "object",
            "properties": {"ojs_data_variable": {"type": "string", "minLength": 1}},
            "required": ["ojs_data_variable"],
        },
    )

    async def execute(self, ctx: ToolContext, params: dict[str, Any]) -> ToolResult:
        var = params["ojs_data_variable"]
        code = transpose_snippet(var)
        self.success(f"Generated transpose code for {var}")
        return ToolResult(
            {
                "ojs_code": code,
                "chunk_content": ojs_chunk(code),
                "transposed_variable": f"{var}_transposed",
            }
        )


@dataclass
class DropdownMenuTool(BaseTool):
    spec: ToolSpec = ToolSpec(
        name="ojs_create_dropdown_menu",
        description="Create an OJS Inputs.select dropdown from a data variable.",
        parameters={
            "type": "object",
            "properties": {
                "options_data": {"type": "string", "minLength": 1, "description": "OJS expression for the options."},
                "label": {"type": "string", "minLength": 1},
                "unique_options_flag": {"type": "boolean", "default": True},
            },
            "required": ["options_data", "label"],
        },
    )

    async def execute(self, ctx: ToolContext, params: dict[str, Any]) -> ToolResult:
        label = params["label"]
        unique = params.get("unique_options_flag", True)
        code = dropdown_snippet(params["options_data"], label, unique)
        self.success(f"Generated dropdown for {label}")
        return ToolResult(
            {
                "ojs_code": code,
                "chunk_content": ojs_chunk(code),
                "dropdown_variable": dropdown_variable_name(label),
                "unique_options": unique,
            }
        )


@dataclass
class DynamicIframeUpdateTool(BaseTool):
    spec: ToolSpec = ToolSpec(
        name="ojs_dynamic_iframe_update",
        description="Rebuild an iframe whenever a dropdown selection changes.",
        parameters={
            "type": "object",
            "properties": {
                "dropdown_variable": {"type": "string", "minLength": 1},
                "data_set": {"type": "string", "minLength": 1},
                "iframe_html_template": {"type": "string", "minLength": 1},
                "placeholder_string": {"type": "string", "minLength": 1},
            },
            "required": ["dropdown_variable", "data_set", "iframe_html_template", "placeholder_string"],
        },
    )

    async def execute(self, ctx: ToolContext, params: dict[str, Any]) -> ToolResult:
        var = params["dropdown_variable"]
        code = iframe_update_snippet(
            var, params["data_set"], params["iframe_html_template"], params["placeholder_string"]
        )
        self.success(f"Generated dynamic iframe for {var}")
        return ToolResult(
            {"ojs_code": code, "chunk_content": ojs_chunk(code), "iframe_variable": f"{var}_iframe"}
        )
