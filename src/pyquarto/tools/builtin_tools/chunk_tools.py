from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ...documents.frontmatter import read_front_matter, serialize_front_matter
from ...generators.chunks import name_chunk, ojs_chunk, set_chunk_output
from ...util.fs import write_text_atomic
from ..base import BaseTool, ToolContext, ToolResult, ToolSpec

_HEADER = {"type": "string", "minLength": 1, "description": "Chunk header such as ```{r setup, echo=FALSE}."}


@dataclass
class DefineOjsChunkTool(BaseTool):
    spec: ToolSpec = ToolSpec(
        name="quarto_define_ojs_chunk",
        description="Insert an ObservableJS code chunk (```ojs) into the current .qmd.",
        parameters={
            "type": "object",
            "properties": {
                "ojs_code_content": {"type": "string", "minLength": 1},
                "chunk_options": {
                    "type": ["string", "array"],
                    "items": {"type": "string"},
                    "description": "Cell options written as `#| ...` lines.",
                },
                "qmd_file_path": {"type": "string", "description": "Append the chunk to this document."},
            },
            "required": ["ojs_code_content"],
        },
    )

    async def execute(self, ctx: ToolContext, params: dict[str, Any]) -> ToolResult:
        chunk = ojs_chunk(params["ojs_code_content"], params.get("chunk_options"))
        target = params.get("qmd_file_path")
        if not target:
            self.success("OJS chunk created")
            return ToolResult({"chunk_content": chunk, "message": "OJS chunk ready to be added to QMD file"})

        path = ctx.path(target)
        self.log(f"Appending OJS chunk to {path}")
        doc = read_front_matter(path)
        body = doc.body
        if body and not body.endswith("\n"):
            body += "\n"
        body += ("\n" if body else "") + chunk + "\n"
        if doc.had_header:
            text = serialize_front_matter(doc.header, body)
        else:
            text = body
        write_text_atomic(path, text, mkdirs=False)
        self.success(f"OJS chunk appended to {path}")
        return ToolResult(
            {"chunk_content": chunk, "file_path": str(path), "message": "OJS chunk appended"},
            [str(path)],
        )


@dataclass
class ConfigureChunkOutputTool(BaseTool):
    spec: ToolSpec = ToolSpec(
        name="quarto_configure_chunk_output",
        description="Set echo/include for a code chunk.",
        parameters={
            "type": "object",
            "properties": {
                "code_chunk_header": _HEADER,
                "echo": {"type": ["boolean", "string"]},
                "include": {"type": ["boolean", "string"]},
            },
            "required": ["code_chunk_header"],
        },
    )

    async def execute(self, ctx: ToolContext, params: dict[str, Any]) -> ToolResult:
        self.log("Configuring chunk output options")
        chunk = set_chunk_output(params["code_chunk_header"], params.get("echo"), params.get("include"))
        header = chunk.render()
        self.success("Configured chunk output options")
        return ToolResult(
            {
                "original_header": params["code_chunk_header"],
                "modified_header": header,
                "language": chunk.language,
                "echo": params.get("echo"),
                "include": params.get("include"),
                "all_options": chunk.options,
            }
        )


@dataclass
class NameCodeChunkTool(BaseTool):
    spec: ToolSpec = ToolSpec(
        name="quarto_name_code_chunk",
        description="Give a chunk a readable name for logs and cross-references.",
        parameters={
            "type": "object",
            "properties": {
                "code_chunk_header": _HEADER,
                "chunk_name": {"type": "string", "minLength": 1},
            },
            "required": ["code_chunk_header", "chunk_name"],
        },
    )

    async def execute(self, ctx: ToolContext, params: dict[str, Any]) -> ToolResult:
        chunk = name_chunk(params["code_chunk_header"], params["chunk_name"])
        self.success(f"Named code chunk: {chunk.label}")
        return ToolResult(
            {
                "original_header": params["code_chunk_header"],
                "modified_header": chunk.render(),
                "chunk_name": chunk.label,
                "language": chunk.language,
                "existing_options": chunk.options,
            }
        )
