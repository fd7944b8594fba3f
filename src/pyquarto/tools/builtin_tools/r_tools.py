"""R helper tools. Most return R code; the .Renviron and download tools also touch disk."""
from __future__ import annotations

import json
import os
import re
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import httpx

from ...generators import rcode
from ...util.fs import write_bytes, write_text_atomic
from ..base import BaseTool, ToolContext, ToolResult, ToolSpec

_ENV_NAME = {"type": "string", "minLength": 1, "pattern": r"^[A-Za-z_][A-Za-z0-9_.]*$"}


def _private_temp(prefix: str, suffix: str, content: str) -> str:
    # mkstemp creates the file 0600
    fd, path = tempfile.mkstemp(prefix=prefix, suffix=suffix)
    with os.fdopen(fd, "w", encoding="utf-8") as f:
        f.write(content)
    return path


def set_renviron_line(content: str, name: str, value: str) -> tuple[str, bool]:
    """Set ``NAME=value`` in .Renviron text. Returns (new_content, replaced_existing)."""
    line = f"{name}={value}"
    pattern = re.compile(rf"^{re.escape(name)}\s*=.*$", re.M)
    if pattern.search(content):
        return pattern.sub(lambda _: line, content, count=1), True
    if content and not content.endswith("\n"):
        content += "\n"
    return content + line + "\n", False


@dataclass
class StoreRenvironSecretTool(BaseTool):
    spec: ToolSpec = ToolSpec(
        name="r_store_local_secrets_renviron",
        description="Append a key=value line to .Renviron (auto-restarts R session).",
        parameters={
            "type": "object",
            "properties": {
                "variable_name": _ENV_NAME,
                "variable_value": {"type": "string", "pattern": r"^[^\r\n]*$"},
            },
            "required": ["variable_name", "variable_value"],
        },
    )

    async def execute(self, ctx: ToolContext, params: dict[str, Any]) -> ToolResult:
        name = params["variable_name"]
        path = Path(ctx.cwd) / ".Renviron"
        self.log(f"Adding {name} to .Renviron")
        content = path.read_text(encoding="utf-8") if path.exists() else ""
        new_content, replaced = set_renviron_line(content, name, params["variable_value"])
        write_text_atomic(path, new_content)
        self.success(f"Environment variable {name} stored in .Renviron")
        return ToolResult(
            {
                "variable_name": name,
                "renviron_path": str(path),
                "updated_existing": replaced,
                "restart_needed": True,
                "restart_instructions": "Restart R session to load new environment variables",
            },
            [str(path)],
        )


@dataclass
class GetEnvironmentVariableTool(BaseTool):
    spec: ToolSpec = ToolSpec(
        name="r_get_environment_variable",
        description="Generate R code that reads a variable with Sys.getenv and warns when it is unset.",
        parameters={
            "type": "object",
            "properties": {"variable_name": _ENV_NAME},
            "required": ["variable_name"],
        },
    )

    async def execute(self, ctx: ToolContext, params: dict[str, Any]) -> ToolResult:
        name = params["variable_name"]
        return ToolResult(
            {"variable_name": name, "r_code": rcode.get_env_var(name), "usage": f'Sys.getenv("{name}")'}
        )


@dataclass
class OjsDefineDataTool(BaseTool):
    spec: ToolSpec = ToolSpec(
        name="r_ojs_define_data",
        description="Send an R data frame to ObservableJS with ojs_define().",
        parameters={
            "type": "object",
            "properties": {
                "r_data_frame": {"type": "string", "minLength": 1},
                "ojs_variable_name": {"type": "string", "minLength": 1},
                "chunk_options": {"type": "array", "items": {"type": "string"}},
            },
            "required": ["r_data_frame", "ojs_variable_name"],
        },
    )

    async def execute(self, ctx: ToolContext, params: dict[str, Any]) -> ToolResult:
        df = params["r_data_frame"]
        var = params["ojs_variable_name"]
        r_chunk = rcode.ojs_define_chunk(df, var, params.get("chunk_options"))
        ojs_usage = rcode.ojs_usage_chunk(var)
        self.success(f"Generated ojs_define for {df} -> {var}")
        return ToolResult(
            {
                "r_chunk": r_chunk,
                "ojs_usage_example": ojs_usage,
                "complete_example": f"{r_chunk}\n{ojs_usage}",
                "r_data_frame": df,
                "ojs_variable_name": var,
            }
        )


@dataclass
class Httr2ApiAccessTool(BaseTool):
    spec: ToolSpec = ToolSpec(
        name="r_package_httr2_api_access",
        description="Generic httr2 helper: build url, add bearer token, POST JSON, return parsed response.",
        parameters={
            "type": "object",
            "properties": {
                "api_endpoint": {"type": "string", "minLength": 1},
                "request_path_append": {"type": "string", "minLength": 1},
                "authentication_token": {"type": "string", "minLength": 1},
                "body_json": {"type": ["object", "array", "string"], "minLength": 1},
            },
            "required": ["api_endpoint", "request_path_append", "authentication_token", "body_json"],
        },
    )

    async def execute(self, ctx: ToolContext, params: dict[str, Any]) -> ToolResult:
        endpoint = params["api_endpoint"]
        request_path = params["request_path_append"]
        body = params["body_json"]
        self.log(f"Generating httr2 API call to: {endpoint}{request_path}")
        token_file = _private_temp("pyquarto-token-", ".txt", params["authentication_token"])
        body_file = _private_temp("pyquarto-body-", ".json", body if isinstance(body, str) else json.dumps(body))
        return ToolResult(
            {
                "r_code": rcode.httr2_call(endpoint, request_path, token_file, body_file),
                "endpoint": f"{endpoint}{request_path}",
                "token_file": token_file,
                "body_file": body_file,
                "token_env_var": "PYQUARTO_API_TOKEN",
                "security_note": "Token and body are stored in private temp files; delete them when done.",
                "packages_required": ["httr2", "jsonlite"],
            },
            [token_file, body_file],
        )


@dataclass
class GtCreateTableTool(BaseTool):
    spec: ToolSpec = ToolSpec(
        name="r_package_gt_create_table",
        description="Generate a gt table pipeline with title, labels, widths and theme.",
        parameters={
            "type": "object",
            "properties": {
                "data_frame": {"type": "string", "minLength": 1},
                "gt_options": {"type": "object"},
            },
            "required": ["data_frame"],
        },
    )

    async def execute(self, ctx: ToolContext, params: dict[str, Any]) -> ToolResult:
        df = params["data_frame"]
        opts = params.get("gt_options") or {}
        return ToolResult(
            {
                "r_code": rcode.gt_table(df, opts),
                "data_frame": df,
                "gt_options": opts,
                "option_examples": rcode.GT_OPTION_EXAMPLES,
                "package_required": "gt",
            }
        )


@dataclass
class DownloadFileTool(BaseTool):
    spec: ToolSpec = ToolSpec(
        name="r_download_file",
        description="Download a file into the repository and generate matching R download code.",
        parameters={
            "type": "object",
            "properties": {
                "url": {"type": "string", "minLength": 1},
                "local_path": {"type": "string", "minLength": 1},
                "mode": {"type": "string", "enum": ["wb", "w", "a", "ab"], "default": "wb"},
            },
            "required": ["url", "local_path"],
        },
    )

    async def execute(self, ctx: ToolContext, params: dict[str, Any]) -> ToolResult:
        url = params["url"]
        mode = params.get("mode") or "wb"
        dest = ctx.path(params["local_path"])
        self.log(f"Downloading {url}")
        download_error: str | None = None
        touched: list[str] = []
        try:
            async with httpx.AsyncClient(
                timeout=ctx.settings.timeouts.http, transport=ctx.transport, follow_redirects=True
            ) as client:
                resp = await client.get(url)
                resp.raise_for_status()
            write_bytes(dest, resp.content)
            touched.append(str(dest))
            self.success(f"File downloaded: {len(resp.content)} bytes")
        except httpx.HTTPError as e:
            # the generated R code can still fetch it later
            download_error = str(e)
            self.error(f"Direct download failed, R code will handle it: {e}")
        return ToolResult(
            {
                "url": url,
                "local_path": str(dest),
                "r_code": rcode.download_file(url, params["local_path"], mode),
                "file_exists": dest.exists(),
                "download_error": download_error,
            },
            touched,
        )


@dataclass
class JsonParseTool(BaseTool):
    spec: ToolSpec = ToolSpec(
        name="r_json_parse",
        description="Validate a JSON string and generate jsonlite code that parses it.",
        parameters={
            "type": "object",
            "properties": {"json_string": {"type": "string", "minLength": 1}},
            "required": ["json_string"],
        },
    )

    async def execute(self, ctx: ToolContext, params: dict[str, Any]) -> ToolResult:
        text = params["json_string"]
        parse_error: str | None = None
        try:
            json.loads(text)
        except json.JSONDecodeError as e:
            parse_error = f"{e.msg} at line {e.lineno} column {e.colno}"
        json_file = _private_temp("pyquarto-json-", ".json", text)
        return ToolResult(
            {
                "json_valid": parse_error is None,
                "parse_error": parse_error,
                "r_code": rcode.json_parse(json_file),
                "temp_json_file": json_file,
                "package_required": "jsonlite",
            },
            [json_file],
        )


@dataclass
class ZipFilesTool(BaseTool):
    spec: ToolSpec = ToolSpec(
        name="r_zip_files_for_download",
        description="Zip a folder so users can download the whole project.",
        parameters={
            "type": "object",
            "properties": {
                "output_file_path": {"type": "string", "minLength": 1},
                "folder_to_zip": {"type": "string", "minLength": 1},
            },
            "required": ["output_file_path", "folder_to_zip"],
        },
    )

    async def execute(self, ctx: ToolContext, params: dict[str, Any]) -> ToolResult:
        out = params["output_file_path"]
        folder = params["folder_to_zip"]
        return ToolResult(
            {
                "output_file_path": out,
                "folder_to_zip": folder,
                "r_code": rcode.zip_folder(out, folder),
                "download_ready": True,
            }
        )
