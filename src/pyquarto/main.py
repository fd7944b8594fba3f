from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any, NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .app_context import Toolkit
from .errors import PyQuartoError

app = typer.Typer(add_completion=False, help="pyquarto: Quarto/R/GitHub authoring tools behind one dispatcher.")
console = Console()
err_console = Console(stderr=True)


def _resolve_cwd(cwd: Path | None) -> Path:
    cwd = Path(str(cwd or Path.cwd())).expanduser().resolve()
    if not cwd.is_dir():
        raise typer.BadParameter(f"--cwd must be an existing directory, got: {cwd}")
    return cwd


def _parse_params(raw: str | None) -> Any:
    if raw is None or not raw.strip():
        return {}
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON params: {e.msg} (line {e.lineno} column {e.colno})") from e


def _fail(message: str) -> NoReturn:
    err_console.print(f"[red]Error:[/red] {escape(message)}", soft_wrap=True, highlight=False)
    raise typer.Exit(code=1)


def _print_catalog(kit: Toolkit) -> None:
    table = Table(title="pyquarto tools")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Tool", style="cyan", no_wrap=True)
    table.add_column("Description")
    for i, spec in enumerate(kit.tools.list_specs(), 1):
        table.add_row(str(i), spec.name, spec.description)
    console.print(table)

    report = kit.validate_against_manifest()
    console.print("\n[bold]Implementation status:[/bold]")
    mark = "[green]OK[/green]" if report.complete else "[red]INCOMPLETE[/red]"
    console.print(f"{mark} Implemented: {report.implemented}/{report.defined}")
    if report.missing:
        console.print(f"[red]Missing:[/red] {', '.join(report.missing)}")
    if report.extra:
        console.print(f"[yellow]Extra:[/yellow] {', '.join(report.extra)}")


@app.command()
def main(
    tool_name: Optional[str] = typer.Argument(None, help="Tool to run. Omit to list every tool."),
    json_params: Optional[str] = typer.Argument(None, help="Tool parameters as a JSON object."),
    cwd: Path = typer.Option(None, "--cwd", help="Working directory for relative paths. Defaults to current directory."),
    config: Path = typer.Option(None, "--config", help="Explicit settings JSON (pyquarto.json) path."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Silence tool progress logs on stderr."),
):
    """List the tool catalog, or run TOOL_NAME with JSON_PARAMS and print the JSON result."""
    try:
        kit = Toolkit.from_env(_resolve_cwd(cwd), config_path=config, quiet=quiet)
        if tool_name is None:
            _print_catalog(kit)
            return
        params = _parse_params(json_params)
        result = asyncio.run(kit.execute(tool_name, params))
    except (PyQuartoError, OSError, ValueError) as e:
        _fail(str(e))
    typer.echo(json.dumps(result, indent=2, ensure_ascii=False, default=str))


if __name__ == "__main__":
    app()
