from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Optional, Sequence

from ..errors import ExternalCollaboratorError


@dataclass
class CmdResult:
    returncode: int
    stdout: str
    stderr: str


async def run_cmd(
    cmd: Sequence[str],
    cwd: str,
    timeout: Optional[float] = 120,
    input_text: str | None = None,
) -> CmdResult:
    """Run a command without a shell and capture its output.

    Raises ExternalCollaboratorError when the executable is missing or the
    timeout expires; a non-zero exit is reported through CmdResult.
    """
    name = cmd[0]
    try:
        proc = await asyncio.create_subprocess_exec(
            *cmd,
            cwd=cwd,
            stdin=asyncio.subprocess.PIPE if input_text is not None else asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except FileNotFoundError:
        raise ExternalCollaboratorError(name, f"executable not found: {name}. Is it installed and on PATH?")

    data = input_text.encode("utf-8") if input_text is not None else None
    try:
        out, err = await asyncio.wait_for(proc.communicate(data), timeout=timeout)
    except asyncio.TimeoutError:
        proc.kill()
        await proc.wait()
        raise ExternalCollaboratorError(name, f"timed out after {timeout}s: {' '.join(cmd)}")
    return CmdResult(
        proc.returncode if proc.returncode is not None else -1,
        out.decode("utf-8", errors="replace"),
        err.decode("utf-8", errors="replace"),
    )


async def check_cmd(
    cmd: Sequence[str],
    cwd: str,
    timeout: Optional[float] = 120,
    input_text: str | None = None,
) -> CmdResult:
    res = await run_cmd(cmd, cwd=cwd, timeout=timeout, input_text=input_text)
    if res.returncode != 0:
        detail = (res.stderr or res.stdout).strip()
        raise ExternalCollaboratorError(
            cmd[0],
            f"`{' '.join(cmd)}` exited with code {res.returncode}" + (f": {detail.splitlines()[-1]}" if detail else ""),
            returncode=res.returncode,
            detail=detail,
        )
    return res
