from __future__ import annotations

import os
import tempfile

from ..util.subprocess import CmdResult, check_cmd


async def run_r_script(r_bin: str, script: str, *, cwd: str, timeout: float) -> CmdResult:
    """Run ``script`` through ``R --slave --no-restore --file=...`` and return its output."""
    fd, path = tempfile.mkstemp(prefix="pyquarto-", suffix=".R")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(script)
        return await check_cmd([r_bin, "--slave", "--no-restore", f"--file={path}"], cwd=cwd, timeout=timeout)
    finally:
        os.unlink(path)
