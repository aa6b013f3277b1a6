from __future__ import annotations

import shutil
import subprocess
from typing import Any, Dict, List

from dimmer.core.paths import expand_user_path

OSASCRIPT = "osascript"


def _command(args: Dict[str, Any]) -> List[str]:
    path_raw = args.get("path")
    source = args.get("source")
    if isinstance(path_raw, str) and path_raw:
        return [OSASCRIPT, str(expand_user_path(path_raw))]
    if isinstance(source, str) and source:
        return [OSASCRIPT, "-e", source]
    raise ValueError("script.run: one of 'path' or 'source' must be a non-empty string")


def run(args: Dict[str, Any], dry_run: bool) -> Dict[str, Any]:
    """
    Run an AppleScript through osascript and report how it went.
    args:
      - path: string (script file), or
      - source: string (inline script)

    A script error is not raised: the result carries ok=false plus every field
    osascript reported, so callers can show it to the user.
    """
    cmd = _command(args)

    if dry_run:
        return {
            "ok": True,
            "dry_run": True,
            "command": cmd,
            "expected_effects": [{"kind": "script", "summary": f"Run {' '.join(cmd[1:])}", "resources": cmd[1:2]}],
        }

    if shutil.which(OSASCRIPT) is None:
        return {"ok": False, "dry_run": False, "command": cmd, "error": f"{OSASCRIPT} not found on PATH"}

    proc = subprocess.run(cmd, capture_output=True, text=True, check=False)
    out: Dict[str, Any] = {
        "ok": proc.returncode == 0,
        "dry_run": False,
        "command": cmd,
        "returncode": proc.returncode,
        "stdout": proc.stdout,
    }
    if proc.returncode != 0:
        out["stderr"] = proc.stderr.strip()
    return out
