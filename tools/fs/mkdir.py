from __future__ import annotations

from typing import Any

from dimmer.core.paths import expand_user_path


def run(args: dict[str, Any], dry_run: bool) -> dict[str, Any]:
    """
    Make sure a directory exists (non-destructive).
    args:
      - path: string
    """
    path_raw = args.get("path")
    if not isinstance(path_raw, str) or not path_raw:
        raise ValueError("fs.mkdir: 'path' must be a non-empty string")

    path = expand_user_path(path_raw)
    if dry_run:
        return {
            "path": str(path),
            "would_create": not path.exists(),
            "dry_run": True,
            "expected_effects": [
                {"kind": "fs_mkdir", "summary": f"Create directory {path}", "resources": [str(path)]}
            ],
        }

    before = path.exists()
    path.mkdir(parents=True, exist_ok=True)
    return {"path": str(path), "created": not before, "dry_run": False}
