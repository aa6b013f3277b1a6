from __future__ import annotations

from typing import Any, Dict

from dimmer.core.paths import expand_user_path


def run(args: Dict[str, Any], dry_run: bool) -> Dict[str, Any]:
    """
    Remove a single file (never a directory).
    args:
      - path: string
      - missing_ok: bool (default true)
    """
    path_raw = args.get("path")
    if not isinstance(path_raw, str) or not path_raw:
        raise ValueError("fs.remove: 'path' must be a non-empty string")
    missing_ok = bool(args.get("missing_ok", True))
    path = expand_user_path(path_raw)

    if path.is_dir():
        raise IsADirectoryError(f"fs.remove: refusing to remove a directory: {path}")

    if dry_run:
        return {
            "path": str(path),
            "would_remove": path.exists(),
            "dry_run": True,
            "expected_effects": [{"kind": "fs_remove", "summary": f"Remove {path}", "resources": [str(path)]}],
        }

    existed = path.exists()
    path.unlink(missing_ok=missing_ok)
    return {"path": str(path), "removed": existed, "dry_run": False}
