from __future__ import annotations

import shutil
from typing import Any, Dict

from dimmer.core.paths import expand_user_path


def run(args: Dict[str, Any], dry_run: bool) -> Dict[str, Any]:
    """
    Copy a file. The destination must not exist (remove it first to replace it).
    args:
      - from: string
      - to: string
    """
    src_raw = args.get("from")
    dst_raw = args.get("to")
    if not isinstance(src_raw, str) or not src_raw:
        raise ValueError("fs.copy: 'from' must be a non-empty string")
    if not isinstance(dst_raw, str) or not dst_raw:
        raise ValueError("fs.copy: 'to' must be a non-empty string")
    src = expand_user_path(src_raw)
    dst = expand_user_path(dst_raw)

    if dry_run:
        return {
            "from": str(src),
            "to": str(dst),
            "dry_run": True,
            "src_exists": src.exists(),
            "dst_exists": dst.exists(),
            "expected_effects": [
                {"kind": "fs_copy", "summary": f"Copy {src} -> {dst}", "resources": [str(src), str(dst)]}
            ],
        }

    if not src.is_file():
        raise FileNotFoundError(f"fs.copy: source not found: {src}")
    if dst.exists():
        raise FileExistsError(f"fs.copy: destination exists: {dst}")

    shutil.copy2(src, dst)
    return {"from": str(src), "to": str(dst), "dry_run": False, "size": dst.stat().st_size}
