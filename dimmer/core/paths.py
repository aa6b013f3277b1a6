from __future__ import annotations

import os
from pathlib import Path
from typing import Optional


def expand_user_path(p: str) -> Path:
    # Keep deterministic: expand ~ and environment vars in a standard way.
    return Path(os.path.expandvars(os.path.expanduser(p))).resolve()


def application_scripts_dir(bundle_id: str, *, home: Optional[Path] = None) -> Path:
    """
    The per-application user scripts directory macOS lets a sandboxed app run scripts from.

    Sandboxed apps may only execute user scripts from here, and may only write here
    after the user grants access through an open panel.
    """
    base = home if home is not None else Path("~").expanduser()
    return (base / "Library" / "Application Scripts" / bundle_id).resolve()


def same_directory(selected: Optional[str], target: Path) -> bool:
    """
    Exact identity check between a picker selection and the target directory.
    """
    if not isinstance(selected, str) or not selected:
        return False
    return expand_user_path(selected) == target.resolve()
