from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class RuntimeContext:
    """
    Process-wide settings resolved once at startup.

    Hard rules:
    - sandboxed never changes for the lifetime of the process.
    - scripts_dir is the directory the user must grant; selections are compared against it.
    """

    run_id: str
    sandboxed: bool
    scripts_dir: Path
    bundle_dir: Path
    dry_run: bool = False
    trace_path: Path = Path("trace.jsonl")
    meta: dict[str, Any] = field(default_factory=dict)
