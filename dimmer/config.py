from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import jsonschema
import yaml

from dimmer.core.errors import ValidationError
from dimmer.core.paths import application_scripts_dir, expand_user_path
from dimmer.core.runtime_context import RuntimeContext
from dimmer.core.sandbox import resolve_sandbox
from dimmer.resources import bundled_scripts_dir, config_schema_path

DEFAULT_BUNDLE_ID = "io.github.dimmer"


def default_config_dir() -> Path:
    """
    Default per-user config location.

    - If XDG_CONFIG_HOME is set, use it.
    - Else use ~/.config
    """
    base = os.environ.get("XDG_CONFIG_HOME")
    if isinstance(base, str) and base.strip():
        return Path(base).expanduser() / "dimmer"
    return Path("~/.config").expanduser() / "dimmer"


def default_config_path() -> Path:
    return default_config_dir() / "config.yml"


@dataclass(frozen=True)
class DimmerConfig:
    version: str = "0.1"
    bundle_id: str = DEFAULT_BUNDLE_ID
    sandbox: str = "auto"
    scripts_dir: Optional[str] = None
    bundle_dir: Optional[str] = None
    preferences_path: Optional[str] = None
    trace_path: Optional[str] = None

    def resolved_scripts_dir(self) -> Path:
        if self.scripts_dir:
            return expand_user_path(self.scripts_dir)
        return application_scripts_dir(self.bundle_id)

    def resolved_bundle_dir(self) -> Path:
        if self.bundle_dir:
            return expand_user_path(self.bundle_dir)
        return bundled_scripts_dir()

    def resolved_preferences_path(self) -> Path:
        if self.preferences_path:
            return expand_user_path(self.preferences_path)
        return default_config_dir() / "preferences.yml"

    def resolved_trace_path(self) -> Path:
        if self.trace_path:
            return expand_user_path(self.trace_path)
        return default_config_dir() / "trace.jsonl"


def _load_schema() -> Dict[str, Any]:
    return json.loads(config_schema_path().read_text(encoding="utf-8"))


def parse_config(obj: Any) -> DimmerConfig:
    if obj is None:
        obj = {}
    try:
        jsonschema.Draft202012Validator(_load_schema()).validate(obj)
    except jsonschema.ValidationError as e:
        raise ValidationError(code="config.schema_invalid", message="Config does not match schema", data={"error": e.message}) from e
    return DimmerConfig(**obj)


def load_config(path: Optional[Path] = None) -> DimmerConfig:
    """
    Load the YAML config. A missing file yields the defaults.
    """
    p = (path or default_config_path()).expanduser()
    if not p.exists():
        return DimmerConfig()
    try:
        obj = yaml.safe_load(p.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ValidationError(code="config.invalid", message="Config is not valid YAML", data={"path": str(p), "error": str(e)}) from e
    return parse_config(obj)


def render_config_yaml(*, bundle_id: str = DEFAULT_BUNDLE_ID, sandbox: str = "auto") -> str:
    # Keep this in sync with data/schemas/config.schema.json.
    return (
        "version: \"0.1\"\n"
        f"bundle_id: \"{bundle_id}\"\n\n"
        "# auto: detect from APP_SANDBOX_CONTAINER_ID | on | off\n"
        f"sandbox: \"{sandbox}\"\n\n"
        "# Defaults to ~/Library/Application Scripts/<bundle_id>\n"
        "scripts_dir: null\n"
        "# Defaults to the scripts shipped inside the package\n"
        "bundle_dir: null\n\n"
        f"preferences_path: \"{default_config_dir() / 'preferences.yml'}\"\n"
        f"trace_path: \"{default_config_dir() / 'trace.jsonl'}\"\n"
    )


def build_context(
    config: DimmerConfig,
    *,
    run_id: str,
    sandbox: Optional[str] = None,
    dry_run: bool = False,
    env: Optional[Mapping[str, str]] = None,
) -> RuntimeContext:
    """
    Resolve sandbox mode and directories once for the lifetime of the process.
    """
    return RuntimeContext(
        run_id=run_id,
        sandboxed=resolve_sandbox(sandbox or config.sandbox, env),
        scripts_dir=config.resolved_scripts_dir(),
        bundle_dir=config.resolved_bundle_dir(),
        dry_run=dry_run,
        trace_path=config.resolved_trace_path(),
        meta={"bundle_id": config.bundle_id},
    )
