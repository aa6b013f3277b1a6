from __future__ import annotations

from pathlib import Path


def _package_dir(package_name: str) -> Path:
    """
    Return the on-disk directory for an imported package.

    Note:
    This assumes a filesystem-backed install (wheel or editable). The bundled scripts
    are copied and executed by path, so a zipimport layout is not supported.
    """
    module = __import__(package_name, fromlist=["__file__"])
    p = getattr(module, "__file__", None)
    if not isinstance(p, str) or not p:
        raise RuntimeError(f"Cannot resolve package directory for: {package_name}")
    return Path(p).resolve().parent


def data_dir() -> Path:
    return _package_dir("dimmer") / "data"


def bundled_scripts_dir() -> Path:
    """
    Directory holding the shipped AppleScripts (the copy source during setup).
    """
    return data_dir() / "scripts"


def config_schema_path() -> Path:
    return data_dir() / "schemas" / "config.schema.json"
