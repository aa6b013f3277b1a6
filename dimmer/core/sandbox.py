from __future__ import annotations

import os
from typing import Mapping, Optional

from .errors import ValidationError

SANDBOX_ENV_KEY = "APP_SANDBOX_CONTAINER_ID"

SANDBOX_MODES = ("auto", "on", "off")


def detect_sandbox(env: Optional[Mapping[str, str]] = None) -> bool:
    """
    macOS exports the container id into every sandboxed process.
    """
    env = os.environ if env is None else env
    value = env.get(SANDBOX_ENV_KEY)
    return isinstance(value, str) and bool(value.strip())


def resolve_sandbox(mode: str, env: Optional[Mapping[str, str]] = None) -> bool:
    if mode == "on":
        return True
    if mode == "off":
        return False
    if mode == "auto":
        return detect_sandbox(env)
    raise ValidationError(
        code="config.invalid",
        message="sandbox must be one of: auto|on|off",
        data={"sandbox": mode},
    )
