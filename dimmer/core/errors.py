from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class DimmerError(Exception):
    code: str
    message: str
    data: dict[str, Any] | None = None

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


class ValidationError(DimmerError):
    pass


class ToolNotFound(DimmerError):
    pass


class ScriptExecutionError(DimmerError):
    pass


class StagingError(DimmerError):
    pass


class SetupAbandoned(DimmerError):
    pass
