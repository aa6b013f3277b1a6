from __future__ import annotations

from typing import Any, Callable

import jsonschema

from dimmer.core.errors import ToolNotFound, ValidationError


ToolFunc = Callable[[dict[str, Any], bool], dict[str, Any]]


class ToolRegistry:
    """
    Registry for deterministic OS tools and their metadata.

    Arguments are validated against the tool's args_schema before the tool runs.
    register() replaces an existing tool, which is how tests swap in fakes.
    """

    def __init__(self) -> None:
        self._defs: dict[str, dict[str, Any]] = {}
        self._impls: dict[str, ToolFunc] = {}

    def register(self, tool_def: dict[str, Any], impl: ToolFunc) -> None:
        tool_id = tool_def["tool_id"]
        self._defs[tool_id] = tool_def
        self._impls[tool_id] = impl

    def replace(self, tool_id: str, impl: ToolFunc) -> None:
        if tool_id not in self._defs:
            raise ToolNotFound(code="tool.unknown", message=f"Unknown tool: {tool_id}", data={"tool_id": tool_id})
        self._impls[tool_id] = impl

    def get(self, tool_id: str) -> dict[str, Any] | None:
        return self._defs.get(tool_id)

    def call(self, tool_id: str, args: dict[str, Any], *, dry_run: bool) -> dict[str, Any]:
        tool_def = self._defs.get(tool_id)
        impl = self._impls.get(tool_id)
        if tool_def is None or impl is None:
            raise ToolNotFound(code="tool.unknown", message=f"Unknown tool: {tool_id}", data={"tool_id": tool_id})

        try:
            jsonschema.Draft202012Validator(tool_def.get("args_schema", {})).validate(args)
        except jsonschema.ValidationError as e:
            raise ValidationError(
                code="tool.args_invalid",
                message="Tool args validation failed",
                data={"tool_id": tool_id, "error": e.message},
            ) from e
        return impl(args, dry_run)

    def list_tools(self) -> list[dict[str, Any]]:
        return [self._defs[k] for k in sorted(self._defs.keys())]
