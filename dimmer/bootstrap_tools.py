from __future__ import annotations

from typing import Any, Dict

from dimmer.registry.tool_registry import ToolRegistry
from tools.fs.copy import run as fs_copy
from tools.fs.mkdir import run as fs_mkdir
from tools.fs.remove import run as fs_remove
from tools.fs.stat import run as fs_stat
from tools.script.run import run as script_run


def _path_only_schema() -> Dict[str, Any]:
    return {"type": "object", "additionalProperties": False, "properties": {"path": {"type": "string"}}, "required": ["path"]}


def build_tool_registry() -> ToolRegistry:
    """
    Register the built-in OS tools used by setup and script execution.
    """
    reg = ToolRegistry()

    def reg_tool(tool_id: str, title: str, side_effects: str, destructive: bool, args_schema: Dict[str, Any], impl):
        reg.register(
            {
                "tool_id": tool_id,
                "version": "0.1.0",
                "title": title,
                "side_effects": side_effects,
                "destructive": destructive,
                "supports_dry_run": True,
                "args_schema": args_schema,
            },
            impl,
        )

    reg_tool("fs.stat", "Stat a path", "none", False, _path_only_schema(), fs_stat)
    reg_tool("fs.mkdir", "Ensure a directory exists", "filesystem", False, _path_only_schema(), fs_mkdir)
    reg_tool(
        "fs.remove",
        "Remove a file",
        "filesystem",
        True,
        {
            "type": "object",
            "additionalProperties": False,
            "properties": {"path": {"type": "string"}, "missing_ok": {"type": "boolean"}},
            "required": ["path"],
        },
        fs_remove,
    )
    reg_tool(
        "fs.copy",
        "Copy a file",
        "filesystem",
        False,
        {
            "type": "object",
            "additionalProperties": False,
            "properties": {"from": {"type": "string"}, "to": {"type": "string"}},
            "required": ["from", "to"],
        },
        fs_copy,
    )
    reg_tool(
        "script.run",
        "Run an AppleScript via osascript",
        "automation",
        False,
        {
            "type": "object",
            "additionalProperties": False,
            "properties": {"path": {"type": "string"}, "source": {"type": "string"}},
            "oneOf": [{"required": ["path"]}, {"required": ["source"]}],
        },
        script_run,
    )

    return reg
