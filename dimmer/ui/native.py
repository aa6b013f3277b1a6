from __future__ import annotations

from typing import Optional

from dimmer.registry.tool_registry import ToolRegistry

from .presenter import Alert, DirectoryPanel, SelectionHandler


def _quote(text: str) -> str:
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'


class NativePresenter:
    """
    macOS dialogs driven through osascript (System Events standard additions).

    A cancelled "choose folder" (error -128) is reported to the completion as no selection.
    """

    def __init__(self, tools: ToolRegistry, *, app_name: str = "Dimmer") -> None:
        self._tools = tools
        self._app_name = app_name

    def _run(self, source: str) -> dict:
        return self._tools.call("script.run", {"source": source}, dry_run=False)

    def show_alert(self, alert: Alert) -> None:
        style = "critical" if alert.style == "critical" else ("informational" if alert.style == "informational" else "warning")
        source = f"display alert {_quote(alert.title)}"
        if alert.message:
            source += f" message {_quote(alert.message)}"
        source += f" as {style}"
        self._run(source)

    def choose_directory(self, panel: DirectoryPanel, completion: SelectionHandler) -> None:
        source = (
            f"POSIX path of (choose folder with prompt {_quote(panel.prompt)}"
            f" default location (POSIX file {_quote(str(panel.directory))}))"
        )
        out = self._run(source)
        selected: Optional[str] = None
        if out.get("ok"):
            text = str(out.get("stdout") or "").strip()
            selected = text or None
        completion(selected)

    def show_settings(self) -> None:
        self._run(
            f"display notification {_quote('Grant access to the AppleScript folder to finish setup.')}"
            f" with title {_quote(self._app_name)}"
        )
