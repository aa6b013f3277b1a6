from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Protocol


ALERT_STYLES = ("informational", "warning", "critical")


@dataclass(frozen=True)
class Alert:
    title: str
    message: str = ""
    style: str = "warning"


@dataclass(frozen=True)
class DirectoryPanel:
    """
    Open panel request: directories only, pre-navigated to `directory`.
    """

    directory: Path
    title: str
    prompt: str
    can_choose_directories: bool = True
    can_choose_files: bool = False
    floating: bool = True


SelectionHandler = Callable[[Optional[str]], None]


class Presenter(Protocol):
    def show_alert(self, alert: Alert) -> None: ...

    def choose_directory(self, panel: DirectoryPanel, completion: SelectionHandler) -> None: ...

    def show_settings(self) -> None: ...
