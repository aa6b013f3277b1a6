from __future__ import annotations

from typing import Iterable, List, Optional

from .presenter import Alert, DirectoryPanel, SelectionHandler


class ScriptedPresenter:
    """
    Deterministic presenter for tests/examples.

    Each open panel consumes the next scripted selection. When the script runs out,
    the completion is held in `pending` so a test can answer it later (or never,
    which models a user leaving the panel open).
    """

    def __init__(self, selections: Iterable[Optional[str]] = ()) -> None:
        self._selections: List[Optional[str]] = list(selections)
        self.alerts: List[Alert] = []
        self.panels: List[DirectoryPanel] = []
        self.pending: List[SelectionHandler] = []
        self.settings_shown = 0

    def show_alert(self, alert: Alert) -> None:
        self.alerts.append(alert)

    def choose_directory(self, panel: DirectoryPanel, completion: SelectionHandler) -> None:
        self.panels.append(panel)
        if self._selections:
            completion(self._selections.pop(0))
        else:
            self.pending.append(completion)

    def show_settings(self) -> None:
        self.settings_shown += 1

    def answer(self, selected: Optional[str]) -> None:
        completion = self.pending.pop(0)
        completion(selected)
