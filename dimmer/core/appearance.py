from __future__ import annotations

from enum import Enum

from dimmer.prefs.preferences import DARK_STYLE_VALUE, Preferences
from dimmer.registry.script_registry import ScriptRegistry
from dimmer.setup.orchestrator import SetupOrchestrator

from .actions import Action


class AppearanceStyle(Enum):
    AQUA = "aqua"
    DARK_AQUA = "darkAqua"


class AppearanceSwitcher:
    """
    The operations exposed to UI and triggers: toggle / enable / disable.

    When the scripts are not usable yet, the call kicks off setup and is dropped;
    the caller simply tries again later. The recorded style only changes once the
    script has actually succeeded.
    """

    def __init__(self, registry: ScriptRegistry, orchestrator: SetupOrchestrator, preferences: Preferences):
        self._registry = registry
        self._orchestrator = orchestrator
        self._prefs = preferences

    @property
    def current(self) -> AppearanceStyle:
        return AppearanceStyle.AQUA if self._prefs.dark_mode_style is None else AppearanceStyle.DARK_AQUA

    @property
    def is_dark(self) -> bool:
        return self.current == AppearanceStyle.DARK_AQUA

    def _record(self, style: AppearanceStyle) -> None:
        if self._registry.dry_run:
            return
        self._prefs.dark_mode_style = None if style == AppearanceStyle.AQUA else DARK_STYLE_VALUE

    def _run(self, action: Action, target: AppearanceStyle) -> bool:
        if not self._registry.is_ready():
            self._orchestrator.setup_if_needed()
            return False
        return self._registry.execute(action, on_success=lambda: self._record(target))

    def toggle(self) -> bool:
        target = AppearanceStyle.AQUA if self.is_dark else AppearanceStyle.DARK_AQUA
        return self._run(Action.TOGGLE, target)

    def enable(self) -> bool:
        return self._run(Action.ENABLE, AppearanceStyle.DARK_AQUA)

    def disable(self) -> bool:
        return self._run(Action.DISABLE, AppearanceStyle.AQUA)

    def apply(self, style: AppearanceStyle) -> bool:
        if style == AppearanceStyle.DARK_AQUA:
            return self.enable()
        return self.disable()
