from __future__ import annotations

import threading
from enum import Enum
from pathlib import Path
from typing import Any, Callable, List, Optional

from dimmer.core.actions import Action
from dimmer.core.errors import DimmerError, SetupAbandoned, StagingError
from dimmer.core.main_queue import MainQueue
from dimmer.core.paths import same_directory
from dimmer.core.runtime_context import RuntimeContext
from dimmer.prefs.preferences import Preferences
from dimmer.registry.script_registry import ScriptRegistry
from dimmer.registry.tool_registry import ToolRegistry
from dimmer.trace.trace_emitter import TraceEmitter
from dimmer.ui.presenter import Alert, DirectoryPanel, Presenter

PANEL_TITLE = "Select Apple Script Folder"
PANEL_PROMPT = "Please open this folder so our app can help you manage dark mode"
WRONG_SELECTION_TITLE = "Not Really..."
WRONG_SELECTION_MESSAGE = "You MUST select the prompted thing for this app to work."
STAGING_FAILED_TITLE = "Apple Script Setup Failed"


class NegotiationState(Enum):
    IDLE = "idle"
    CHECK_NEEDED = "check_needed"
    AWAITING_SELECTION = "awaiting_selection"
    VALIDATING = "validating"
    STAGING = "staging"
    COMPLETE = "complete"


class SetupOrchestrator:
    """
    One-time negotiation that installs the Apple Scripts into the sandbox's
    Application Scripts folder.

    Construct exactly one per process. The lock guards only `is_setting_up`: it is held
    for the check-and-flip on entry and for the clear on exit, never while waiting on
    the user.

    Flow:
    - setup_if_needed(): cheap checks, then hand off to the main queue
    - request_permission(): open panel pointed at the target folder
    - handle_selection(): wrong folder -> alert and ask again (no limit)
    - stage_scripts(): replace every script, then record didSetupAppleScript
    """

    def __init__(
        self,
        ctx: RuntimeContext,
        tools: ToolRegistry,
        preferences: Preferences,
        registry: ScriptRegistry,
        main_queue: MainQueue,
        presenter: Presenter,
        trace: TraceEmitter,
    ):
        self._ctx = ctx
        self._tools = tools
        self._prefs = preferences
        self._registry = registry
        self._main = main_queue
        self._presenter = presenter
        self._trace = trace

        self._lock = threading.Lock()
        self._is_setting_up = False
        self._state = NegotiationState.IDLE

    @property
    def state(self) -> NegotiationState:
        with self._lock:
            return self._state

    @property
    def is_setting_up(self) -> bool:
        with self._lock:
            return self._is_setting_up

    @property
    def target_directory(self) -> Path:
        return self._ctx.scripts_dir

    def _set_state(self, state: NegotiationState) -> None:
        with self._lock:
            self._state = state

    def _skip(self, reason: str) -> bool:
        self._trace.emit("setup_skipped", state=self.state.value, data={"reason": reason})
        return False

    def _exists(self, path: Path) -> bool:
        out = self._tools.call("fs.stat", {"path": str(path)}, dry_run=self._ctx.dry_run)
        return bool(out.get("exists"))

    def setup_if_needed(self) -> bool:
        """
        Start a negotiation when one is required and none is running.
        Safe to call from any thread, any number of times. Returns True only for the
        call that actually started a negotiation.
        """
        if not self._ctx.sandboxed:
            return self._skip("not_needed")
        if self._prefs.did_setup_apple_script:
            return self._skip("already_done")
        if self._exists(self._registry.destination_path(Action.TOGGLE)):
            return self._skip("already_done")

        with self._lock:
            if self._is_setting_up:
                in_flight = True
            else:
                in_flight = False
                self._is_setting_up = True
                self._state = NegotiationState.CHECK_NEEDED
        if in_flight:
            return self._skip("in_flight")

        self._trace.emit("setup_started", state=NegotiationState.CHECK_NEEDED.value, data={"target": str(self.target_directory)})
        self._main.submit(self._begin)
        return True

    def _begin(self) -> None:
        self._until_abandoned(self._presenter.show_settings)
        self.request_permission()

    def request_permission(self) -> None:
        panel = DirectoryPanel(directory=self.target_directory, title=PANEL_TITLE, prompt=PANEL_PROMPT)
        self._set_state(NegotiationState.AWAITING_SELECTION)
        self._trace.emit("permission_requested", state=NegotiationState.AWAITING_SELECTION.value, data={"directory": str(panel.directory)})
        self._until_abandoned(self._presenter.choose_directory, panel, self.handle_selection)

    def handle_selection(self, selected: Optional[str]) -> None:
        self._set_state(NegotiationState.VALIDATING)
        if not same_directory(selected, self.target_directory):
            self._set_state(NegotiationState.AWAITING_SELECTION)
            self._trace.emit(
                "selection_rejected",
                state=NegotiationState.AWAITING_SELECTION.value,
                data={"selected": selected, "expected": str(self.target_directory)},
            )
            self._until_abandoned(
                self._presenter.show_alert,
                Alert(title=WRONG_SELECTION_TITLE, message=WRONG_SELECTION_MESSAGE),
            )
            self._main.submit(self.request_permission)
            return

        self._trace.emit("selection_accepted", state=NegotiationState.VALIDATING.value, data={"selected": selected})
        self.stage_scripts()

    def stage_scripts(self) -> None:
        """
        Replace every script in the target folder with the bundled copy, then record
        that setup is done. Raises StagingError when a script cannot be installed; the
        scripts this attempt already copied are removed first so a retry is not skipped.
        """
        if not self._ctx.sandboxed:
            return
        self._set_state(NegotiationState.STAGING)
        dry_run = self._ctx.dry_run

        staged: List[Path] = []
        for action in Action:
            src = self._registry.source_path(action)
            dst = self._registry.destination_path(action)
            self._discard(dst, action)
            try:
                self._tools.call("fs.mkdir", {"path": str(dst.parent)}, dry_run=dry_run)
                out = self._tools.call("fs.copy", {"from": str(src), "to": str(dst)}, dry_run=dry_run)
            except (OSError, DimmerError) as e:
                for path in staged:
                    self._discard(path, action)
                self._fail_staging(action, src, dst, e)
            else:
                staged.append(dst)
                self._trace.emit("script_staged", action=action.value, state=NegotiationState.STAGING.value, data=out)

        if not dry_run:
            self._prefs.mark_apple_script_setup()

        with self._lock:
            self._is_setting_up = False
            self._state = NegotiationState.COMPLETE
        self._trace.emit("setup_completed", state=NegotiationState.COMPLETE.value, data={"dry_run": dry_run})

    def _discard(self, path: Path, action: Action) -> None:
        # best effort: a file that stays behind makes the following fs.copy fail
        try:
            self._tools.call("fs.remove", {"path": str(path), "missing_ok": True}, dry_run=self._ctx.dry_run)
        except (OSError, DimmerError) as e:
            self._trace.emit("script_remove_failed", action=action.value, state=self.state.value, data={"path": str(path), "error": repr(e)})

    def _fail_staging(self, action: Action, src: Path, dst: Path, cause: Exception) -> None:
        err = StagingError(
            code="setup.staging_failed",
            message=f"Could not install {action.file_name}",
            data={"from": str(src), "to": str(dst), "error": repr(cause)},
        )
        with self._lock:
            self._is_setting_up = False
            self._state = NegotiationState.IDLE
        self._trace.emit("setup_failed", action=action.value, state=NegotiationState.IDLE.value, message=str(err), data=err.data)
        self._presenter.show_alert(Alert(title=STAGING_FAILED_TITLE, message=f"{err.message}: {cause}", style="critical"))
        raise err from cause

    def _until_abandoned(self, fn: Callable[..., Any], *args: Any) -> None:
        try:
            fn(*args)
        except SetupAbandoned:
            self._abandon()
            raise

    def _abandon(self) -> None:
        with self._lock:
            was_running = self._is_setting_up
            self._is_setting_up = False
            self._state = NegotiationState.IDLE
        if was_running:
            self._trace.emit("setup_abandoned", state=NegotiationState.IDLE.value)
