from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple

from dimmer.core.actions import Action
from dimmer.core.errors import DimmerError, ScriptExecutionError
from dimmer.core.main_queue import MainQueue
from dimmer.core.runtime_context import RuntimeContext
from dimmer.prefs.preferences import Preferences
from dimmer.registry.tool_registry import ToolRegistry
from dimmer.trace.trace_emitter import TraceEmitter
from dimmer.ui.presenter import Alert, Presenter

SANDBOXED_FAILURE_TITLE = "Apple Script Failed"
CRITICAL_FAILURE_TITLE = "Report Critical Bug To Developer"


def _error_fields(out: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in out.items() if k not in ("ok", "dry_run", "stdout")}


def format_error_fields(fields: Dict[str, Any]) -> str:
    return "".join(f"{k}: {v}\n" for k, v in fields.items())


class ScriptRegistry:
    """
    Resolves Actions to script files and runs them.

    Sandboxed: scripts live in the granted Application Scripts folder and run in the
    background; failures come back to the main queue as an alert.
    Unsandboxed: scripts run straight from the bundle, synchronously. A failure there is
    a bug rather than a permission problem, so the alert carries every error field.
    """

    def __init__(
        self,
        ctx: RuntimeContext,
        tools: ToolRegistry,
        preferences: Preferences,
        main_queue: MainQueue,
        presenter: Presenter,
        trace: TraceEmitter,
    ):
        self._ctx = ctx
        self._tools = tools
        self._prefs = preferences
        self._main = main_queue
        self._presenter = presenter
        self._trace = trace

    @property
    def dry_run(self) -> bool:
        return self._ctx.dry_run

    @property
    def folder(self) -> Path:
        return self._ctx.scripts_dir if self._ctx.sandboxed else self._ctx.bundle_dir

    def script_path(self, action: Action) -> Path:
        return self.folder / action.file_name

    def source_path(self, action: Action) -> Path:
        return self._ctx.bundle_dir / action.file_name

    def destination_path(self, action: Action) -> Path:
        return self._ctx.scripts_dir / action.file_name

    def is_ready(self) -> bool:
        if not self._ctx.sandboxed:
            return True
        return self._prefs.did_setup_apple_script

    def execute(self, action: Action, on_success: Optional[Callable[[], None]] = None) -> bool:
        """
        Run the script for `action`. Returns False (and does nothing else) until setup is done.

        Sandboxed runs go to the background, so True only means the run was submitted.
        Unsandboxed runs are synchronous and return the script outcome. `on_success`
        runs only after the script succeeded: inline when unsandboxed, on the main
        queue otherwise.
        """
        if not self.is_ready():
            self._trace.emit("execution_skipped", action=action.value, message="Apple Script setup not finished")
            return False

        path = self.script_path(action)
        if self._ctx.sandboxed:
            self._trace.emit("script_submitted", action=action.value, data={"path": str(path)})
            self._main.spawn(self._run_sandboxed, action, path, on_success)
            return True
        return self._run_in_process(action, path, on_success)

    def _call(self, path: Path) -> Tuple[bool, Dict[str, Any]]:
        try:
            out = self._tools.call("script.run", {"path": str(path)}, dry_run=self._ctx.dry_run)
        except (OSError, ValueError, DimmerError) as e:
            return False, {"path": str(path), "error": repr(e)}
        return bool(out.get("ok")), out

    def _succeeded(self, action: Action, path: Path, on_success: Optional[Callable[[], None]]) -> None:
        self._trace.emit("script_executed", action=action.value, data={"path": str(path), "dry_run": self._ctx.dry_run})
        if on_success is None:
            return
        if self._ctx.sandboxed:
            self._main.submit(on_success)
        else:
            on_success()

    def _failed(self, action: Action, out: Dict[str, Any]) -> ScriptExecutionError:
        err = ScriptExecutionError(code="script.failed", message="Apple Script execution failed", data=_error_fields(out))
        self._trace.emit("script_failed", action=action.value, message=str(err), data=err.data)
        return err

    def _run_sandboxed(self, action: Action, path: Path, on_success: Optional[Callable[[], None]] = None) -> None:
        ok, out = self._call(path)
        if ok:
            self._succeeded(action, path, on_success)
            return
        err = self._failed(action, out)
        detail = out.get("stderr") or out.get("error") or err.message
        self._main.submit(self._presenter.show_alert, Alert(title=SANDBOXED_FAILURE_TITLE, message=str(detail)))

    def _run_in_process(self, action: Action, path: Path, on_success: Optional[Callable[[], None]] = None) -> bool:
        ok, out = self._call(path)
        if ok:
            self._succeeded(action, path, on_success)
            return True
        err = self._failed(action, out)
        alert = Alert(title=CRITICAL_FAILURE_TITLE, message=format_error_fields(err.data or {}), style="critical")
        self._main.submit(self._presenter.show_alert, alert)
        return False
