from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from dimmer.bootstrap_tools import build_tool_registry
from dimmer.core.appearance import AppearanceSwitcher
from dimmer.core.main_queue import MainQueue
from dimmer.core.runtime_context import RuntimeContext
from dimmer.prefs.preferences import Preferences
from dimmer.prefs.store import PreferencesStore
from dimmer.registry.script_registry import ScriptRegistry
from dimmer.registry.tool_registry import ToolRegistry
from dimmer.setup.orchestrator import SetupOrchestrator
from dimmer.trace.trace_emitter import TraceEmitter
from dimmer.trace.trace_store_jsonl import TraceStoreJSONL
from dimmer.ui.console import ConsolePresenter
from dimmer.ui.presenter import Presenter


@dataclass(frozen=True)
class DimmerApp:
    """
    Process-scoped object graph. Build it once; the orchestrator inside owns the
    setup guard for as long as the process lives.
    """

    ctx: RuntimeContext
    tools: ToolRegistry
    preferences: Preferences
    main_queue: MainQueue
    trace: TraceEmitter
    registry: ScriptRegistry
    orchestrator: SetupOrchestrator
    switcher: AppearanceSwitcher


def build_app(
    ctx: RuntimeContext,
    *,
    store: PreferencesStore,
    presenter: Optional[Presenter] = None,
    tools: Optional[ToolRegistry] = None,
    main_queue: Optional[MainQueue] = None,
) -> DimmerApp:
    tools = tools or build_tool_registry()
    presenter = presenter or ConsolePresenter()
    main_queue = main_queue or MainQueue()
    preferences = Preferences(store)
    trace = TraceEmitter(store=TraceStoreJSONL(ctx.trace_path), run_id=ctx.run_id)

    registry = ScriptRegistry(ctx, tools, preferences, main_queue, presenter, trace)
    orchestrator = SetupOrchestrator(ctx, tools, preferences, registry, main_queue, presenter, trace)
    switcher = AppearanceSwitcher(registry, orchestrator, preferences)
    return DimmerApp(
        ctx=ctx,
        tools=tools,
        preferences=preferences,
        main_queue=main_queue,
        trace=trace,
        registry=registry,
        orchestrator=orchestrator,
        switcher=switcher,
    )
