from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from dimmer.app import DimmerApp, build_app
from dimmer.bootstrap_tools import build_tool_registry
from dimmer.config import build_context, default_config_path, load_config, render_config_yaml
from dimmer.core.actions import Action
from dimmer.core.errors import DimmerError, ValidationError
from dimmer.prefs.store import YamlPreferencesStore
from dimmer.trace.replay import Replay
from dimmer.ui.console import ConsolePresenter
from dimmer.ui.native import NativePresenter


def _print_json(obj: Any) -> None:
    print(json.dumps(obj, ensure_ascii=False, indent=2))


def _format_cli_error(e: Exception) -> str:
    """
    Print-friendly error formatting for CLI commands.
    - Always includes code/message (via __str__) when it's a DimmerError
    - Includes structured `data` payload when present
    """
    if isinstance(e, DimmerError) and isinstance(e.data, dict) and e.data:
        return str(e) + "\n" + json.dumps(e.data, ensure_ascii=False, indent=2, default=str)
    return str(e)


def _config_path(args: argparse.Namespace) -> Path:
    return Path(args.config).expanduser() if args.config else default_config_path()


def _build(args: argparse.Namespace) -> DimmerApp:
    config = load_config(_config_path(args))
    ctx = build_context(config, run_id=args.run_id, sandbox=args.sandbox, dry_run=bool(args.dry_run))
    tools = build_tool_registry()
    if args.presenter == "native":
        presenter = NativePresenter(tools)
    else:
        presenter = ConsolePresenter()
    store = YamlPreferencesStore(config.resolved_preferences_path())
    return build_app(ctx, store=store, presenter=presenter, tools=tools)


def _status(app: DimmerApp) -> Dict[str, Any]:
    scripts = {}
    for action in Action:
        path = app.registry.script_path(action)
        scripts[action.value] = {"path": str(path), "present": path.is_file()}
    return {
        "sandboxed": app.ctx.sandboxed,
        "scripts_dir": str(app.ctx.scripts_dir),
        "bundle_dir": str(app.ctx.bundle_dir),
        "did_setup_apple_script": app.preferences.did_setup_apple_script,
        "ready": app.registry.is_ready(),
        "setup_state": app.orchestrator.state.value,
        "style": app.switcher.current.value,
        "scripts": scripts,
    }


def _run_action(args: argparse.Namespace, name: str) -> int:
    app = _build(args)
    op = getattr(app.switcher, name)
    executed = bool(op())
    app.main_queue.run_until_idle()
    if not executed and app.ctx.sandboxed and app.preferences.did_setup_apple_script:
        print("Apple Script setup finished. Run the command again to switch appearance.", file=sys.stderr)
    _print_json({"action": name, "executed": executed, "style": app.switcher.current.value})
    return 0


def cmd_toggle(args: argparse.Namespace) -> int:
    return _run_action(args, "toggle")


def cmd_enable(args: argparse.Namespace) -> int:
    return _run_action(args, "enable")


def cmd_disable(args: argparse.Namespace) -> int:
    return _run_action(args, "disable")


def cmd_setup(args: argparse.Namespace) -> int:
    app = _build(args)
    started = app.orchestrator.setup_if_needed()
    app.main_queue.run_until_idle()
    _print_json(
        {
            "started": started,
            "did_setup_apple_script": app.preferences.did_setup_apple_script,
            "setup_state": app.orchestrator.state.value,
        }
    )
    return 0


def cmd_status(args: argparse.Namespace) -> int:
    status = _status(_build(args))
    if args.json:
        _print_json(status)
        return 0
    print(f"sandboxed: {status['sandboxed']}")
    print(f"scripts_dir: {status['scripts_dir']}")
    print(f"setup: {'done' if status['did_setup_apple_script'] else 'pending'}")
    print(f"ready: {status['ready']}")
    print(f"style: {status['style']}")
    for action_id, info in status["scripts"].items():
        print(f"  {action_id}: {'present' if info['present'] else 'missing'} ({info['path']})")
    return 0


def cmd_configure(args: argparse.Namespace) -> int:
    content = render_config_yaml(bundle_id=args.bundle_id, sandbox=args.sandbox or "auto")
    if not args.output:
        print(content, end="")
        return 0
    out = Path(args.output).expanduser()
    if out.exists() and not args.force:
        raise ValidationError(code="config.exists", message="Config already exists (use --force to overwrite)", data={"path": str(out)})
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(content, encoding="utf-8")
    print(f"OK: wrote config to {out}", file=sys.stderr)
    return 0


def cmd_show_trace(args: argparse.Namespace) -> int:
    if args.trace:
        path = Path(args.trace).expanduser()
    else:
        path = load_config(_config_path(args)).resolved_trace_path()
    events = list(Replay(path).iter_events())

    if args.event_type:
        events = [e for e in events if e.get("event_type") == args.event_type]

    if args.tail is not None and args.tail >= 0:
        events = events[-args.tail :] if args.tail else []

    for e in events:
        print(json.dumps(e, ensure_ascii=False))
    return 0


def cmd_list_tools(args: argparse.Namespace) -> int:
    tool_defs = build_tool_registry().list_tools()
    if args.json:
        _print_json(tool_defs)
    else:
        for t in tool_defs:
            print("{tool_id} - {title}".format(tool_id=t.get("tool_id"), title=t.get("title")))
    return 0


def main(argv: Optional[list] = None) -> int:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", help="Config path (default: XDG config dimmer/config.yml)")
    common.add_argument("--sandbox", choices=["auto", "on", "off"], help="Override sandbox detection")
    common.add_argument("--presenter", choices=["console", "native"], default="console", help="Where dialogs are shown")
    common.add_argument("--run-id", default="run_cli", help="Run ID for trace correlation")
    common.add_argument("--dry-run", action="store_true", help="Describe file and script effects without performing them")

    parser = argparse.ArgumentParser(prog="dim", description="Switch macOS light/dark appearance via Apple Scripts")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_toggle = sub.add_parser("toggle", parents=[common], help="Toggle dark mode")
    p_toggle.set_defaults(func=cmd_toggle)

    p_enable = sub.add_parser("enable", parents=[common], help="Turn dark mode on")
    p_enable.set_defaults(func=cmd_enable)

    p_disable = sub.add_parser("disable", parents=[common], help="Turn dark mode off")
    p_disable.set_defaults(func=cmd_disable)

    p_setup = sub.add_parser("setup", parents=[common], help="Install the Apple Scripts (asks for folder access when sandboxed)")
    p_setup.set_defaults(func=cmd_setup)

    p_status = sub.add_parser("status", parents=[common], help="Show setup and appearance state")
    p_status.add_argument("--json", action="store_true", help="Output JSON")
    p_status.set_defaults(func=cmd_status)

    p_conf = sub.add_parser("configure", parents=[common], help="Print or write a scaffold config")
    p_conf.add_argument("--bundle-id", default="io.github.dimmer", help="Bundle identifier (names the Application Scripts folder)")
    p_conf.add_argument("--output", help="Write config to file instead of stdout")
    p_conf.add_argument("--force", action="store_true", help="Overwrite an existing config file")
    p_conf.set_defaults(func=cmd_configure)

    p_trace = sub.add_parser("show-trace", parents=[common], help="Show trace events from the JSONL trace")
    p_trace.add_argument("--trace", help="Trace path (default: trace_path from config)")
    p_trace.add_argument("--event-type", help="Filter by event_type")
    p_trace.add_argument("--tail", type=int, help="Show only last N events")
    p_trace.set_defaults(func=cmd_show_trace)

    p_tools = sub.add_parser("list-tools", help="List registered OS tools")
    p_tools.add_argument("--json", action="store_true", help="Output JSON")
    p_tools.set_defaults(func=cmd_list_tools)

    ns = parser.parse_args(argv)
    try:
        return int(ns.func(ns))
    except Exception as e:  # noqa: BLE001
        print(_format_cli_error(e), file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
