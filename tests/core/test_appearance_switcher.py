import tempfile
import unittest
from pathlib import Path

from dimmer.app import build_app
from dimmer.core.appearance import AppearanceStyle
from dimmer.core.runtime_context import RuntimeContext
from dimmer.prefs.preferences import DARK_MODE_STYLE_KEY, DID_SETUP_APPLE_SCRIPT_KEY
from dimmer.prefs.store import MemoryPreferencesStore
from dimmer.registry.script_registry import CRITICAL_FAILURE_TITLE, SANDBOXED_FAILURE_TITLE
from dimmer.resources import bundled_scripts_dir
from dimmer.ui.testing import ScriptedPresenter


class TestAppearanceSwitcher(unittest.TestCase):
    def setUp(self) -> None:
        td = tempfile.TemporaryDirectory()
        self.addCleanup(td.cleanup)
        self.root = Path(td.name).resolve()
        self.scripts_dir = self.root / "scripts"
        self.scripts_dir.mkdir()

    def _app(self, *, sandboxed, values=None, selections=(), dry_run=False):
        ctx = RuntimeContext(
            run_id="run_switcher",
            sandboxed=sandboxed,
            scripts_dir=self.scripts_dir,
            bundle_dir=bundled_scripts_dir(),
            dry_run=dry_run,
            trace_path=self.root / "trace.jsonl",
        )
        self.store = MemoryPreferencesStore(values)
        self.presenter = ScriptedPresenter(selections)
        self.calls = []
        app = build_app(ctx, store=self.store, presenter=self.presenter)
        app.tools.replace("script.run", lambda args, dry_run: self.calls.append(args["path"]) or {"ok": True})
        return app

    def test_style_reads_interface_style_key(self) -> None:
        app = self._app(sandboxed=False)
        self.assertEqual(app.switcher.current, AppearanceStyle.AQUA)
        self.store.set(DARK_MODE_STYLE_KEY, "Dark")
        self.assertTrue(app.switcher.is_dark)

    def test_toggle_flips_recorded_style(self) -> None:
        app = self._app(sandboxed=False)

        self.assertTrue(app.switcher.toggle())
        self.assertEqual(self.store.get(DARK_MODE_STYLE_KEY), "Dark")
        self.assertTrue(app.switcher.toggle())
        self.assertIsNone(self.store.get(DARK_MODE_STYLE_KEY))
        self.assertEqual([Path(p).name for p in self.calls], ["toggle.scpt", "toggle.scpt"])

    def test_enable_disable_and_apply(self) -> None:
        app = self._app(sandboxed=False)

        app.switcher.enable()
        self.assertEqual(app.switcher.current, AppearanceStyle.DARK_AQUA)
        app.switcher.disable()
        self.assertEqual(app.switcher.current, AppearanceStyle.AQUA)
        app.switcher.apply(AppearanceStyle.DARK_AQUA)
        self.assertEqual([Path(p).name for p in self.calls], ["on.scpt", "off.scpt", "on.scpt"])

    def test_not_ready_triggers_setup_and_drops_the_action(self) -> None:
        app = self._app(sandboxed=True)

        self.assertFalse(app.switcher.toggle())
        self.assertEqual(self.calls, [])
        self.assertIsNone(self.store.get(DARK_MODE_STYLE_KEY))
        self.assertTrue(app.orchestrator.is_setting_up)

        app.main_queue.run_until_idle(timeout=5)
        self.assertEqual(len(self.presenter.panels), 1)

        self.presenter.answer(str(self.scripts_dir))
        self.assertTrue(self.store.get(DID_SETUP_APPLE_SCRIPT_KEY))

        self.assertTrue(app.switcher.toggle())
        app.main_queue.run_until_idle(timeout=5)
        self.assertEqual(self.calls, [str(self.scripts_dir / "toggle.scpt")])

    def test_failed_script_leaves_style_unchanged(self) -> None:
        app = self._app(sandboxed=False)
        app.tools.replace("script.run", lambda args, dry_run: {"ok": False, "returncode": 1, "stderr": "boom"})

        self.assertFalse(app.switcher.toggle())
        app.main_queue.run_until_idle(timeout=5)

        self.assertEqual(app.switcher.current, AppearanceStyle.AQUA)
        self.assertEqual([a.title for a in self.presenter.alerts], [CRITICAL_FAILURE_TITLE])

    def test_sandboxed_style_is_recorded_after_success_only(self) -> None:
        app = self._app(sandboxed=True, values={DID_SETUP_APPLE_SCRIPT_KEY: True})

        self.assertTrue(app.switcher.enable())
        app.main_queue.run_until_idle(timeout=5)
        self.assertEqual(app.switcher.current, AppearanceStyle.DARK_AQUA)

        app.tools.replace("script.run", lambda args, dry_run: {"ok": False, "returncode": 1, "stderr": "not allowed"})
        self.assertTrue(app.switcher.disable())
        app.main_queue.run_until_idle(timeout=5)
        self.assertEqual(app.switcher.current, AppearanceStyle.DARK_AQUA)
        self.assertEqual([a.title for a in self.presenter.alerts], [SANDBOXED_FAILURE_TITLE])

    def test_dry_run_does_not_record_style(self) -> None:
        app = self._app(sandboxed=False, dry_run=True)
        self.assertTrue(app.switcher.enable())
        self.assertIsNone(self.store.get(DARK_MODE_STYLE_KEY))


if __name__ == "__main__":
    unittest.main()
