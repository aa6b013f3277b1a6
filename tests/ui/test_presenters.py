import io
import unittest
from pathlib import Path

from dimmer.bootstrap_tools import build_tool_registry
from dimmer.core.errors import SetupAbandoned
from dimmer.ui.console import ConsolePresenter
from dimmer.ui.native import NativePresenter
from dimmer.ui.presenter import Alert, DirectoryPanel


def _panel() -> DirectoryPanel:
    return DirectoryPanel(directory=Path("/Users/me/Library/Application Scripts/io.github.dimmer"), title="Pick", prompt="Open this folder")


class TestConsolePresenter(unittest.TestCase):
    def test_empty_answer_selects_prompted_directory(self) -> None:
        out = io.StringIO()
        presenter = ConsolePresenter(stream=out, input_func=lambda _: "")
        got = []
        presenter.choose_directory(_panel(), got.append)
        self.assertEqual(got, ["/Users/me/Library/Application Scripts/io.github.dimmer"])
        self.assertIn("Open this folder", out.getvalue())

    def test_typed_answer_is_passed_through(self) -> None:
        presenter = ConsolePresenter(stream=io.StringIO(), input_func=lambda _: "  ~/Desktop  ")
        got = []
        presenter.choose_directory(_panel(), got.append)
        self.assertEqual(got, ["~/Desktop"])

    def test_closed_input_abandons(self) -> None:
        def closed(_):
            raise EOFError

        presenter = ConsolePresenter(stream=io.StringIO(), input_func=closed)
        with self.assertRaises(SetupAbandoned):
            presenter.choose_directory(_panel(), lambda _: None)
        with self.assertRaises(SetupAbandoned):
            presenter.show_alert(Alert(title="Not Really..."))

    def test_alert_renders_every_line(self) -> None:
        out = io.StringIO()
        ConsolePresenter(stream=out, input_func=lambda _: "").show_alert(
            Alert(title="Report Critical Bug To Developer", message="a: 1\nb: 2\n", style="critical")
        )
        text = out.getvalue()
        self.assertIn("!! Report Critical Bug To Developer", text)
        self.assertIn("   a: 1", text)
        self.assertIn("   b: 2", text)


class TestNativePresenter(unittest.TestCase):
    def setUp(self) -> None:
        self.sources = []
        self.result = {"ok": True, "stdout": ""}
        self.tools = build_tool_registry()
        self.tools.replace("script.run", self._fake)

    def _fake(self, args, dry_run):
        self.sources.append(args["source"])
        return dict(self.result)

    def test_choose_folder_returns_posix_path(self) -> None:
        self.result = {"ok": True, "stdout": "/Users/me/Library/Application Scripts/io.github.dimmer/\n"}
        got = []
        NativePresenter(self.tools).choose_directory(_panel(), got.append)

        self.assertEqual(got, ["/Users/me/Library/Application Scripts/io.github.dimmer/"])
        self.assertIn("choose folder with prompt \"Open this folder\"", self.sources[0])
        self.assertIn("POSIX file \"/Users/me/Library/Application Scripts/io.github.dimmer\"", self.sources[0])

    def test_cancelled_panel_is_no_selection(self) -> None:
        self.result = {"ok": False, "returncode": 1, "stderr": "User canceled. (-128)"}
        got = []
        NativePresenter(self.tools).choose_directory(_panel(), got.append)
        self.assertEqual(got, [None])

    def test_alert_quotes_text(self) -> None:
        NativePresenter(self.tools).show_alert(Alert(title='Say "hi"', message="back\\slash", style="critical"))
        self.assertEqual(self.sources, ['display alert "Say \\"hi\\"" message "back\\\\slash" as critical'])


if __name__ == "__main__":
    unittest.main()
