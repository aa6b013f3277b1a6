import subprocess
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from dimmer.bootstrap_tools import build_tool_registry
from dimmer.core.errors import ToolNotFound, ValidationError
from tools.fs.copy import run as fs_copy
from tools.fs.mkdir import run as fs_mkdir
from tools.fs.remove import run as fs_remove
from tools.fs.stat import run as fs_stat
from tools.script.run import run as script_run


class TestFsTools(unittest.TestCase):
    def test_stat_reports_missing_path(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            out = fs_stat({"path": str(Path(td) / "missing.scpt")}, dry_run=False)
            self.assertFalse(out["exists"])
            (Path(td) / "here.scpt").write_text("x", encoding="utf-8")
            out = fs_stat({"path": str(Path(td) / "here.scpt")}, dry_run=False)
            self.assertTrue(out["exists"])
            self.assertTrue(out["is_file"])

    def test_remove_ignores_missing_file(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            out = fs_remove({"path": str(Path(td) / "missing.scpt"), "missing_ok": True}, dry_run=False)
            self.assertFalse(out["removed"])
            with self.assertRaises(FileNotFoundError):
                fs_remove({"path": str(Path(td) / "missing.scpt"), "missing_ok": False}, dry_run=False)

    def test_remove_refuses_directories(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            with self.assertRaises(IsADirectoryError):
                fs_remove({"path": td}, dry_run=False)

    def test_copy_requires_free_destination(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            src = Path(td) / "toggle.scpt"
            dst = Path(td) / "out" / "toggle.scpt"
            src.write_text("script", encoding="utf-8")
            dst.parent.mkdir()

            out = fs_copy({"from": str(src), "to": str(dst)}, dry_run=False)
            self.assertEqual(out["size"], 6)
            self.assertEqual(dst.read_text(encoding="utf-8"), "script")
            with self.assertRaises(FileExistsError):
                fs_copy({"from": str(src), "to": str(dst)}, dry_run=False)

    def test_mkdir_is_idempotent(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            target = Path(td) / "Application Scripts" / "io.github.dimmer"
            self.assertTrue(fs_mkdir({"path": str(target)}, dry_run=True)["would_create"])
            self.assertFalse(target.exists())
            self.assertTrue(fs_mkdir({"path": str(target)}, dry_run=False)["created"])
            self.assertFalse(fs_mkdir({"path": str(target)}, dry_run=False)["created"])

    def test_copy_dry_run_touches_nothing(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            src = Path(td) / "missing.scpt"
            dst = Path(td) / "copy.scpt"
            out = fs_copy({"from": str(src), "to": str(dst)}, dry_run=True)
            self.assertTrue(out["dry_run"])
            self.assertFalse(out["src_exists"])
            self.assertFalse(dst.exists())


class TestScriptRunTool(unittest.TestCase):
    def test_dry_run_does_not_spawn(self) -> None:
        with patch("tools.script.run.subprocess.run") as run:
            out = script_run({"path": "/tmp/toggle.scpt"}, dry_run=True)
        run.assert_not_called()
        self.assertTrue(out["ok"])
        self.assertEqual(out["command"][0], "osascript")

    def test_missing_osascript_is_a_failed_result(self) -> None:
        with patch("tools.script.run.shutil.which", return_value=None):
            out = script_run({"source": "beep"}, dry_run=False)
        self.assertFalse(out["ok"])
        self.assertIn("osascript", out["error"])

    def test_nonzero_exit_carries_stderr(self) -> None:
        done = subprocess.CompletedProcess(args=["osascript"], returncode=1, stdout="", stderr="execution error (-1743)\n")
        with patch("tools.script.run.shutil.which", return_value="/usr/bin/osascript"), patch(
            "tools.script.run.subprocess.run", return_value=done
        ) as run:
            out = script_run({"source": "beep"}, dry_run=False)
        run.assert_called_once()
        self.assertEqual(run.call_args.args[0], ["osascript", "-e", "beep"])
        self.assertFalse(out["ok"])
        self.assertEqual(out["returncode"], 1)
        self.assertEqual(out["stderr"], "execution error (-1743)")

    def test_requires_path_or_source(self) -> None:
        with self.assertRaises(ValueError):
            script_run({}, dry_run=True)


class TestToolRegistry(unittest.TestCase):
    def test_lists_builtin_tools(self) -> None:
        ids = [t["tool_id"] for t in build_tool_registry().list_tools()]
        self.assertEqual(ids, ["fs.copy", "fs.mkdir", "fs.remove", "fs.stat", "script.run"])

    def test_args_are_validated(self) -> None:
        reg = build_tool_registry()
        with self.assertRaises(ValidationError) as cm:
            reg.call("fs.copy", {"from": "/a"}, dry_run=True)
        self.assertEqual(cm.exception.code, "tool.args_invalid")
        with self.assertRaises(ValidationError):
            reg.call("script.run", {"path": "/a", "source": "beep"}, dry_run=True)

    def test_unknown_tool(self) -> None:
        reg = build_tool_registry()
        with self.assertRaises(ToolNotFound):
            reg.call("app.quit", {}, dry_run=True)
        with self.assertRaises(ToolNotFound):
            reg.replace("app.quit", lambda args, dry_run: {})


if __name__ == "__main__":
    unittest.main()
