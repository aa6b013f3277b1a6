from __future__ import annotations

import sys
from typing import Callable, Optional, TextIO

from dimmer.core.errors import SetupAbandoned

from .presenter import Alert, DirectoryPanel, SelectionHandler


class ConsolePresenter:
    """
    Terminal rendition of the alert / open panel / settings surfaces.

    All prompts go to stderr so stdout stays machine-readable for JSON output.
    """

    def __init__(self, *, stream: Optional[TextIO] = None, input_func: Optional[Callable[[str], str]] = None) -> None:
        self._stream = stream
        self._input = input_func

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stderr

    def show_alert(self, alert: Alert) -> None:
        marker = "!!" if alert.style == "critical" else "!"
        print(f"{marker} {alert.title}", file=self.stream)
        if alert.message:
            for line in alert.message.rstrip("\n").splitlines():
                print(f"   {line}", file=self.stream)
        self._read("Press Enter to continue")

    def choose_directory(self, panel: DirectoryPanel, completion: SelectionHandler) -> None:
        print(panel.title, file=self.stream)
        print(panel.prompt, file=self.stream)
        value = self._read(f"Folder [{panel.directory}]")
        if not value:
            value = str(panel.directory)
        completion(value)

    def show_settings(self) -> None:
        print("Dimmer needs access to its AppleScript folder before it can switch appearance.", file=self.stream)

    def _read(self, text: str) -> str:
        print(f"{text}: ", end="", file=self.stream, flush=True)
        try:
            read = self._input if self._input is not None else input
            return read("").strip()
        except (EOFError, KeyboardInterrupt) as e:
            raise SetupAbandoned(code="setup.abandoned", message="Input closed before setup finished") from e
