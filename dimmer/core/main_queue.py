from __future__ import annotations

import threading
import time
from collections import deque
from typing import Any, Callable, Deque, Optional, Tuple


Task = Tuple[Callable[..., Any], tuple, dict]


class MainQueue:
    """
    The main interaction context.

    Everything user-facing (alerts, the folder picker, the settings surface) is submitted
    here and runs on whichever thread drains the queue. Background work started with
    spawn() is counted as outstanding so run_until_idle() waits for its results too.

    Invariant:
    - Tasks run strictly in submission order, one at a time.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition()
        self._tasks: Deque[Task] = deque()
        self._outstanding = 0

    def submit(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> None:
        with self._cond:
            self._tasks.append((fn, args, kwargs))
            self._cond.notify_all()

    def spawn(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> threading.Thread:
        """
        Run fn on a daemon thread. Results must come back through submit().
        """
        with self._cond:
            self._outstanding += 1

        def _target() -> None:
            try:
                fn(*args, **kwargs)
            finally:
                with self._cond:
                    self._outstanding -= 1
                    self._cond.notify_all()

        t = threading.Thread(target=_target, name="dimmer-background", daemon=True)
        t.start()
        return t

    def pending(self) -> int:
        with self._cond:
            return len(self._tasks)

    def outstanding(self) -> int:
        with self._cond:
            return self._outstanding

    def _pop(self) -> Optional[Task]:
        with self._cond:
            if not self._tasks:
                return None
            return self._tasks.popleft()

    def run_pending(self) -> int:
        """
        Drain queued tasks, including tasks submitted while draining.
        Exceptions raised by a task propagate to the caller; later tasks stay queued.
        """
        ran = 0
        while True:
            task = self._pop()
            if task is None:
                return ran
            fn, args, kwargs = task
            ran += 1
            fn(*args, **kwargs)

    def run_until_idle(self, timeout: Optional[float] = None) -> int:
        deadline = None if timeout is None else time.monotonic() + timeout
        ran = 0
        while True:
            ran += self.run_pending()
            with self._cond:
                if not self._tasks and self._outstanding == 0:
                    return ran
                if self._tasks:
                    continue
                if deadline is None:
                    self._cond.wait()
                else:
                    remaining = deadline - time.monotonic()
                    if remaining <= 0:
                        raise TimeoutError("main queue did not become idle in time")
                    self._cond.wait(remaining)
