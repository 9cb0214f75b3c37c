"""Console progress spinner running on a background thread."""

from __future__ import annotations

import sys
import threading
from typing import Optional, TextIO

FRAMES = "⠋⠙⠹⠸⠼⠴⠦⠧⠇⠏"


class Spinner:
    """Redraws ``message`` plus a rotating frame until stopped. Never touches pipeline state."""

    def __init__(
        self,
        message: str = "Processing...",
        *,
        interval: float = 0.1,
        stream: Optional[TextIO] = None,
    ) -> None:
        self.message = message
        self.interval = interval
        self.stream = stream or sys.stdout
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.is_running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name="spinner", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stop_event.set()
        if self._thread:
            self._thread.join(timeout=max(self.interval * 2, 1.0))
            self._thread = None

    def _run(self) -> None:
        index = 0
        while not self._stop_event.is_set():
            frame = FRAMES[index % len(FRAMES)]
            self.stream.write(f"\r{self.message}\x1b[35m {frame}\x1b[39m")
            self.stream.flush()
            index += 1
            self._stop_event.wait(self.interval)

    def __enter__(self) -> "Spinner":
        self.start()
        return self

    def __exit__(self, *exc) -> None:
        self.stop()
