"""Request runners for debug backend calls.

The register tree asks its backend for names and values through a runner.
SyncRequestRunner calls the backend inline; ThreadedRequestRunner moves each
call to a QThread and delivers the result back on the thread that issued it.
"""

import logging
from typing import Any, Callable, List, Optional, Tuple

from PyQt6.QtCore import QThread, pyqtSignal

logger = logging.getLogger(__name__)

# --- Module-level constants ---
CLEANUP_WAIT_MS = 200     # Wait time per task during cleanup

SuccessCallback = Callable[[Any], None]
ErrorCallback = Callable[[Exception], None]


class BackgroundTask(QThread):
    """
    Background call to a backend with cancellation.

    Usage:
        task = BackgroundTask(target=backend.get_register_values)
        task.result_ready.connect(on_values)
        task.error_occurred.connect(on_error)  # Receives Exception, not str
        task.start()
    """

    result_ready = pyqtSignal(object)
    error_occurred = pyqtSignal(Exception)

    def __init__(self, target: Callable[..., Any], args: Tuple = (), kwargs: dict = None, parent=None):
        super().__init__(parent)
        self._target = target
        self._args = args
        self._kwargs = kwargs or {}
        self.cancelled = False

    def run(self):
        """Execute target in background, respecting cancellation."""
        try:
            result = self._target(*self._args, **self._kwargs)
            if not self.cancelled:
                self.result_ready.emit(result)
        except Exception as e:
            if not self.cancelled:
                self.error_occurred.emit(e)

    def cancel(self):
        """Cancel task, signals won't emit after this."""
        self.cancelled = True


class SyncRequestRunner:
    """Runs backend calls inline on the calling thread."""

    def run(self, target: Callable[[], Any], on_success: SuccessCallback,
            on_error: Optional[ErrorCallback] = None) -> None:
        """
        Call target and pass its result to on_success.

        Errors raised by target go to on_error, or propagate when no handler is given.
        Errors raised by on_success always propagate.
        """
        try:
            result = target()
        except Exception as e:
            if on_error is None:
                raise
            on_error(e)
            return
        on_success(result)

    def cleanup(self) -> None:
        pass


class ThreadedRequestRunner:
    """
    Runs each backend call in its own BackgroundTask.

    Results are delivered through queued signals, so callbacks execute on the
    thread that owns the runner's callers (normally the GUI thread). Several
    requests may be in flight at once; callers tag them to detect stale results.

    Usage:
        runner = ThreadedRequestRunner()
        provider = RegisterTreeProvider(runner=runner)

        def closeEvent(self, event):
            runner.cleanup()
            super().closeEvent(event)
    """

    def __init__(self):
        self._tasks: List[BackgroundTask] = []

    def run(self, target: Callable[[], Any], on_success: SuccessCallback,
            on_error: Optional[ErrorCallback] = None) -> BackgroundTask:
        task = BackgroundTask(target=target)

        def deliver_error(error):
            if on_error is not None:
                on_error(error)
            else:
                logger.error(f"Background request failed: {error}", exc_info=error)

        task.result_ready.connect(on_success)
        task.error_occurred.connect(deliver_error)
        # A QThread must not be collected while running, keep it until finished
        task.finished.connect(lambda: self._forget(task))
        self._tasks.append(task)
        task.start()
        return task

    @property
    def pending_count(self) -> int:
        return len(self._tasks)

    def _forget(self, task: BackgroundTask) -> None:
        if task in self._tasks:
            self._tasks.remove(task)

    def cleanup(self) -> None:
        """Cancel and wait for all in-flight tasks."""
        for task in self._tasks:
            task.cancel()
            if task.isRunning():
                task.wait(CLEANUP_WAIT_MS)
        self._tasks.clear()
