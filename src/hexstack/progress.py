"""Progress sinks for the build pipeline.

A sink receives ``update(current, total, label)`` before each step starts
and a single ``finish(message, success)`` when the build ends, successfully or not.
"""

from typing import List, Optional, Protocol, Tuple

from tqdm import tqdm


class ProgressSink(Protocol):
    def update(self, current: int, total: int, label: str) -> None:
        ...

    def finish(self, message: str, success: bool = True) -> None:
        ...


class NullProgress:
    """Discards all progress."""

    def update(self, current: int, total: int, label: str) -> None:
        pass

    def finish(self, message: str, success: bool = True) -> None:
        pass


class RecordingProgress:
    """Keeps every update, for tests and embedding callers."""

    def __init__(self):
        self.updates: List[Tuple[int, int, str]] = []
        self.finished: Optional[str] = None
        self.succeeded: Optional[bool] = None

    def update(self, current: int, total: int, label: str) -> None:
        self.updates.append((current, total, label))

    def finish(self, message: str, success: bool = True) -> None:
        self.finished = message
        self.succeeded = success


class TqdmProgress:
    """Terminal progress bar.

    The bar shows completed steps; ``current`` is the step about to run,
    so the bar sits at ``current - 1`` while it runs.
    """

    BAR_FORMAT = "{l_bar}{bar}| {n_fmt}/{total_fmt}"

    def __init__(self, leave: bool = True):
        self.leave = leave
        self._bar: Optional[tqdm] = None

    def update(self, current: int, total: int, label: str) -> None:
        if self._bar is None:
            self._bar = tqdm(total=total, bar_format=self.BAR_FORMAT, leave=self.leave)
        self._bar.set_description(label)
        completed = max(current - 1, 0)
        if completed > self._bar.n:
            self._bar.update(completed - self._bar.n)

    def finish(self, message: str, success: bool = True) -> None:
        if self._bar is None:
            return
        self._bar.set_description(message)
        # A failed build leaves the bar where it stopped
        if success and self._bar.total:
            self._bar.update(self._bar.total - self._bar.n)
        self._bar.close()
        self._bar = None
