"""
Fake runtime collaborators for testing.

Deterministic Clock, MemoryProbe and an executor that runs submitted work
immediately, so pipeline tests need no sleeps or thread joins.
"""
from datetime import datetime, timezone
from typing import Any, Callable, List, Tuple


class FakeClock:
    """
    Clock with a manually advanced monotonic reading.

    Usage:
        clock = FakeClock(monotonic=100.0)
        clock.advance(0.25)
        clock.monotonic()  # 100.25
    """

    def __init__(self, monotonic: float = 1000.0, now: datetime | None = None):
        self._monotonic = monotonic
        self._now = now or datetime(2024, 1, 15, 10, 0, 0, tzinfo=timezone.utc)

    def now(self) -> datetime:
        return self._now

    def monotonic(self) -> float:
        return self._monotonic

    def advance(self, seconds: float) -> None:
        self._monotonic += seconds


class FakeMemoryProbe:
    """Memory probe returning a fixed peak."""

    def __init__(self, peak_bytes: int = 50 * 1024 * 1024):
        self._peak = peak_bytes
        self.calls = 0

    def peak_bytes(self) -> int:
        self.calls += 1
        return self._peak


class ImmediateExecutor:
    """
    Executor that runs submitted work inline.

    Records every submission and whether it was shut down. After shutdown,
    submit() raises RuntimeError like ThreadPoolExecutor does.
    """

    def __init__(self):
        self.submitted: List[Tuple[Callable[..., Any], tuple]] = []
        self.is_shutdown = False
        self.cancelled = False

    def submit(self, fn: Callable[..., Any], /, *args: Any, **kwargs: Any) -> Any:
        if self.is_shutdown:
            raise RuntimeError("cannot schedule new futures after shutdown")
        self.submitted.append((fn, args))
        return fn(*args, **kwargs)

    def shutdown(self, wait: bool = True, *, cancel_futures: bool = False) -> None:
        self.is_shutdown = True
        self.cancelled = cancel_futures


class DeferredQueueExecutor(ImmediateExecutor):
    """Executor that queues work until run_all() is called."""

    def submit(self, fn: Callable[..., Any], /, *args: Any, **kwargs: Any) -> Any:
        if self.is_shutdown:
            raise RuntimeError("cannot schedule new futures after shutdown")
        self.submitted.append((fn, args))
        return None

    def run_all(self) -> list:
        results = [fn(*args) for fn, args in self.submitted]
        self.submitted.clear()
        return results
