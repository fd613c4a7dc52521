"""
Runtime Interfaces (Ports).

Time, memory and background execution are injected so the entry builder
and the pipeline can be driven deterministically in tests.
"""

from datetime import datetime
from typing import Any, Callable, Protocol


class Clock(Protocol):
    """Source of wall-clock and monotonic time."""

    def now(self) -> datetime:
        """Current UTC time, used for recorded_at."""
        ...

    def monotonic(self) -> float:
        """Monotonic seconds, used for request durations."""
        ...


class MemoryProbe(Protocol):
    """Source of process memory statistics."""

    def peak_bytes(self) -> int:
        """Peak resident memory of the process since start, in bytes."""
        ...


class DeferredExecutor(Protocol):
    """
    Non-blocking executor for post-response work.

    concurrent.futures.ThreadPoolExecutor satisfies this protocol.
    """

    def submit(self, fn: Callable[..., Any], /, *args: Any, **kwargs: Any) -> Any:
        """Schedule fn(*args, **kwargs) and return immediately."""
        ...

    def shutdown(self, wait: bool = True, *, cancel_futures: bool = False) -> None:
        """Stop accepting work; optionally drop work that has not started."""
        ...
