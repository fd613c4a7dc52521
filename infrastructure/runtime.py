"""
System clock and memory probe.

Concrete implementations of the Clock and MemoryProbe ports backed by the
running process.
"""

import sys
import time
from datetime import datetime, timezone

if sys.platform != "win32":
    import resource


class SystemClock:
    """Clock backed by time.monotonic and the UTC wall clock."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def monotonic(self) -> float:
        return time.monotonic()


class ResourceMemoryProbe:
    """
    Peak resident set size via getrusage.

    ru_maxrss is reported in kilobytes on Linux and in bytes on macOS.
    Windows has no getrusage and reports zero.
    """

    def peak_bytes(self) -> int:
        if sys.platform == "win32":
            return 0
        peak = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
        if sys.platform == "darwin":
            return int(peak)
        return int(peak) * 1024
