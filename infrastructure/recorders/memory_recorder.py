"""
In-memory recorder.

Keeps entries in process memory. Useful for embedding apps that inspect
captures themselves and for tests.
"""

from threading import Lock
from typing import List, Optional

from domain.models import CaptureEntry


class InMemoryRecorder:
    """Thread-safe list-backed recorder with an optional size cap."""

    def __init__(self, max_entries: Optional[int] = None):
        self.max_entries = max_entries
        self._requests: List[CaptureEntry] = []
        self._services: List[CaptureEntry] = []
        self._lock = Lock()

    def record_request(self, entry: CaptureEntry) -> None:
        with self._lock:
            self._append(self._requests, entry)

    def record_service(self, entry: CaptureEntry) -> None:
        with self._lock:
            self._append(self._services, entry)

    @property
    def requests(self) -> List[CaptureEntry]:
        with self._lock:
            return list(self._requests)

    @property
    def services(self) -> List[CaptureEntry]:
        with self._lock:
            return list(self._services)

    def find_batch(self, batch_id: str) -> List[CaptureEntry]:
        """All entries, on either channel, for one batch id."""
        with self._lock:
            return [e for e in self._requests + self._services if e.batch_id == batch_id]

    def reset(self) -> None:
        with self._lock:
            self._requests.clear()
            self._services.clear()

    def _append(self, bucket: List[CaptureEntry], entry: CaptureEntry) -> None:
        bucket.append(entry)
        if self.max_entries is not None and len(bucket) > self.max_entries:
            del bucket[: len(bucket) - self.max_entries]
