"""Entry writer: serializes capture entries to JSON files on disk."""

import json
import logging
from pathlib import Path
from threading import Lock
from typing import Union

from domain.models import CaptureEntry

logger = logging.getLogger(__name__)


class JsonFileRecorder:
    """
    Recorder that writes one JSON file per entry.

    Files are grouped by batch id and numbered in arrival order:
    ``<capture_dir>/<batch_id>/001_request.json``.
    """

    def __init__(self, capture_dir: Union[str, Path] = "./telescope"):
        self.capture_dir = Path(capture_dir)
        self._sequence = 0
        self._lock = Lock()

    def record_request(self, entry: CaptureEntry) -> None:
        self.write(entry)

    def record_service(self, entry: CaptureEntry) -> None:
        self.write(entry)

    def next_filename(self, entry: CaptureEntry) -> Path:
        """Generate the next sequential entry filename."""
        with self._lock:
            self._sequence += 1
            seq = self._sequence
        filename = f"{seq:03d}_{entry.type.value}.json"
        return self.capture_dir / _safe_segment(entry.batch_id) / filename

    def write(self, entry: CaptureEntry) -> Path:
        """
        Write a single entry to disk.

        Returns the path to the written file.
        """
        filepath = self.next_filename(entry)
        filepath.parent.mkdir(parents=True, exist_ok=True)
        filepath.write_text(
            json.dumps(entry.to_record(), indent=2, default=str),
            encoding="utf-8",
        )
        logger.debug("Captured %s %s → %s", entry.method, entry.uri, filepath)
        return filepath

    @property
    def sequence_count(self) -> int:
        return self._sequence


def _safe_segment(value: str) -> str:
    """Batch ids come from clients; keep them to a single path segment."""
    cleaned = "".join(c if c.isalnum() or c in "-_" else "_" for c in value)
    return cleaned or "unknown"
