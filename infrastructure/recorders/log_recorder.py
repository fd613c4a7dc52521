"""Recorder that emits each entry as a structured log line."""

import json
import logging

from domain.models import CaptureEntry

logger = logging.getLogger("telescope.entries")


class LoggingRecorder:
    """Writes entries to the ``telescope.entries`` logger at INFO level."""

    def __init__(self, log: logging.Logger = logger):
        self.log = log

    def record_request(self, entry: CaptureEntry) -> None:
        self._emit(entry)

    def record_service(self, entry: CaptureEntry) -> None:
        self._emit(entry)

    def _emit(self, entry: CaptureEntry) -> None:
        self.log.info(
            "%s %s %s status=%d duration=%sms batch=%s entry=%s",
            entry.type.value,
            entry.method,
            entry.uri,
            entry.response_status,
            entry.duration,
            entry.batch_id,
            json.dumps(entry.to_record(), default=str),
        )
