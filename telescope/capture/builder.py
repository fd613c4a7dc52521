"""Assemble CaptureEntry records from request/response facts."""

import logging
import math
from typing import Optional

from application.ports.runtime import Clock, MemoryProbe
from domain.models import CaptureEntry, EntryType, Payload
from telescope.capture.facts import RequestFacts, ResponseFacts

logger = logging.getLogger(__name__)

UNKNOWN_ADDRESS = "unknown"


class EntryBuilder:
    """
    Builds capture entries.

    The builder never raises on missing facts: an unknown client address
    becomes ``"unknown"``, a missing start time becomes a null duration and
    an unresolved handler becomes an empty controller action.
    """

    def __init__(
        self,
        clock: Clock,
        memory_probe: MemoryProbe,
        trusted_proxy_header: str = "x-real-ip",
    ):
        self.clock = clock
        self.memory_probe = memory_probe
        self.trusted_proxy_header = trusted_proxy_header

    def build(
        self,
        batch_id: str,
        request: RequestFacts,
        response: ResponseFacts,
        payload: Payload,
        response_payload: Payload,
        *,
        headers: Optional[dict] = None,
        entry_type: EntryType = EntryType.REQUEST,
    ) -> CaptureEntry:
        """
        Build the entry for one request/response pair.

        Args:
            batch_id: Correlation id of the request
            request: Request facts
            response: Response facts
            payload: Extracted (and redacted) request payload
            response_payload: Extracted (and redacted) response payload
            headers: Redacted headers; defaults to the request headers
            entry_type: Channel the entry is dispatched to

        Returns:
            The frozen CaptureEntry
        """
        return CaptureEntry(
            batch_id=batch_id,
            ip_address=self.ip_address(request),
            uri=request.uri or "/",
            method=request.method or "GET",
            controller_action=request.handler.callback,
            middleware=tuple(request.middleware),
            headers={k: list(v) for k, v in (headers if headers is not None else request.headers).items()},
            payload=payload,
            response_status=response.status_code,
            response=response_payload,
            duration=self.duration(request.start_time),
            memory=self.memory(),
            type=entry_type,
            recorded_at=self.clock.now(),
        )

    def ip_address(self, request: RequestFacts) -> str:
        return request.header(self.trusted_proxy_header) or request.remote_addr or UNKNOWN_ADDRESS

    def duration(self, start_time: Optional[float]) -> Optional[int]:
        """Elapsed milliseconds since start_time, floored."""
        if start_time is None:
            return None
        return math.floor((self.clock.monotonic() - start_time) * 1000)

    def memory(self) -> float:
        """Peak memory in MB, rounded to one decimal."""
        try:
            peak = self.memory_probe.peak_bytes()
        except OSError:
            logger.debug("Peak memory unavailable", exc_info=True)
            return 0.0
        return round(peak / 1024 / 1024, 1)
