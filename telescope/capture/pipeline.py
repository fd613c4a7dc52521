"""Capture pipeline orchestration.

One pipeline is shared by the whole app. Per request it moves through two
states:

    Pending   - ``begin()`` resolved the batch id, the response is in flight
    Completed - ``complete()`` built the entry and handed it to the recorder

``complete()`` runs on a worker thread after the response has been sent.
Everything that can go wrong in there is logged and swallowed; capture is
best-effort telemetry and never reaches the client.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from threading import BoundedSemaphore
from typing import Mapping, Optional

from application.ports import Clock, DeferredExecutor, MemoryProbe, Recorder, RpcContext
from domain.models import CaptureEntry, EntryType
from infrastructure.runtime import ResourceMemoryProbe, SystemClock
from telescope.capture.builder import EntryBuilder
from telescope.capture.config import CaptureConfig
from telescope.capture.context import resolve_batch_id
from telescope.capture.decision import REQUEST_KIND, entry_type_for, should_capture
from telescope.capture.extractor import extract, extract_request_payload
from telescope.capture.facts import RequestFacts, ResponseFacts
from telescope.capture.redaction import redact, redact_headers

logger = logging.getLogger(__name__)

DEFAULT_MAX_PENDING = 1000


class CapturePipeline:
    """Runs decision, extraction, redaction and building for each request."""

    def __init__(
        self,
        config: CaptureConfig,
        recorder: Recorder,
        *,
        rpc_context: Optional[RpcContext] = None,
        clock: Optional[Clock] = None,
        memory_probe: Optional[MemoryProbe] = None,
        executor: Optional[DeferredExecutor] = None,
        max_workers: int = 4,
        max_pending: int = DEFAULT_MAX_PENDING,
    ) -> None:
        self.config = config
        self.recorder = recorder
        self.rpc_context = rpc_context
        self.clock = clock or SystemClock()
        self.builder = EntryBuilder(
            clock=self.clock,
            memory_probe=memory_probe or ResourceMemoryProbe(),
            trusted_proxy_header=config.trusted_proxy_header,
        )
        self._executor = executor or ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="telescope_"
        )
        # Bounds queued plus running captures; overflow is dropped.
        self._slots = BoundedSemaphore(max_pending)

    @property
    def enabled(self) -> bool:
        return self.config.is_enabled(REQUEST_KIND)

    def begin(self, headers: Mapping[str, str]) -> str:
        """Resolve the batch id for a new request."""
        return resolve_batch_id(headers, self.rpc_context)

    def schedule(self, batch_id: str, request: RequestFacts, response: ResponseFacts) -> None:
        """Hand the capture to the executor without waiting for it.

        When max_pending captures are already queued or running, the new
        capture is dropped.
        """
        if not self._slots.acquire(blocking=False):
            logger.warning("Capture queue full; dropping capture for batch %s", batch_id)
            return
        try:
            self._executor.submit(self._run, batch_id, request, response)
        except RuntimeError:
            # Executor already shut down; the capture is dropped.
            self._slots.release()
            logger.debug("Capture for batch %s dropped after shutdown", batch_id)

    def _run(self, batch_id: str, request: RequestFacts, response: ResponseFacts) -> None:
        try:
            self.complete(batch_id, request, response)
        finally:
            self._slots.release()

    def complete(
        self,
        batch_id: str,
        request: RequestFacts,
        response: ResponseFacts,
    ) -> Optional[CaptureEntry]:
        """Build and record the entry. Returns None when nothing was recorded."""
        try:
            if not should_capture(self.config, request):
                return None

            entry = self._build_entry(batch_id, request, response)
            if entry.type == EntryType.SERVICE:
                self.recorder.record_service(entry)
            else:
                self.recorder.record_request(entry)
            return entry
        except Exception:
            logger.exception("Failed to capture %s %s (batch %s)", request.method, request.path, batch_id)
            return None

    def shutdown(self, wait: bool = False) -> None:
        """Stop the executor; captures that have not started are dropped."""
        self._executor.shutdown(wait=wait, cancel_futures=True)

    def _build_entry(
        self,
        batch_id: str,
        request: RequestFacts,
        response: ResponseFacts,
    ) -> CaptureEntry:
        payload = extract_request_payload(
            request.query_params,
            request.body,
            request.content_type,
            transport=request.handler.transport,
            grpc_payload=request.grpc_payload,
        )
        payload = redact(payload, self.config.hidden_request_parameters)

        response_payload = extract(
            response.body,
            response.content_type,
            self.config.size_limit_kb,
            grpc_payload=response.grpc_payload,
        )
        response_payload = redact(response_payload, self.config.hidden_response_parameters)

        return self.builder.build(
            batch_id,
            request,
            response,
            payload,
            response_payload,
            headers=redact_headers(request.headers, self.config.hidden_request_headers),
            entry_type=entry_type_for(request.handler),
        )
