"""Request capture for FastAPI and Starlette apps.

Usage::

    from telescope.capture import CaptureConfig, CapturePipeline, TelescopeMiddleware
    from infrastructure import InMemoryRecorder

    pipeline = CapturePipeline(CaptureConfig(), InMemoryRecorder())
    app.add_middleware(TelescopeMiddleware, pipeline=pipeline)

Every response carries a ``batch-id`` header. Send the same header on
follow-up or downstream calls to group their entries together.
"""

from .builder import EntryBuilder
from .config import CaptureConfig
from .context import (
    BATCH_HEADER,
    TelescopeContext,
    get_batch_id,
    get_current_context,
    record_middleware,
    resolve_batch_id,
    set_grpc_request_payload,
    set_grpc_response_payload,
    telescope_context,
)
from .decision import (
    entry_type_for,
    is_patch_only,
    is_path_ignored,
    is_service_request,
    should_capture,
)
from .extractor import (
    content_within_limits,
    extract,
    extract_request_payload,
    normalize_side_channel,
)
from .facts import RequestFacts, ResponseFacts
from .middleware import TelescopeMiddleware
from .pipeline import CapturePipeline
from .redaction import redact, redact_headers

__all__ = [
    "BATCH_HEADER",
    "CaptureConfig",
    "CapturePipeline",
    "EntryBuilder",
    "RequestFacts",
    "ResponseFacts",
    "TelescopeContext",
    "TelescopeMiddleware",
    "content_within_limits",
    "entry_type_for",
    "extract",
    "extract_request_payload",
    "get_batch_id",
    "get_current_context",
    "is_patch_only",
    "is_path_ignored",
    "is_service_request",
    "normalize_side_channel",
    "record_middleware",
    "redact",
    "redact_headers",
    "resolve_batch_id",
    "set_grpc_request_payload",
    "set_grpc_response_payload",
    "should_capture",
    "telescope_context",
]
