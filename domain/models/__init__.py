"""
Domain models for Request Telescope.

This package contains pure value objects that are independent of the web
framework, the recorders and the runtime:
- CaptureEntry: the normalized record of one request/response pair
- EntryType: the recorder channel (request or service)
- HandlerDescriptor: resolved route handler plus transport tag
- TransportKind: http, rpc, jsonrpc or grpc

Usage:
    >>> from domain.models import CaptureEntry, EntryType

    >>> entry = CaptureEntry(batch_id="b-1", uri="/orders?page=2", method="GET")
    >>> entry.to_record()["uri"]
    '/orders?page=2'
"""

from domain.models.capture_entry import (
    EMPTY_RESPONSE,
    HTML_RESPONSE,
    PURGED,
    REDACTION_MASK,
    SENTINELS,
    CaptureEntry,
    EntryType,
    Payload,
)
from domain.models.handler import (
    UNRESOLVED_HANDLER,
    HandlerDescriptor,
    TransportKind,
)

__all__ = [
    # Capture entry
    "CaptureEntry",
    "EntryType",
    "Payload",
    "EMPTY_RESPONSE",
    "HTML_RESPONSE",
    "PURGED",
    "REDACTION_MASK",
    "SENTINELS",
    # Handler
    "HandlerDescriptor",
    "TransportKind",
    "UNRESOLVED_HANDLER",
]
