"""Request-scoped telescope context.

The middleware opens one TelescopeContext per request and stores it in a
ContextVar. The object itself is mutable and shared by reference, so
handlers running in a child task (as they do under BaseHTTPMiddleware) can
still attach gRPC payloads or middleware names that the middleware reads
back once the response is ready.
"""

from __future__ import annotations

import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping

from application.ports.rpc_context import CARRIER_KEY, RpcContext

BATCH_HEADER = "batch-id"

_CURRENT_CONTEXT: ContextVar["TelescopeContext | None"] = ContextVar(
    "telescope_current_context", default=None
)


@dataclass
class TelescopeContext:
    """Mutable state for a single in-flight request."""

    batch_id: str
    middlewares: list[str] = field(default_factory=list)
    grpc_request_payload: Any = None
    grpc_response_payload: Any = None


def generate_batch_id() -> str:
    return str(uuid.uuid4())


def resolve_batch_id(headers: Mapping[str, str], rpc_context: RpcContext | None = None) -> str:
    """Pick the batch id for a request.

    Checks (in order):
    1. ``batch-id`` request header
    2. ``batch-id`` in the RPC carrier
    3. a freshly generated UUID
    """
    header_val = (headers.get(BATCH_HEADER) or "").strip()
    if header_val:
        return header_val

    if rpc_context is not None:
        carrier = rpc_context.get(CARRIER_KEY, {}) or {}
        carrier_val = str(carrier.get(BATCH_HEADER) or "").strip()
        if carrier_val:
            return carrier_val

    return generate_batch_id()


def get_current_context() -> TelescopeContext | None:
    return _CURRENT_CONTEXT.get()


def get_batch_id() -> str | None:
    context = _CURRENT_CONTEXT.get()
    return context.batch_id if context else None


@contextmanager
def telescope_context(batch_id: str) -> Iterator[TelescopeContext]:
    # Nested scopes restore the previous context on exit.
    context = TelescopeContext(batch_id=batch_id)
    token = _CURRENT_CONTEXT.set(context)
    try:
        yield context
    finally:
        _CURRENT_CONTEXT.reset(token)


def record_middleware(name: str) -> None:
    """Append a middleware name to the current request's chain."""
    context = _CURRENT_CONTEXT.get()
    if context is not None:
        context.middlewares.append(name)


def set_grpc_request_payload(payload: Any) -> None:
    """Attach the decoded gRPC request message for the current request."""
    context = _CURRENT_CONTEXT.get()
    if context is not None:
        context.grpc_request_payload = payload


def set_grpc_response_payload(payload: Any) -> None:
    """Attach the decoded gRPC response message for the current request."""
    context = _CURRENT_CONTEXT.get()
    if context is not None:
        context.grpc_response_payload = payload
