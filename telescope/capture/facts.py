"""
Request and response facts handed to the deferred capture.

Facts are snapshotted in the request task before the capture is scheduled,
so the worker thread never touches the live request, the response stream
or any context variable.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from domain.models import UNRESOLVED_HANDLER, HandlerDescriptor


@dataclass(frozen=True)
class RequestFacts:
    """What the transport knew about the request."""

    method: str
    path: str
    query_string: str = ""
    headers: Mapping[str, list[str]] = field(default_factory=dict)
    query_params: Mapping[str, Any] = field(default_factory=dict)
    body: bytes = b""
    content_type: str = ""
    remote_addr: Optional[str] = None
    start_time: Optional[float] = None
    handler: HandlerDescriptor = UNRESOLVED_HANDLER
    middleware: tuple[str, ...] = ()
    grpc_payload: Any = None

    @property
    def uri(self) -> str:
        """Request target as sent by the client."""
        if self.query_string:
            return f"{self.path}?{self.query_string}"
        return self.path

    def header(self, name: str) -> str:
        """First value of a header, or an empty string."""
        values = self.headers.get(name.lower()) or []
        return values[0] if values else ""


@dataclass(frozen=True)
class ResponseFacts:
    """What the transport knew about the response."""

    status_code: int
    body: bytes = b""
    content_type: str = ""
    grpc_payload: Any = None
