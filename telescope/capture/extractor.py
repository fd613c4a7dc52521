"""Payload extraction for captured requests and responses.

Turns a raw body into what gets stored on the entry: the decoded JSON
structure, the plain text, an out-of-band gRPC message, or one of the
sentinel strings when the body is empty, too large, or opaque.
"""

import json
from typing import Any, Mapping, Optional, Union
from urllib.parse import parse_qsl

from domain.models import EMPTY_RESPONSE, HTML_RESPONSE, PURGED, Payload, TransportKind


Content = Union[bytes, str, None]


def extract(
    content: Content,
    content_type: Optional[str],
    size_limit_kb: int,
    grpc_payload: Any = None,
) -> Payload:
    """Extract a response payload.

    Decision order (first match wins): empty, oversized, JSON object or
    array, ``text/plain``, ``application/grpc``, anything else.

    Args:
        content: Raw body
        content_type: Value of the Content-Type header, may be empty
        size_limit_kb: Largest body kept verbatim, in KB
        grpc_payload: Decoded gRPC message supplied by the transport

    Returns:
        Decoded structure, string, or a sentinel
    """
    text = _as_text(content)
    if not text:
        return EMPTY_RESPONSE

    if not content_within_limits(text, size_limit_kb):
        return PURGED

    decoded = _decode_json(text)
    if decoded is not None:
        return decoded

    content_type = content_type or ""
    if content_type.lower().startswith("text/plain"):
        return text

    if "application/grpc" in content_type:
        return normalize_side_channel(grpc_payload) if grpc_payload else PURGED

    return HTML_RESPONSE


def content_within_limits(content: Content, size_limit_kb: int) -> bool:
    """Size check in characters per thousand, compared to the KB limit."""
    return len(_as_text(content)) / 1000 <= size_limit_kb


def extract_request_payload(
    query_params: Mapping[str, Any],
    body: Content,
    content_type: Optional[str],
    transport: TransportKind = TransportKind.HTTP,
    grpc_payload: Any = None,
) -> Payload:
    """Extract a request payload.

    gRPC requests carry their message out of band. Everything else is the
    query string merged with the parsed body, query keys taking precedence.
    """
    if transport == TransportKind.GRPC:
        return normalize_side_channel(grpc_payload) if grpc_payload else ""

    payload = dict(_parse_body(body, content_type))
    payload.update(query_params)
    return payload


def normalize_side_channel(payload: Any) -> Payload:
    """Reduce an out-of-band message to a JSON-compatible dict, list or string.

    Transports may hand over protobuf messages, numbers or containers with
    non-JSON values; anything that is not a dict, list or string is stored
    as its string form.
    """
    if isinstance(payload, str):
        return payload
    if isinstance(payload, (dict, list)):
        try:
            return json.loads(json.dumps(payload, default=str))
        except (TypeError, ValueError):
            return str(payload)
    return str(payload)


def _parse_body(body: Content, content_type: Optional[str]) -> Mapping[str, Any]:
    text = _as_text(body)
    if not text:
        return {}

    content_type = (content_type or "").lower()
    if content_type.startswith("application/x-www-form-urlencoded"):
        return dict(parse_qsl(text, keep_blank_values=True))

    decoded = _decode_json(text)
    if isinstance(decoded, dict):
        return decoded
    return {}


def _decode_json(text: str) -> Union[dict, list, None]:
    """Return the decoded value when text is a JSON object or array."""
    try:
        decoded = json.loads(text)
    except (json.JSONDecodeError, RecursionError):
        return None
    if isinstance(decoded, (dict, list)):
        return decoded
    return None


def _as_text(content: Content) -> str:
    if content is None:
        return ""
    if isinstance(content, bytes):
        return content.decode("utf-8", errors="replace")
    return content
