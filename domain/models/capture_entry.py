"""
Capture entry value object.

A CaptureEntry is the normalized record of one request/response lifecycle.
It is built once, after the response has been sent, and handed to a
recorder. Entries are frozen: recorders may serialize them but never
change them.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


# Sentinel payloads stand in for content that is not captured verbatim.
EMPTY_RESPONSE = "Empty Response"
HTML_RESPONSE = "HTML Response"
PURGED = "Purged By Telescope"

SENTINELS = frozenset({EMPTY_RESPONSE, HTML_RESPONSE, PURGED})

# Mask written over redacted values.
REDACTION_MASK = "********"

Payload = Union[Dict[str, Any], List[Any], str]


class EntryType(str, Enum):
    """Recorder channel an entry was dispatched to."""

    REQUEST = "request"
    SERVICE = "service"


class CaptureEntry(BaseModel):
    """
    Immutable record of a captured request/response pair.

    Examples:
        >>> entry = CaptureEntry(batch_id="abc", uri="/health", method="GET")
        >>> entry.response
        'Empty Response'
    """

    model_config = ConfigDict(frozen=True)

    batch_id: str = Field(..., min_length=1, description="Correlation id for the request")
    ip_address: str = Field(default="unknown", description="Client address")
    uri: str = Field(..., min_length=1, description="Request target, path plus query")
    method: str = Field(..., min_length=1, description="HTTP method")
    controller_action: str = Field(default="", description="Resolved handler identifier")
    middleware: Tuple[str, ...] = Field(default_factory=tuple)
    headers: Dict[str, List[str]] = Field(default_factory=dict)
    payload: Payload = Field(default_factory=dict, description="Request payload")
    response_status: int = Field(default=200)
    response: Payload = Field(default=EMPTY_RESPONSE, description="Response payload or sentinel")
    duration: Optional[int] = Field(default=None, description="Duration in milliseconds")
    memory: float = Field(default=0.0, description="Peak memory usage in MB")
    type: EntryType = Field(default=EntryType.REQUEST)
    recorded_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @field_validator("memory")
    @classmethod
    def round_memory(cls, v: float) -> float:
        """Memory is reported with one decimal place."""
        return round(v, 1)

    @property
    def is_service(self) -> bool:
        return self.type == EntryType.SERVICE

    def to_record(self) -> Dict[str, Any]:
        """Return a JSON-ready dict of the entry."""
        return self.model_dump(mode="json")
