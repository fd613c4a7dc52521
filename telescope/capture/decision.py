"""Decide whether a request is captured and on which channel."""

from fnmatch import fnmatchcase
from typing import Iterable

from domain.models import EntryType, HandlerDescriptor
from telescope.capture.config import CaptureConfig
from telescope.capture.facts import RequestFacts

REQUEST_KIND = "request"


def should_capture(config: CaptureConfig, request: RequestFacts, kind: str = REQUEST_KIND) -> bool:
    """Return True when the request should be recorded.

    A disabled kind always wins. A patch-only match forces capture even
    when an ignore pattern would also match.
    """
    if not config.is_enabled(kind):
        return False

    if is_patch_only(config, request.path):
        return True

    return not is_path_ignored(config, request.path)


def is_patch_only(config: CaptureConfig, path: str) -> bool:
    return _matches_any(config.only_paths, path)


def is_path_ignored(config: CaptureConfig, path: str) -> bool:
    return _matches_any(config.ignore_paths, path)


def is_service_request(handler: HandlerDescriptor) -> bool:
    """RPC, JSON-RPC and gRPC traffic goes to the service channel."""
    return handler.is_service


def entry_type_for(handler: HandlerDescriptor) -> EntryType:
    return EntryType.SERVICE if is_service_request(handler) else EntryType.REQUEST


def _matches_any(patterns: Iterable[str], path: str) -> bool:
    normalized = path.lstrip("/")
    return any(fnmatchcase(normalized, pattern.lstrip("/")) for pattern in patterns)
