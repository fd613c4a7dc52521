"""Dotted-path redaction for captured payloads and headers."""

from __future__ import annotations

import copy
from typing import Any, Iterable, Mapping

from domain.models import REDACTION_MASK

_MISSING = object()


def redact(payload: Any, hidden_paths: Iterable[str], mask: str = REDACTION_MASK) -> Any:
    """Return a copy of payload with every truthy hidden path masked.

    Paths use dot notation (``user.token``, ``items.0.secret``). A key that
    literally contains dots is matched before the path is split. Missing
    paths and falsy values are left as they are. Non-container payloads
    (strings, sentinels) are returned unchanged.
    """
    if not isinstance(payload, (dict, list)):
        return payload

    redacted = copy.deepcopy(payload)
    for path in hidden_paths:
        if not path:
            continue
        if _get(redacted, path):
            _set(redacted, path, mask)
    return redacted


def redact_headers(
    headers: Mapping[str, list[str]],
    hidden_names: Iterable[str],
    mask: str = REDACTION_MASK,
) -> dict[str, list[str]]:
    hidden = {name.lower() for name in hidden_names}
    return {
        name: ([mask] if name.lower() in hidden and any(values) else list(values))
        for name, values in headers.items()
    }


def _get(data: Any, path: str) -> Any:
    if isinstance(data, dict) and path in data:
        return data[path]

    current = data
    for segment in path.split("."):
        current = _child(current, segment)
        if current is _MISSING:
            return None
    return current


def _set(data: Any, path: str, value: Any) -> None:
    if isinstance(data, dict) and path in data:
        data[path] = value
        return

    *parents, leaf = path.split(".")
    current = data
    for segment in parents:
        current = _child(current, segment)
    if isinstance(current, dict):
        current[leaf] = value
    elif isinstance(current, list):
        current[int(leaf)] = value


def _child(node: Any, segment: str) -> Any:
    if isinstance(node, dict):
        return node.get(segment, _MISSING)
    if isinstance(node, list) and segment.lstrip("-").isdigit():
        index = int(segment)
        if 0 <= index < len(node):
            return node[index]
    return _MISSING
