"""
Recorder implementations.

- JsonFileRecorder: one JSON file per entry, grouped by batch id
- LoggingRecorder: one structured log line per entry
- InMemoryRecorder: thread-safe in-process lists

Use build_recorder() to pick one from settings.
"""

from infrastructure.recorders.file_recorder import JsonFileRecorder
from infrastructure.recorders.log_recorder import LoggingRecorder
from infrastructure.recorders.memory_recorder import InMemoryRecorder


def build_recorder(kind: str, capture_dir: str = "./telescope"):
    """
    Create the recorder named by the ``recorder`` setting.

    Args:
        kind: "log", "file" or "memory"
        capture_dir: Directory for the file recorder

    Returns:
        A Recorder implementation

    Raises:
        ValueError: If kind is unknown
    """
    if kind == "file":
        return JsonFileRecorder(capture_dir)
    if kind == "memory":
        return InMemoryRecorder()
    if kind == "log":
        return LoggingRecorder()
    raise ValueError(f"Unknown recorder '{kind}'")


__all__ = [
    "JsonFileRecorder",
    "LoggingRecorder",
    "InMemoryRecorder",
    "build_recorder",
]
