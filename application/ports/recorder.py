"""
Recorder Interface (Port).

Defines the sink that receives finished capture entries. The pipeline
dispatches each entry to exactly one of the two channels and does not
retry, buffer or inspect the result.
"""

from typing import Protocol

from domain.models import CaptureEntry


class Recorder(Protocol):
    """
    Abstract interface for persisting or forwarding capture entries.

    Implementations must be safe to call from several worker threads at
    once and should not block for long; the pipeline treats both calls
    as fire-and-forget.
    """

    def record_request(self, entry: CaptureEntry) -> None:
        """
        Record an entry for plain HTTP traffic.

        Args:
            entry: The finished capture entry
        """
        ...

    def record_service(self, entry: CaptureEntry) -> None:
        """
        Record an entry for RPC, JSON-RPC or gRPC traffic.

        Args:
            entry: The finished capture entry
        """
        ...
