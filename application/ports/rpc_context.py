"""
RPC Context Interface (Port).

Transports that do not carry plain HTTP headers (RPC servers, gRPC) hand
inbound correlation data to the capture layer through a context
side-channel. The capture layer reads the carrier stored under
``CARRIER_KEY`` and looks up ``batch-id`` in it.
"""

from typing import Any, Protocol

CARRIER_KEY = "telescope.carrier"


class RpcContext(Protocol):
    """Read-only view of the RPC context for the current request."""

    def get(self, key: str, default: Any = None) -> Any:
        """
        Look up a value in the RPC context.

        Args:
            key: Context key, usually CARRIER_KEY
            default: Value returned when the key is absent

        Returns:
            The stored value or default
        """
        ...
