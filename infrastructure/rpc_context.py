"""
Context-variable RPC context.

RPC and gRPC transports that receive correlation data outside HTTP headers
open ``rpc_carrier()`` around the call they dispatch. The capture layer
reads the carrier back through ContextVarRpcContext.

Usage:
    with rpc_carrier({"batch-id": inbound_batch_id}):
        await app(scope, receive, send)
"""

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Dict, Iterator, Optional

from application.ports.rpc_context import CARRIER_KEY

_RPC_CONTEXT: ContextVar[Optional[Dict[str, Any]]] = ContextVar(
    "telescope_rpc_context", default=None
)


class ContextVarRpcContext:
    """RpcContext implementation reading the current task's RPC context."""

    def get(self, key: str, default: Any = None) -> Any:
        values = _RPC_CONTEXT.get()
        if not values:
            return default
        return values.get(key, default)


@contextmanager
def rpc_carrier(carrier: Dict[str, Any]) -> Iterator[None]:
    """Expose an inbound carrier under CARRIER_KEY for the enclosed call."""
    token = _RPC_CONTEXT.set({CARRIER_KEY: dict(carrier)})
    try:
        yield
    finally:
        _RPC_CONTEXT.reset(token)
