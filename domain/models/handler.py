"""
Handler descriptor produced by the routing resolver.

The capture pipeline never inspects framework types directly. A resolver
turns the framework's routing result into a HandlerDescriptor and the
pipeline only looks at its transport tag.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class TransportKind(str, Enum):
    """Server transport that handled a request."""

    HTTP = "http"
    RPC = "rpc"
    JSON_RPC = "jsonrpc"
    GRPC = "grpc"


class HandlerDescriptor(BaseModel):
    """Resolved route handler and the transport it belongs to."""

    model_config = ConfigDict(frozen=True)

    callback: str = Field(default="", description="Human-readable handler identifier")
    server_name: str = Field(default="http", description="Name of the serving transport")
    transport: TransportKind = Field(default=TransportKind.HTTP)

    @property
    def is_service(self) -> bool:
        """RPC, JSON-RPC and gRPC traffic is recorded on the service channel."""
        return self.transport != TransportKind.HTTP

    @property
    def is_grpc(self) -> bool:
        return self.transport == TransportKind.GRPC


UNRESOLVED_HANDLER = HandlerDescriptor()
