"""
Collaborator Interfaces (Ports) for Request Telescope.

This package defines the abstract interfaces the capture pipeline needs
from the world around it. Implementations are provided in the
infrastructure layer; tests provide fakes in tests/fakes.

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the pipeline needs)
- Adapters: Concrete implementations in infrastructure/ (how it's provided)

Usage:
    from application.ports import Recorder

    class AuditForwarder:
        def __init__(self, recorder: Recorder):
            self.recorder = recorder
"""

# Entry sink
from application.ports.recorder import Recorder

# RPC side-channel
from application.ports.rpc_context import CARRIER_KEY, RpcContext

# Routing lookup
from application.ports.handler_resolver import HandlerResolver

# Runtime capabilities
from application.ports.runtime import Clock, DeferredExecutor, MemoryProbe

__all__ = [
    # Sink
    "Recorder",
    # RPC
    "RpcContext",
    "CARRIER_KEY",
    # Routing
    "HandlerResolver",
    # Runtime
    "Clock",
    "MemoryProbe",
    "DeferredExecutor",
]
