"""
Infrastructure Layer for Request Telescope.

This package contains concrete implementations of the collaborator ports:
- recorders/: file, logging and in-memory entry sinks
- runtime.py: system clock and peak-memory probe
- rpc_context.py: context-variable RPC carrier
- handler_resolver.py: Starlette route-based handler resolver
"""

from infrastructure.handler_resolver import RouteHandlerResolver
from infrastructure.recorders import (
    InMemoryRecorder,
    JsonFileRecorder,
    LoggingRecorder,
    build_recorder,
)
from infrastructure.rpc_context import ContextVarRpcContext, rpc_carrier
from infrastructure.runtime import ResourceMemoryProbe, SystemClock

__all__ = [
    # Recorders
    "JsonFileRecorder",
    "LoggingRecorder",
    "InMemoryRecorder",
    "build_recorder",
    # Runtime
    "SystemClock",
    "ResourceMemoryProbe",
    # RPC
    "ContextVarRpcContext",
    "rpc_carrier",
    # Routing
    "RouteHandlerResolver",
]
