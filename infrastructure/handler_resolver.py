"""
Starlette route-based handler resolver.

Resolves the matched endpoint into a HandlerDescriptor. The transport tag
is derived from the request content type and a configured list of path
prefixes served by the RPC transport.
"""

from typing import Any, Iterable, Optional, Tuple

from starlette.requests import Request

from domain.models import UNRESOLVED_HANDLER, HandlerDescriptor, TransportKind


class RouteHandlerResolver:
    """HandlerResolver implementation for Starlette and FastAPI apps."""

    def __init__(self, rpc_path_prefixes: Optional[Iterable[str]] = None):
        self.rpc_path_prefixes = tuple(p for p in (rpc_path_prefixes or ()) if p)

    def resolve(self, request: Request) -> HandlerDescriptor:
        endpoint = request.scope.get("endpoint")
        transport = self.transport(request)
        if endpoint is None:
            if transport == TransportKind.HTTP:
                return UNRESOLVED_HANDLER
            return HandlerDescriptor(server_name=transport.value, transport=transport)

        return HandlerDescriptor(
            callback=describe_callable(endpoint),
            server_name=transport.value,
            transport=transport,
        )

    def transport(self, request: Request) -> TransportKind:
        content_type = (request.headers.get("content-type") or "").lower()
        if content_type.startswith("application/grpc"):
            return TransportKind.GRPC
        if content_type.startswith("application/json-rpc"):
            return TransportKind.JSON_RPC
        if any(request.url.path.startswith(prefix) for prefix in self.rpc_path_prefixes):
            return TransportKind.RPC
        return TransportKind.HTTP

    def middleware(self, request: Request) -> Tuple[str, ...]:
        app = request.scope.get("app")
        stack = getattr(app, "user_middleware", None) or []
        names = []
        for item in stack:
            cls = getattr(item, "cls", None)
            if cls is not None:
                names.append(describe_callable(cls))
        return tuple(names)


def describe_callable(target: Any) -> str:
    """Dotted ``module.QualName`` identifier for a function or class."""
    module = getattr(target, "__module__", None)
    name = getattr(target, "__qualname__", None) or getattr(target, "__name__", None)
    if name is None:
        return repr(target)
    return f"{module}.{name}" if module else name
