"""
Handler Resolver Interface (Port).

Turns the framework's routing result for a request into a
HandlerDescriptor. The capture pipeline depends only on the descriptor,
never on concrete framework classes.
"""

from typing import Protocol, Tuple

from starlette.requests import Request

from domain.models import HandlerDescriptor


class HandlerResolver(Protocol):
    """Abstract interface for routing/dispatch lookup."""

    def resolve(self, request: Request) -> HandlerDescriptor:
        """
        Resolve the handler that served a request.

        Must be called after the route has been matched. Implementations
        return UNRESOLVED_HANDLER rather than raising when nothing matched.

        Args:
            request: The incoming request

        Returns:
            HandlerDescriptor with callback and transport tag
        """
        ...

    def middleware(self, request: Request) -> Tuple[str, ...]:
        """
        Return the ordered middleware chain the request passed through.

        Args:
            request: The incoming request

        Returns:
            Tuple of middleware names, outermost first
        """
        ...
