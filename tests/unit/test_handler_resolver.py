"""
Unit tests for infrastructure/handler_resolver.py
"""

import pytest
from starlette.requests import Request

from domain.models import UNRESOLVED_HANDLER, TransportKind
from infrastructure.handler_resolver import RouteHandlerResolver, describe_callable


def get_order():
    return {}


class OrderController:
    def show(self):
        return {}


class _FakeMiddleware:
    def __init__(self, cls):
        self.cls = cls


class _FakeApp:
    def __init__(self, *middleware_classes):
        self.user_middleware = [_FakeMiddleware(cls) for cls in middleware_classes]


def _request(path="/orders", content_type=None, endpoint=None, app=None) -> Request:
    headers = []
    if content_type:
        headers.append((b"content-type", content_type.encode()))
    scope = {
        "type": "http",
        "method": "POST",
        "path": path,
        "query_string": b"",
        "headers": headers,
        "server": ("testserver", 80),
    }
    if endpoint is not None:
        scope["endpoint"] = endpoint
    if app is not None:
        scope["app"] = app
    return Request(scope)


@pytest.mark.unit
class TestResolve:
    """Routing result to HandlerDescriptor."""

    def test_function_endpoint(self):
        handler = RouteHandlerResolver().resolve(_request(endpoint=get_order))
        assert handler.callback.endswith("test_handler_resolver.get_order")
        assert handler.transport == TransportKind.HTTP

    def test_method_endpoint_uses_qualname(self):
        handler = RouteHandlerResolver().resolve(_request(endpoint=OrderController.show))
        assert handler.callback.endswith("OrderController.show")

    def test_unmatched_route(self):
        assert RouteHandlerResolver().resolve(_request()) == UNRESOLVED_HANDLER

    def test_unmatched_service_route_keeps_transport(self):
        handler = RouteHandlerResolver().resolve(_request(content_type="application/grpc"))
        assert handler.callback == ""
        assert handler.transport == TransportKind.GRPC


@pytest.mark.unit
class TestTransport:
    """Transport tag detection."""

    @pytest.mark.parametrize(
        "content_type,expected",
        [
            ("application/grpc", TransportKind.GRPC),
            ("application/grpc+proto", TransportKind.GRPC),
            ("application/json-rpc", TransportKind.JSON_RPC),
            ("application/json", TransportKind.HTTP),
            (None, TransportKind.HTTP),
        ],
    )
    def test_content_type(self, content_type, expected):
        assert RouteHandlerResolver().transport(_request(content_type=content_type)) == expected

    def test_rpc_path_prefix(self):
        resolver = RouteHandlerResolver(["/rpc"])
        assert resolver.transport(_request("/rpc/orders.get")) == TransportKind.RPC
        assert resolver.transport(_request("/orders")) == TransportKind.HTTP

    def test_empty_prefixes_are_ignored(self):
        resolver = RouteHandlerResolver(["", "/rpc"])
        assert resolver.rpc_path_prefixes == ("/rpc",)


@pytest.mark.unit
class TestMiddleware:
    """Middleware chain from the app's user middleware."""

    def test_lists_middleware_classes(self):
        app = _FakeApp(OrderController)
        names = RouteHandlerResolver().middleware(_request(app=app))
        assert len(names) == 1
        assert names[0].endswith("test_handler_resolver.OrderController")

    def test_no_app(self):
        assert RouteHandlerResolver().middleware(_request()) == ()


@pytest.mark.unit
class TestDescribeCallable:
    def test_builtin(self):
        assert describe_callable(len) == "builtins.len"

    def test_object_without_name(self):
        assert describe_callable(42) == "42"
