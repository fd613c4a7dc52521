"""
Tests for collaborator protocol definitions.

These tests verify that:
1. Protocol definitions are valid and importable
2. Protocols define the expected methods
3. Infrastructure adapters and test fakes expose the same methods
"""
import pytest

# All tests in this module are pure logic tests (no TestClient) - mark as unit
pytestmark = pytest.mark.unit


def _public_methods(cls):
    return {name for name in dir(cls) if not name.startswith("_") and callable(getattr(cls, name))}


class TestProtocolImports:
    """Test that all protocols can be imported."""

    def test_recorder_import(self):
        from application.ports import Recorder
        assert Recorder is not None

    def test_runtime_imports(self):
        from application.ports import Clock, DeferredExecutor, MemoryProbe
        assert Clock is not None
        assert MemoryProbe is not None
        assert DeferredExecutor is not None

    def test_rpc_context_import(self):
        from application.ports import CARRIER_KEY, RpcContext
        assert RpcContext is not None
        assert CARRIER_KEY == "telescope.carrier"

    def test_handler_resolver_import(self):
        from application.ports import HandlerResolver
        assert HandlerResolver is not None


class TestRecorderProtocol:
    """Recorder adapters implement both channels."""

    @pytest.mark.parametrize("adapter_name", ["JsonFileRecorder", "LoggingRecorder", "InMemoryRecorder"])
    def test_adapters_implement_protocol(self, adapter_name):
        import infrastructure
        from application.ports import Recorder

        required = _public_methods(Recorder)
        assert required == {"record_request", "record_service"}
        assert required <= _public_methods(getattr(infrastructure, adapter_name))

    def test_fakes_implement_protocol(self):
        from application.ports import Recorder
        from tests.fakes import FailingRecorder, SpyRecorder

        required = _public_methods(Recorder)
        assert required <= _public_methods(SpyRecorder)
        assert required <= _public_methods(FailingRecorder)


class TestRuntimeProtocols:
    """Runtime adapters and fakes match their ports."""

    def test_clock(self):
        from application.ports import Clock
        from infrastructure import SystemClock
        from tests.fakes import FakeClock

        required = _public_methods(Clock)
        assert required == {"now", "monotonic"}
        assert required <= _public_methods(SystemClock)
        assert required <= _public_methods(FakeClock)

    def test_memory_probe(self):
        from application.ports import MemoryProbe
        from infrastructure import ResourceMemoryProbe
        from tests.fakes import FakeMemoryProbe

        required = _public_methods(MemoryProbe)
        assert required <= _public_methods(ResourceMemoryProbe)
        assert required <= _public_methods(FakeMemoryProbe)

    def test_deferred_executor_matches_thread_pool(self):
        from concurrent.futures import ThreadPoolExecutor

        from application.ports import DeferredExecutor
        from tests.fakes import DeferredQueueExecutor, ImmediateExecutor

        required = _public_methods(DeferredExecutor)
        assert required == {"submit", "shutdown"}
        assert required <= _public_methods(ThreadPoolExecutor)
        assert required <= _public_methods(ImmediateExecutor)
        assert required <= _public_methods(DeferredQueueExecutor)

    def test_rpc_context(self):
        from application.ports import RpcContext
        from infrastructure import ContextVarRpcContext
        from tests.fakes import FakeRpcContext

        required = _public_methods(RpcContext)
        assert required == {"get"}
        assert required <= _public_methods(ContextVarRpcContext)
        assert required <= _public_methods(FakeRpcContext)

    def test_handler_resolver(self):
        from application.ports import HandlerResolver
        from infrastructure import RouteHandlerResolver

        required = _public_methods(HandlerResolver)
        assert {"resolve", "middleware"} <= required
        assert required <= _public_methods(RouteHandlerResolver)


class TestRuntimeAdapters:
    """Real clock and memory probe return sane values."""

    def test_system_clock(self):
        from infrastructure import SystemClock

        clock = SystemClock()
        first = clock.monotonic()
        assert clock.monotonic() >= first
        assert clock.now().tzinfo is not None

    def test_memory_probe_reports_bytes(self):
        import sys

        from infrastructure import ResourceMemoryProbe

        if sys.platform.startswith("win"):
            pytest.skip("resource module is POSIX-only")
        assert ResourceMemoryProbe().peak_bytes() > 1024 * 1024
