"""
Fake collaborator implementations for testing.

This package provides in-memory fakes of the ports the capture pipeline
depends on. No threads, clocks or files are involved.

Usage:
    from tests.fakes import FakeClock, ImmediateExecutor, SpyRecorder

    pipeline = CapturePipeline(
        CaptureConfig(),
        SpyRecorder(),
        clock=FakeClock(),
        executor=ImmediateExecutor(),
    )
"""
from typing import Any, Optional

from tests.fakes.recorder import FailingRecorder, FakeRpcContext, SpyRecorder
from tests.fakes.runtime import (
    DeferredQueueExecutor,
    FakeClock,
    FakeMemoryProbe,
    ImmediateExecutor,
)


def create_pipeline(
    config: Any = None,
    recorder: Any = None,
    *,
    rpc_context: Any = None,
    clock: Optional[FakeClock] = None,
    memory_probe: Optional[FakeMemoryProbe] = None,
    executor: Any = None,
    **kwargs: Any,
):
    """Build a CapturePipeline wired entirely with fakes."""
    from telescope.capture import CaptureConfig, CapturePipeline

    return CapturePipeline(
        config or CaptureConfig(),
        recorder if recorder is not None else SpyRecorder(),
        rpc_context=rpc_context,
        clock=clock or FakeClock(),
        memory_probe=memory_probe or FakeMemoryProbe(),
        executor=executor or ImmediateExecutor(),
        **kwargs,
    )


__all__ = [
    "FakeClock",
    "FakeMemoryProbe",
    "ImmediateExecutor",
    "DeferredQueueExecutor",
    "SpyRecorder",
    "FailingRecorder",
    "FakeRpcContext",
    "create_pipeline",
]
