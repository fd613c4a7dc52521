"""
Unit tests for infrastructure/recorders/
"""

import json
import logging
import threading

import pytest

from domain.models import CaptureEntry, EntryType
from infrastructure.recorders import (
    InMemoryRecorder,
    JsonFileRecorder,
    LoggingRecorder,
    build_recorder,
)


def _entry(batch_id: str = "batch-1", entry_type: EntryType = EntryType.REQUEST, **kwargs) -> CaptureEntry:
    return CaptureEntry(batch_id=batch_id, uri="/orders", method="GET", type=entry_type, **kwargs)


@pytest.mark.unit
class TestJsonFileRecorder:
    """One JSON file per entry, grouped by batch."""

    def test_writes_entry_file(self, tmp_path):
        recorder = JsonFileRecorder(tmp_path)
        recorder.record_request(_entry(response={"id": 1}))

        files = list((tmp_path / "batch-1").glob("*.json"))
        assert [f.name for f in files] == ["001_request.json"]

        data = json.loads(files[0].read_text(encoding="utf-8"))
        assert data["batch_id"] == "batch-1"
        assert data["response"] == {"id": 1}
        assert data["type"] == "request"

    def test_sequence_spans_channels(self, tmp_path):
        recorder = JsonFileRecorder(tmp_path)
        recorder.record_request(_entry())
        recorder.record_service(_entry(entry_type=EntryType.SERVICE))

        names = sorted(f.name for f in (tmp_path / "batch-1").iterdir())
        assert names == ["001_request.json", "002_service.json"]
        assert recorder.sequence_count == 2

    def test_batch_id_cannot_escape_capture_dir(self, tmp_path):
        recorder = JsonFileRecorder(tmp_path)
        path = recorder.write(_entry(batch_id="../../etc"))
        assert path.parent.parent == tmp_path
        assert path.parent.name == "______etc"

    def test_concurrent_writes_get_unique_names(self, tmp_path):
        recorder = JsonFileRecorder(tmp_path)
        threads = [threading.Thread(target=recorder.record_request, args=(_entry(),)) for _ in range(20)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(list((tmp_path / "batch-1").iterdir())) == 20


@pytest.mark.unit
class TestLoggingRecorder:
    """Structured log line per entry."""

    def test_logs_entry(self, caplog):
        recorder = LoggingRecorder()
        with caplog.at_level(logging.INFO, logger="telescope.entries"):
            recorder.record_request(_entry(response_status=201, duration=12))

        assert len(caplog.records) == 1
        message = caplog.records[0].getMessage()
        assert message.startswith("request GET /orders status=201 duration=12ms batch=batch-1")
        assert '"batch_id": "batch-1"' in message

    def test_service_channel(self, caplog):
        with caplog.at_level(logging.INFO, logger="telescope.entries"):
            LoggingRecorder().record_service(_entry(entry_type=EntryType.SERVICE))
        assert caplog.records[0].getMessage().startswith("service GET")


@pytest.mark.unit
class TestInMemoryRecorder:
    """In-process recorder."""

    def test_channels_are_separate(self):
        recorder = InMemoryRecorder()
        recorder.record_request(_entry("a"))
        recorder.record_service(_entry("b", EntryType.SERVICE))

        assert [e.batch_id for e in recorder.requests] == ["a"]
        assert [e.batch_id for e in recorder.services] == ["b"]

    def test_find_batch_spans_channels(self):
        recorder = InMemoryRecorder()
        recorder.record_request(_entry("a"))
        recorder.record_service(_entry("a", EntryType.SERVICE))
        recorder.record_request(_entry("b"))

        assert len(recorder.find_batch("a")) == 2

    def test_max_entries_keeps_newest(self):
        recorder = InMemoryRecorder(max_entries=2)
        for batch_id in ("a", "b", "c"):
            recorder.record_request(_entry(batch_id))

        assert [e.batch_id for e in recorder.requests] == ["b", "c"]

    def test_reset(self):
        recorder = InMemoryRecorder()
        recorder.record_request(_entry())
        recorder.reset()
        assert recorder.requests == []


@pytest.mark.unit
class TestBuildRecorder:
    """Recorder selection from settings."""

    @pytest.mark.parametrize(
        "kind,expected",
        [("log", LoggingRecorder), ("file", JsonFileRecorder), ("memory", InMemoryRecorder)],
    )
    def test_known_kinds(self, kind, expected, tmp_path):
        assert isinstance(build_recorder(kind, str(tmp_path)), expected)

    def test_unknown_kind_raises(self):
        with pytest.raises(ValueError, match="Unknown recorder"):
            build_recorder("kafka")
