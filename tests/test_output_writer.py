"""Tests del Output Writer: cooldown por salida y recuperación.

Ejecutar:
    pytest tests/test_output_writer.py -v
"""

import logging
from unittest.mock import MagicMock

import pytest

from oee_engine.engine.output_writer import OutputPresenceRegistry, OutputWriter
from oee_engine.engine.writer_config import WriterConfig
from oee_engine.points import InMemoryPointStore, PointWriteError

from conftest import FakeClock

OUT_A = "Outputs/Quality"
OUT_B = "Outputs/OEE"


@pytest.fixture
def mock_store():
    store = MagicMock()
    store.has.return_value = True
    store.is_text.return_value = False
    return store


def _writer(store, clock, cooldown=30.0, outputs=(OUT_A, OUT_B)):
    return OutputWriter(store, outputs, WriterConfig(retry_cooldown_seconds=cooldown), clock)


class TestCooldown:

    def test_failed_output_is_skipped_during_cooldown(self, mock_store):
        clock = FakeClock()
        writer = _writer(mock_store, clock)
        mock_store.write.side_effect = PointWriteError(OUT_A, "type mismatch")

        assert writer.write(OUT_A, 1.0) is False
        assert mock_store.write.call_count == 1

        clock.advance(29.9)
        assert writer.write(OUT_A, 1.0) is False
        assert mock_store.write.call_count == 1
        assert writer.get_stats()["skipped_cooldown"] == 1

    def test_retry_after_cooldown_and_recovery(self, mock_store, caplog):
        clock = FakeClock()
        writer = _writer(mock_store, clock)
        mock_store.write.side_effect = PointWriteError(OUT_A, "type mismatch")
        writer.write(OUT_A, 1.0)

        clock.advance(30.0)
        mock_store.write.side_effect = None
        with caplog.at_level(logging.INFO):
            assert writer.write(OUT_A, 2.0) is True
        assert "recovered" in caplog.text
        assert writer.registry.get(OUT_A).writable is True
        assert writer.registry.failed() == []

    def test_failure_after_cooldown_restarts_it(self, mock_store):
        clock = FakeClock()
        writer = _writer(mock_store, clock)
        mock_store.write.side_effect = RuntimeError("host busy")
        writer.write(OUT_A, 1.0)

        clock.advance(30.0)
        assert writer.write(OUT_A, 1.0) is False
        assert mock_store.write.call_count == 2

        clock.advance(10.0)
        writer.write(OUT_A, 1.0)
        assert mock_store.write.call_count == 2
        assert writer.registry.get(OUT_A).failures == 2

    def test_one_failed_output_does_not_block_others(self, mock_store):
        def write(name, value):
            if name == OUT_A:
                raise PointWriteError(name, "rejected")

        mock_store.write.side_effect = write
        writer = _writer(mock_store, FakeClock())

        assert writer.write_all([(OUT_A, 1.0), (OUT_B, 2.0)]) == 1
        assert writer.registry.failed() == [OUT_A]
        mock_store.write.assert_any_call(OUT_B, 2.0)

    def test_failure_is_logged_with_value_and_type(self, mock_store, caplog):
        mock_store.write.side_effect = PointWriteError(OUT_A, "type mismatch")
        writer = _writer(mock_store, FakeClock())
        with caplog.at_level(logging.ERROR):
            writer.write(OUT_A, 12.5)
        assert "Write failed for 'Outputs/Quality' value=12.5 (float)" in caplog.text


class TestSkips:

    @pytest.mark.parametrize("value", ["", "   "])
    def test_blank_strings_are_not_written(self, mock_store, value):
        writer = _writer(mock_store, FakeClock())
        assert writer.write(OUT_A, value) is False
        mock_store.write.assert_not_called()
        assert writer.get_stats()["skipped_blank"] == 1

    def test_undeclared_outputs_are_skipped(self):
        store = InMemoryPointStore(declared=[OUT_A])
        writer = _writer(store, FakeClock())

        assert writer.missing == [OUT_B]
        assert writer.write(OUT_B, 1.0) is False
        assert writer.write(OUT_A, 1.0) is True
        assert store.get(OUT_A) == 1.0

    def test_unregistered_name(self, mock_store):
        writer = _writer(mock_store, FakeClock())
        assert writer.write("Outputs/Unknown", 1.0) is False


class TestReset:

    def test_reset_clears_failures_and_rediscovers(self):
        store = InMemoryPointStore(declared=[OUT_A])
        store.reject.add(OUT_A)
        writer = _writer(store, FakeClock())
        writer.write(OUT_A, 1.0)
        assert writer.registry.failed() == [OUT_A]

        store.reject.clear()
        store.declare(OUT_B)
        writer.reset()

        assert writer.missing == []
        assert writer.write(OUT_A, 3.0) is True
        assert writer.write(OUT_B, 4.0) is True

    def test_is_text(self):
        store = InMemoryPointStore(declared=[OUT_A], text_points=[OUT_A])
        writer = _writer(store, FakeClock())
        assert writer.is_text(OUT_A) is True
        assert writer.is_text(OUT_B) is False


class TestConcurrentReset:

    def test_reset_during_host_write_does_not_raise(self, mock_store):
        writer = _writer(mock_store, FakeClock())

        def write_while_reset(name, value):
            # Host drops OUT_A and an operator resets mid-write.
            mock_store.has.side_effect = lambda n: n != OUT_A
            writer.reset()

        mock_store.write.side_effect = write_while_reset

        assert writer.write(OUT_A, 1.0) is True
        assert OUT_A not in writer.registry
        assert writer.missing == [OUT_A]

        mock_store.write.side_effect = None
        assert writer.write_all([(OUT_A, 2.0), (OUT_B, 3.0)]) == 1

    def test_failure_during_reset_lands_on_old_registry(self, mock_store):
        writer = _writer(mock_store, FakeClock())

        def fail_while_reset(name, value):
            writer.reset()
            raise PointWriteError(name, "rejected")

        mock_store.write.side_effect = fail_while_reset

        assert writer.write(OUT_A, 1.0) is False
        assert writer.registry.failed() == []
        assert writer.get_stats()["write_failures"] == 1


class TestRegistry:

    def test_discover(self):
        store = InMemoryPointStore(declared=[OUT_A])
        registry, missing = OutputPresenceRegistry.discover(store, [OUT_A, OUT_B])
        assert OUT_A in registry
        assert OUT_B not in registry
        assert missing == [OUT_B]

    def test_to_dict(self):
        registry = OutputPresenceRegistry([OUT_A])
        registry.mark_failure(OUT_A, 5.0, RuntimeError("x" * 500))
        entry = registry.to_dict()[OUT_A]
        assert entry["writable"] is False
        assert len(entry["last_error"]) == 200
        assert entry["last_failure_utc"] is not None
