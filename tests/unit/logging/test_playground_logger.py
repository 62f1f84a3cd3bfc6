"""
Tests for the playground log formatters and timed_operation.
"""
import json
import logging
import sys

import pytest


LOGGER_NAME = "async_playground.test_timed"


def _record(msg="hello", level=logging.INFO, **attrs):
    record = logging.LogRecord("async_playground.test", level, __file__, 1, msg, None, None)
    for key, value in attrs.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def test_emits_required_fields(self):
        from async_playground.infrastructure.logging.playground_logger import JSONFormatter

        data = json.loads(JSONFormatter().format(_record()))

        assert data["message"] == "hello"
        assert data["level"] == "INFO"
        assert data["logger"] == "async_playground.test"
        assert "timestamp" in data

    def test_includes_context_fields_from_extra(self):
        from async_playground.infrastructure.logging.playground_logger import JSONFormatter

        record = _record(actor_id="chicken-feeder", correlation_id="ab12cd34", duration_ms=1.5)
        data = json.loads(JSONFormatter().format(record))

        assert data["actor_id"] == "chicken-feeder"
        assert data["correlation_id"] == "ab12cd34"
        assert data["duration_ms"] == 1.5

    def test_omits_missing_fields(self):
        from async_playground.infrastructure.logging.playground_logger import JSONFormatter

        data = json.loads(JSONFormatter().format(_record()))

        assert "actor_id" not in data
        assert "operation" not in data
        assert "error" not in data

    def test_includes_exception(self):
        from async_playground.infrastructure.logging.playground_logger import JSONFormatter

        try:
            raise ValueError("bad value")
        except ValueError:
            record = _record()
            record.exc_info = sys.exc_info()

        data = json.loads(JSONFormatter().format(record))
        assert data["error"] == "bad value"
        assert data["error_type"] == "ValueError"


class TestHumanFormatter:
    """Tests for HumanFormatter."""

    def test_level_actor_and_message(self):
        from async_playground.infrastructure.logging.playground_logger import HumanFormatter

        output = HumanFormatter().format(_record("Underflow attempted", logging.WARNING, actor_id="counter"))

        assert "[WARNING]" in output
        assert "[counter]" in output
        assert "Underflow attempted" in output

    def test_duration(self):
        from async_playground.infrastructure.logging.playground_logger import HumanFormatter

        output = HumanFormatter().format(_record("Completed feeder", duration_ms=1.5))
        assert "(1.50ms)" in output

    def test_no_actor_brackets_without_actor(self):
        from async_playground.infrastructure.logging.playground_logger import HumanFormatter

        output = HumanFormatter().format(_record())
        assert output.count("[") == 2


class TestTimedOperation:
    """Tests for timed_operation."""

    def test_logs_completion_with_duration(self, caplog):
        from async_playground.infrastructure.logging.playground_logger import timed_operation

        caplog.set_level(logging.DEBUG, logger=LOGGER_NAME)
        logger = logging.getLogger(LOGGER_NAME)

        with timed_operation(logger, "fan-out", correlation_id="ab12cd34") as timing:
            pass

        assert timing.operation == "fan-out"
        assert timing.duration_ms is not None
        assert timing.duration_ms >= 0

        messages = [r.getMessage() for r in caplog.records]
        assert messages == ["Starting fan-out", "Completed fan-out"]
        completed = caplog.records[-1]
        assert completed.levelno == logging.INFO
        assert completed.operation == "fan-out"
        assert completed.correlation_id == "ab12cd34"
        assert completed.duration_ms == timing.duration_ms

    def test_logs_failure_and_reraises(self, caplog):
        from async_playground.infrastructure.logging.playground_logger import timed_operation

        caplog.set_level(logging.DEBUG, logger=LOGGER_NAME)
        logger = logging.getLogger(LOGGER_NAME)

        with pytest.raises(ValueError):
            with timed_operation(logger, "fan-out") as timing:
                raise ValueError("test error")

        failed = caplog.records[-1]
        assert failed.getMessage() == "Failed fan-out"
        assert failed.levelno == logging.ERROR
        assert failed.exc_info[0] is ValueError
        assert timing.duration_ms is not None

    def test_uses_given_logger(self, caplog):
        from async_playground.infrastructure.logging.playground_logger import timed_operation

        caplog.set_level(logging.INFO, logger=LOGGER_NAME)
        with timed_operation(logging.getLogger(LOGGER_NAME), "feeder"):
            pass

        assert [r.name for r in caplog.records] == [LOGGER_NAME]
