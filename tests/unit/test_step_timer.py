"""Tests for step timing and structured logging."""

import json
import logging

from clarity.config.constants import PipelineStep
from clarity.infrastructure.logging.logger import JSONFormatter, StructuredLogger
from clarity.orchestrator.step_timer import timed_step


def test_timed_step_logs_result(caplog):
    step_logger = StructuredLogger("clarity.test")
    with caplog.at_level(logging.INFO):
        with timed_step(PipelineStep.SCORING, step_logger) as step:
            step.set_result({"confidence": 72})

    assert step.elapsed_ms >= 0
    records = [json.loads(r.getMessage()) for r in caplog.records if r.name == "clarity.test"]
    assert records[0]["step"] == "scoring"
    assert records[0]["state"] == {"confidence": 72}


def test_timed_step_without_result_is_silent(caplog):
    step_logger = StructuredLogger("clarity.test")
    with caplog.at_level(logging.INFO):
        with timed_step(PipelineStep.CACHE_LOOKUP, step_logger):
            pass

    assert not [r for r in caplog.records if r.name == "clarity.test"]


def test_json_formatter():
    record = logging.LogRecord("clarity", logging.WARNING, __file__, 1, "hello %s", ("world",), None)
    payload = json.loads(JSONFormatter().format(record))
    assert payload["level"] == "WARNING"
    assert payload["message"] == "hello world"
