"""Context manager for timing and logging pipeline steps."""

import time
from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

from clarity.config.constants import PipelineStep, log_pipeline_step
from clarity.infrastructure.logging.logger import StructuredLogger


class StepContext:
    """Mutable context for a timed pipeline step."""

    def __init__(self) -> None:
        self.result: dict[str, Any] | None = None
        self.elapsed_ms: float = 0.0

    def set_result(self, result: dict[str, Any]) -> None:
        self.result = result


@contextmanager
def timed_step(step: PipelineStep, logger: StructuredLogger) -> Generator[StepContext, None, None]:
    """Time a pipeline step and log its result.

    The elapsed time is available on the context after the block exits.
    """
    log_pipeline_step(step)
    ctx = StepContext()
    start = time.perf_counter()
    try:
        yield ctx
    finally:
        ctx.elapsed_ms = (time.perf_counter() - start) * 1000
        if ctx.result is not None:
            logger.log_step(step.value, ctx.result, duration_ms=ctx.elapsed_ms)
