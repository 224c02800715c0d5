"""
Utility decorators for logging backtest operations.
"""

import functools
import time
import uuid
from collections.abc import Callable
from typing import Any, TypeVar

from loguru import logger


def _summarise_result(result: Any) -> dict[str, Any]:
    """Pick loggable fields from an operation result."""
    summary: dict[str, Any] = {"result_type": type(result).__name__}
    if hasattr(result, "performance_summary"):
        summary.update(result.performance_summary())
    elif isinstance(result, bool | int | float | str):
        summary["result"] = result
    elif hasattr(result, "__len__"):
        summary["result_size"] = len(result)
    return summary


F = TypeVar("F", bound=Callable[..., Any])


def log_backtest(func: F) -> F:
    """Decorator to log an operation's start, outcome and duration with a correlation id."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        correlation_id = str(uuid.uuid4())[:8]
        func_name = func.__name__
        bound_logger = logger.bind(correlation_id=correlation_id)

        bound_logger.debug(f"Operation started: {func_name}")
        start_time = time.perf_counter()
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            execution_time_ms = round((time.perf_counter() - start_time) * 1000, 2)
            bound_logger.error(
                f"Operation failed: {func_name} after {execution_time_ms}ms "
                f"({type(e).__name__}: {e})"
            )
            raise

        execution_time_ms = round((time.perf_counter() - start_time) * 1000, 2)
        bound_logger.bind(**_summarise_result(result)).success(
            f"Operation completed: {func_name} in {execution_time_ms}ms"
        )
        return result

    return wrapper  # type: ignore
