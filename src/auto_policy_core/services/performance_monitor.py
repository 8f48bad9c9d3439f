# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Performance monitoring decorator for rating and validation operations."""

import time
from collections.abc import Callable
from functools import wraps
from typing import ParamSpec, TypeVar

from beartype import beartype

from ..core.logging_utils import get_logger

P = ParamSpec("P")
T = TypeVar("T")

logger = get_logger(__name__)


@beartype
def performance_monitor(
    operation_name: str,
    max_duration_ms: int | None = None,
    log_slow_operations: bool = True,
) -> Callable[[Callable[P, T]], Callable[P, T]]:
    """Decorator timing a synchronous core operation.

    Every call is logged at DEBUG with its duration. Calls slower than
    ``max_duration_ms`` (default ``Settings.slow_operation_threshold_ms``)
    are logged at WARNING; failures are logged and re-raised.

    Args:
        operation_name: Name of the operation for monitoring
        max_duration_ms: Alert threshold in milliseconds
        log_slow_operations: Whether to log slow operations
    """

    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            start_time = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception:
                duration_ms = (time.perf_counter() - start_time) * 1000
                logger.exception(
                    "%s failed after %.2fms", operation_name, duration_ms
                )
                raise

            duration_ms = (time.perf_counter() - start_time) * 1000
            threshold = max_duration_ms
            if threshold is None:
                from ..core.config import get_settings

                threshold = get_settings().slow_operation_threshold_ms

            if log_slow_operations and duration_ms > threshold:
                logger.warning(
                    "%s took %.2fms (threshold: %dms)",
                    operation_name,
                    duration_ms,
                    threshold,
                )
            else:
                logger.debug("%s completed in %.2fms", operation_name, duration_ms)
            return result

        return wrapper

    return decorator
