# src/libs/upload-common/upload_common/utils.py
import time
import functools
from typing import Callable, Any

from .monitoring import DB_OPERATION_LATENCY_SECONDS, DB_OPERATION_ERRORS_TOTAL

def async_timed(repository: str, method: str) -> Callable:
    """
    A decorator that times an async function and records the latency
    in the DB_OPERATION_LATENCY_SECONDS Prometheus histogram. Exceptions are
    counted in DB_OPERATION_ERRORS_TOTAL under their class name and re-raised.

    Args:
        repository: The name of the repository class (e.g., 'UploadRepository').
        method: The name of the method being timed (e.g., 'find_matching').
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs) -> Any:
            start_time = time.monotonic()
            try:
                return await func(*args, **kwargs)
            except Exception as exc:
                DB_OPERATION_ERRORS_TOTAL.labels(
                    repository=repository,
                    method=method,
                    error=type(exc).__name__,
                ).inc()
                raise
            finally:
                DB_OPERATION_LATENCY_SECONDS.labels(
                    repository=repository,
                    method=method
                ).observe(time.monotonic() - start_time)
        return wrapper
    return decorator
