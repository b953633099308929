# src/libs/upload-common/upload_common/logging_utils.py
import logging
import os
import sys
import uuid
from contextvars import ContextVar
from typing import Optional

from pythonjsonlogger import jsonlogger

from .config import LOG_LEVEL

# Holds the correlation ID of the call currently being served.
correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="<not-set>")

class CorrelationIdFilter(logging.Filter):
    """
    A logging filter that injects the current correlation ID from a ContextVar
    into the log record, along with the service and environment names.
    """
    def filter(self, record):
        record.correlation_id = correlation_id_var.get()
        record.service = os.getenv("SERVICE_NAME", "upload-query-service")
        record.environment = os.getenv("ENVIRONMENT", "local")
        return True

def setup_logging(level: Optional[str] = None):
    """
    Configures the root logger for correlation-ID-aware structured JSON
    logging. Every logger in the process inherits this configuration.
    """
    root_logger = logging.getLogger()

    # Clear any existing handlers to prevent duplicate logs
    if root_logger.hasHandlers():
        root_logger.handlers.clear()

    root_logger.setLevel(level or LOG_LEVEL)

    handler = logging.StreamHandler(sys.stdout)
    formatter = jsonlogger.JsonFormatter(
        "%(asctime)s %(name)s %(levelname)s %(message)s %(service)s %(environment)s %(correlation_id)s",
        rename_fields={
            "asctime": "timestamp",
            "levelname": "level",
            "name": "logger"
        }
    )
    handler.setFormatter(formatter)
    handler.addFilter(CorrelationIdFilter())

    root_logger.addHandler(handler)

def generate_correlation_id(prefix: str) -> str:
    """
    Generates a new correlation ID with a service-specific prefix.
    Args:
        prefix: A short code for the service (e.g., 'UPQ').
    Returns:
        A formatted correlation ID string.
    """
    return f"{prefix}:{uuid.uuid4()}"
