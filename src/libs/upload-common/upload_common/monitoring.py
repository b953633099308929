# src/libs/upload-common/upload_common/monitoring.py
import logging
from prometheus_client import Counter, Histogram

logger = logging.getLogger(__name__)

# --------------------------------------------------------------------------------------
# DB metrics (used by upload_common.utils.async_timed)
# --------------------------------------------------------------------------------------
DB_OPERATION_LATENCY_SECONDS = Histogram(
    "db_operation_latency_seconds",
    "Latency of database operations in seconds",
    labelnames=("repository", "method"),
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10),
)

DB_OPERATION_ERRORS_TOTAL = Counter(
    "db_operation_errors_total",
    "Number of database operations that raised",
    labelnames=("repository", "method", "error"),
)

# --------------------------------------------------------------------------------------
# Upload query metrics
# --------------------------------------------------------------------------------------
UPLOAD_QUERIES_TOTAL = Counter(
    "upload_queries_total",
    "Number of upload list queries by outcome",
    labelnames=("outcome",),
)

UPLOAD_QUERY_RESULT_ROWS = Histogram(
    "upload_query_result_rows",
    "Number of uploads returned per page",
    buckets=(0, 1, 5, 10, 20, 50, 100, 250, 500, 1000),
)
