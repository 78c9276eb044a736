import logging
import re
import time
from typing import Any, Dict, Optional
from datetime import datetime

from daguerreo.core.config import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger("daguerreo")

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])([A-Z])")

def to_snake_case(name: str) -> str:
    """Convert a lowerCamelCase property name to its lower_snake_case column name"""
    return _CAMEL_BOUNDARY.sub(r"_\1", name).lower()

def format_response(data: Any = None, message: str = "Success", success: bool = True) -> Dict[str, Any]:
    """Format API response consistently"""
    return {
        "success": success,
        "message": message,
        "data": data,
        "timestamp": datetime.utcnow().isoformat()
    }


class QueryTimer:
    """Context manager to time a database round trip and log its latency"""
    def __init__(self, table: str, operation: Optional[str] = None, metadata: Optional[Dict[str, Any]] = None):
        self.table = table
        self.operation = operation
        self.metadata = metadata or {}
        self.start_ns = 0
        self.rowcount: Optional[int] = None
        self.success = True

    def __enter__(self):
        self.start_ns = time.perf_counter_ns()
        return self

    def set_status(self, rowcount: Optional[int], success: bool = True):
        self.rowcount = rowcount
        self.success = success

    def __exit__(self, exc_type, exc, tb):
        latency_ms = (time.perf_counter_ns() - self.start_ns) / 1_000_000
        success = self.success and exc is None
        logger.debug(
            f"SQL {self.operation} on {self.table} - {latency_ms:.2f}ms - "
            f"rows={self.rowcount} - {'success' if success else 'failed'}"
            + (f" - {self.metadata}" if self.metadata else "")
        )
        return False
