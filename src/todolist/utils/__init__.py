# Utils module
from .observability import (
    CORRELATION_ID,
    Logger,
    MetricsRegistry,
    initialize_observability,
)

__all__ = [
    "CORRELATION_ID",
    "Logger",
    "MetricsRegistry",
    "initialize_observability",
]
