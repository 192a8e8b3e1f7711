import logging
from typing import Optional
import structlog
import contextvars
from prometheus_client import Counter, Histogram, Gauge, CollectorRegistry

# Correlation ID for request tracing
CORRELATION_ID = contextvars.ContextVar('correlation_id', default=None)

class MetricsRegistry:
    """Per-app metrics, kept in a private CollectorRegistry."""

    def __init__(self):
        self.registry = CollectorRegistry()
        self._init_metrics()

    def _init_metrics(self):
        """Initialize all metrics with proper naming conventions."""

        # HISTOGRAMS (timing data)
        self.rpc_latency = Histogram(
            'rpc_latency_seconds',
            'RPC handling latency in seconds',
            labelnames=['method'],
            buckets=(0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0),
            registry=self.registry
        )

        # COUNTERS (monotonic increases)
        self.rpc_requests = Counter(
            'rpc_requests_total',
            'Total number of RPC calls by outcome code',
            labelnames=['method', 'code'],  # code is 'ok' or a Connect error code
            registry=self.registry
        )

        # GAUGES (point-in-time snapshots)
        self.tasks_stored = Gauge(
            'tasks_stored',
            'Number of tasks currently held in memory',
            registry=self.registry
        )

class StructlogConfig:
    """Structured logging configuration."""

    @staticmethod
    def configure(env: str = 'development', log_level: str = 'INFO'):
        """
        Configure structlog with environment-appropriate settings.

        Production: JSON output (machine-readable)
        Development: Console output (human-readable)
        """

        shared_processors = [
            # Add correlation ID to all logs
            structlog.contextvars.merge_contextvars,
            # Add log level
            structlog.processors.add_log_level,
            # Add timestamp
            structlog.processors.TimeStamper(fmt='iso'),
            # Add exception info
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
        ]

        if env == 'production':
            # JSON for log aggregators
            processors = shared_processors + [
                structlog.processors.dict_tracebacks,
                structlog.processors.JSONRenderer(),
            ]
        else:
            # Pretty console for development
            processors = shared_processors + [
                structlog.dev.ConsoleRenderer(),
            ]

        structlog.configure(
            processors=processors,
            wrapper_class=structlog.make_filtering_bound_logger(
                logging.getLevelName(log_level)
            ),
            context_class=dict,
            logger_factory=structlog.PrintLoggerFactory(),
            cache_logger_on_first_use=True,
        )

class Logger:
    """Wrapper for structured logging with context awareness."""

    def __init__(self, module_name: str):
        self.logger = structlog.get_logger(module_name)
        self.module_name = module_name

    def log_event(self, event: str, **kwargs):
        """Log structured event with automatic context."""
        corr_id = CORRELATION_ID.get()
        ctx = {'correlation_id': corr_id, 'module': self.module_name}
        ctx.update(kwargs)
        return self.logger.info(event, **ctx)

    def log_error(self, event: str, exc_info=None, **kwargs):
        """Log error with exception details."""
        corr_id = CORRELATION_ID.get()
        ctx = {'correlation_id': corr_id, 'module': self.module_name}
        ctx.update(kwargs)
        return self.logger.error(event, exc_info=exc_info, **ctx)

def initialize_observability(environment: str = 'development', log_level: Optional[str] = None):
    """One-stop logging setup. Returns the log level actually applied."""
    if log_level is None:
        from todolist.config import settings
        log_level = settings.observability.log_level
    StructlogConfig.configure(env=environment, log_level=log_level)

    logger = structlog.get_logger(__name__)
    logger.info(
        'observability_initialized',
        environment=environment,
        log_format='json' if environment == 'production' else 'console',
        log_level=log_level,
    )

    return log_level
