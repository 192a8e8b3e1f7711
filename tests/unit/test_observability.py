import pytest
import structlog
from unittest.mock import MagicMock, patch
from todolist.utils.observability import (
    CORRELATION_ID,
    Logger,
    MetricsRegistry,
    StructlogConfig,
)

class TestObservability:

    @pytest.fixture
    def mock_logger(self):
        return MagicMock()

    def test_logger_event_structure(self, mock_logger):
        """Log events include required context fields."""
        with patch("structlog.get_logger", return_value=mock_logger):
            logger = Logger("test_module")
            logger.log_event("test_event", custom_field=123)

            mock_logger.info.assert_called_once()
            call_args = mock_logger.info.call_args

            # Message check
            assert call_args[0][0] == "test_event"

            # Context check
            kwargs = call_args[1]
            assert kwargs["module"] == "test_module"
            assert kwargs["custom_field"] == 123

    def test_logger_carries_correlation_id(self, mock_logger):
        """The current request id is attached to every event."""
        with patch("structlog.get_logger", return_value=mock_logger):
            logger = Logger("test_module")
            token = CORRELATION_ID.set("req-123")
            try:
                logger.log_event("test_event")
            finally:
                CORRELATION_ID.reset(token)

            assert mock_logger.info.call_args[1]["correlation_id"] == "req-123"

    def test_logger_error_capture(self, mock_logger):
        """Error logs capture exception info."""
        with patch("structlog.get_logger", return_value=mock_logger):
            logger = Logger("test_module")
            try:
                raise ValueError("Oops")
            except ValueError as e:
                logger.log_error("test_error", exc_info=e)

            mock_logger.error.assert_called_once()
            kwargs = mock_logger.error.call_args[1]
            assert kwargs["exc_info"] is not None

    def test_metrics_registry_initialization(self):
        """Metrics registry initializes RPC metrics."""
        registry = MetricsRegistry()

        assert registry.rpc_latency is not None
        assert registry.rpc_requests is not None
        assert registry.tasks_stored is not None

    def test_metrics_registries_are_independent(self):
        """Each registry owns its collectors, so two apps never collide."""
        a = MetricsRegistry()
        b = MetricsRegistry()

        a.rpc_requests.labels(method="AddTask", code="ok").inc()

        assert a.registry.get_sample_value(
            "rpc_requests_total", {"method": "AddTask", "code": "ok"}
        ) == 1.0
        assert b.registry.get_sample_value(
            "rpc_requests_total", {"method": "AddTask", "code": "ok"}
        ) is None

    @pytest.mark.parametrize("env", ["development", "production"])
    def test_structlog_configure(self, env):
        """Configuration installs a renderer for the environment."""
        StructlogConfig.configure(env=env, log_level="INFO")
        processors = structlog.get_config()["processors"]

        renderer = processors[-1]
        if env == "production":
            assert isinstance(renderer, structlog.processors.JSONRenderer)
        else:
            assert isinstance(renderer, structlog.dev.ConsoleRenderer)
