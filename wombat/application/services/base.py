"""Service logging mixin.

Usage:
    from wombat.application.services.base import LoggingMixin

    class MyService(LoggingMixin):
        def __init__(self, store: ProblemStoreProtocol) -> None:
            self._store = store
            self._init_logger()

        async def do_something(self, problem_id: str) -> None:
            log = self._log_operation("do_something", problem_id=problem_id)
            log.info("operation_started")
"""

import structlog

from wombat.infrastructure.observability.correlation import get_correlation_id


class LoggingMixin:
    """Mixin providing structured logging for services.

    The logger is bound with the service class name and a component tag;
    each operation adds its name and the current correlation ID.

    Attributes:
        _log: The structlog BoundLogger for this service instance.
    """

    _log: structlog.BoundLogger

    def _init_logger(self, component: str = "negotiation") -> None:
        """Initialize the logger. Call from __init__ after dependencies are set."""
        self._log = structlog.get_logger().bind(
            service=self.__class__.__name__,
            component=component,
        )

    def _log_operation(
        self,
        operation: str,
        **context: object,
    ) -> structlog.BoundLogger:
        """Create an operation-scoped logger with correlation ID.

        Example:
            log = self._log_operation("agree_problem", problem_id=problem_id)
            log.info("action_started")
        """
        return self._log.bind(
            operation=operation,
            correlation_id=get_correlation_id(),
            **context,
        )
