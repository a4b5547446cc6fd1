"""OpenTelemetry and structlog integration for the Object Storage SDK.

Provides tracing spans around token refresh and resource requests, and
structured logging for failures.
"""

from __future__ import annotations

import functools
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Awaitable, Callable, ParamSpec, TypeVar

import structlog
from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

if TYPE_CHECKING:
    from collections.abc import Generator

    from .config import TelemetryConfig

P = ParamSpec("P")
T = TypeVar("T")

SDK_NAME = "object-storage-sdk"
SDK_VERSION = "0.1.0"

# Module-level tracer and logger
_tracer: trace.Tracer | None = None
_logger: structlog.BoundLogger | None = None


def get_tracer() -> trace.Tracer:
    """Get or create the SDK tracer."""
    global _tracer
    if _tracer is None:
        _tracer = trace.get_tracer(SDK_NAME, SDK_VERSION)
    return _tracer


def get_logger() -> structlog.BoundLogger:
    """Get or create the SDK logger."""
    global _logger
    if _logger is None:
        _logger = structlog.get_logger(SDK_NAME)
    return _logger


def configure_telemetry(config: TelemetryConfig) -> None:
    """Configure telemetry based on config.

    Args:
        config: Telemetry configuration.
    """
    global _tracer, _logger

    if not config.enabled:
        _tracer = trace.NoOpTracer()
        return

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            _log_level_to_int(config.log_level)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )

    _tracer = trace.get_tracer(config.service_name, SDK_VERSION)
    _logger = structlog.get_logger(config.service_name)


def _log_level_to_int(level: str) -> int:
    """Convert log level string to integer."""
    levels = {
        "DEBUG": 10,
        "INFO": 20,
        "WARNING": 30,
        "ERROR": 40,
        "CRITICAL": 50,
    }
    return levels.get(level.upper(), 20)


@contextmanager
def trace_operation(
    name: str,
    *,
    attributes: dict[str, Any] | None = None,
) -> Generator[trace.Span, None, None]:
    """Context manager for tracing an operation.

    Args:
        name: Name of the operation.
        attributes: Optional span attributes.

    Yields:
        The active span.
    """
    tracer = get_tracer()
    with tracer.start_as_current_span(name) as span:
        if attributes:
            for key, value in attributes.items():
                span.set_attribute(key, value)
        try:
            yield span
        except Exception as e:
            span.set_status(Status(StatusCode.ERROR, str(e)))
            span.record_exception(e)
            raise


def traced_async(
    name: str | None = None,
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[T]]]:
    """Decorator to trace an async storage operation.

    Args:
        name: Optional span name (defaults to the qualified function name).

    Returns:
        Decorated async function.
    """

    def decorator(func: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
        span_name = name or func.__qualname__

        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            with trace_operation(span_name):
                return await func(*args, **kwargs)

        return wrapper

    return decorator
