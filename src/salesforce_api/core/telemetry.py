# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Telemetry infrastructure for the Salesforce API client.

Provides OpenTelemetry-based tracing and standard-library logging for every
HTTP request, with an extensible hook system for custom telemetry providers.
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Generator, List, Optional, Protocol, Union, runtime_checkable

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

from ..common.constants import (
    OTEL_ATTR_HTTP_METHOD,
    OTEL_ATTR_HTTP_STATUS_CODE,
    OTEL_ATTR_HTTP_URL,
    OTEL_ATTR_SALESFORCE_OBJECT,
    OTEL_ATTR_SALESFORCE_OPERATION,
)

_logger = logging.getLogger(__name__)


# ============================================================================
# Configuration
# ============================================================================


@dataclass(frozen=True)
class TelemetryConfig:
    """Configuration for client telemetry.

    Telemetry is opt-in. When enabled, each HTTP request produces an
    OpenTelemetry span and/or a log line.

    Example:
        Tracing and logging::

            config = SalesforceConfig(
                telemetry=TelemetryConfig(enable_tracing=True, enable_logging=True)
            )

        Custom hook::

            config = SalesforceConfig(
                telemetry=TelemetryConfig(hooks=[MyTimingHook()])
            )
    """

    enable_tracing: bool = False
    enable_logging: bool = False

    service_name: Optional[str] = None

    log_level: str = "WARNING"
    logger_name: str = "salesforce_api.requests"

    hooks: List["TelemetryHook"] = field(default_factory=list)


# ============================================================================
# Context Objects
# ============================================================================


@dataclass
class RequestContext:
    """Context passed to telemetry hooks for each HTTP request."""

    method: str
    url: str
    operation: str  # e.g. "auth.token", "query.page"
    object_name: Optional[str] = None

    start_time: float = field(default_factory=time.perf_counter)

    # Custom data bag for hooks to share state
    custom_data: Dict[str, Any] = field(default_factory=dict)

    _span: Any = field(default=None, repr=False)


@dataclass
class ResponseContext:
    """Response information passed to telemetry hooks."""

    status_code: int
    duration_ms: float
    error: Optional[Exception] = None


# ============================================================================
# Hook Protocol
# ============================================================================


@runtime_checkable
class TelemetryHook(Protocol):
    """Protocol for custom telemetry hooks.

    All methods are optional; implement only what you need.
    """

    def on_request_start(self, context: RequestContext) -> None:
        ...

    def on_request_end(self, request: RequestContext, response: ResponseContext) -> None:
        ...

    def on_request_error(self, request: RequestContext, error: Exception) -> None:
        ...


# ============================================================================
# Telemetry Manager
# ============================================================================


class TelemetryManager:
    """Manages telemetry instrumentation for the client.

    This class is internal and not part of the public API.
    """

    def __init__(self, config: Optional[TelemetryConfig] = None) -> None:
        self._config = config or TelemetryConfig()
        self._tracer: Optional[trace.Tracer] = None
        self._logger: Optional[logging.Logger] = None
        self._hooks = list(self._config.hooks)
        self._initialize()

    @property
    def is_tracing_enabled(self) -> bool:
        return self._tracer is not None

    def _initialize(self) -> None:
        if self._config.enable_tracing:
            self._tracer = trace.get_tracer(self._config.service_name or "salesforce_api")

        if self._config.enable_logging:
            self._logger = logging.getLogger(self._config.logger_name)
            self._logger.setLevel(getattr(logging, self._config.log_level.upper()))

    @contextmanager
    def trace_request(
        self,
        operation: str,
        method: str,
        url: str,
        object_name: Optional[str] = None,
    ) -> Generator[RequestContext, None, None]:
        """Create a traced request context.

        Usage:
            with telemetry.trace_request("query.page", "GET", url) as ctx:
                response = self._http._request(...)
                telemetry.record_response(ctx, response.status_code)
        """
        ctx = RequestContext(method=method, url=url, operation=operation, object_name=object_name)
        self._dispatch("on_request_start", ctx)

        span = None
        if self._tracer:
            span_name = f"Salesforce {operation}"
            if object_name:
                span_name = f"{span_name} {object_name}"
            attributes = {
                OTEL_ATTR_SALESFORCE_OPERATION: operation,
                OTEL_ATTR_HTTP_METHOD: method,
                OTEL_ATTR_HTTP_URL: url,
            }
            if object_name:
                attributes[OTEL_ATTR_SALESFORCE_OBJECT] = object_name
            span = self._tracer.start_span(span_name, kind=trace.SpanKind.CLIENT, attributes=attributes)
            ctx._span = span

        try:
            yield ctx
        except Exception as e:
            if span:
                span.set_status(Status(StatusCode.ERROR, str(e)))
                span.record_exception(e)
            self._dispatch("on_request_error", ctx, e)
            raise
        finally:
            if span:
                span.end()

    def record_response(self, ctx: RequestContext, status_code: int, error: Optional[Exception] = None) -> None:
        """Record response attributes, log, and dispatch to hooks."""
        duration_ms = (time.perf_counter() - ctx.start_time) * 1000
        response = ResponseContext(status_code=status_code, duration_ms=duration_ms, error=error)

        if ctx._span:
            ctx._span.set_attribute(OTEL_ATTR_HTTP_STATUS_CODE, status_code)
            if status_code >= 400:
                ctx._span.set_status(Status(StatusCode.ERROR, f"HTTP {status_code}"))

        if self._logger:
            level = logging.WARNING if status_code >= 400 else logging.DEBUG
            self._logger.log(level, "%s %s %s %.1fms", ctx.operation, ctx.method, status_code, duration_ms)

        self._dispatch("on_request_end", ctx, response)

    def _dispatch(self, method_name: str, *args: Any) -> None:
        for hook in self._hooks:
            handler = getattr(hook, method_name, None)
            if handler is None:
                continue
            try:
                handler(*args)
            except Exception:
                # Hooks must not break requests
                _logger.warning("Telemetry hook %r failed in %s", hook, method_name, exc_info=True)


class NoOpTelemetryManager:
    """No-op telemetry manager when telemetry is disabled."""

    is_tracing_enabled = False

    @contextmanager
    def trace_request(
        self,
        operation: str,
        method: str,
        url: str,
        object_name: Optional[str] = None,
    ) -> Generator[RequestContext, None, None]:
        yield RequestContext(method=method, url=url, operation=operation, object_name=object_name)

    def record_response(self, *args: Any, **kwargs: Any) -> None:
        pass


def create_telemetry_manager(
    config: Optional[TelemetryConfig],
) -> Union[TelemetryManager, NoOpTelemetryManager]:
    """Factory to create appropriate telemetry manager."""
    if config is None:
        return NoOpTelemetryManager()
    if not (config.enable_tracing or config.enable_logging or config.hooks):
        return NoOpTelemetryManager()
    return TelemetryManager(config)


__all__ = [
    "TelemetryConfig",
    "TelemetryHook",
    "TelemetryManager",
    "NoOpTelemetryManager",
    "RequestContext",
    "ResponseContext",
    "create_telemetry_manager",
]
