# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Tests for telemetry infrastructure."""

import logging

import pytest
from unittest.mock import MagicMock

from salesforce_api.core.telemetry import (
    NoOpTelemetryManager,
    RequestContext,
    ResponseContext,
    TelemetryConfig,
    TelemetryManager,
    create_telemetry_manager,
)
from salesforce_api.data._rest import _RestClient


class TestTelemetryConfig:
    """Tests for TelemetryConfig dataclass."""

    def test_default_values(self):
        config = TelemetryConfig()
        assert config.enable_tracing is False
        assert config.enable_logging is False
        assert config.log_level == "WARNING"
        assert config.logger_name == "salesforce_api.requests"
        assert config.hooks == []

    def test_immutability(self):
        config = TelemetryConfig(enable_tracing=True)
        with pytest.raises(AttributeError):
            config.enable_tracing = False


class TestTelemetryManagerFactory:
    """Tests for create_telemetry_manager factory."""

    def test_returns_noop_when_config_none(self):
        assert isinstance(create_telemetry_manager(None), NoOpTelemetryManager)

    def test_returns_noop_when_all_disabled(self):
        assert isinstance(create_telemetry_manager(TelemetryConfig()), NoOpTelemetryManager)

    def test_returns_manager_when_tracing_enabled(self):
        manager = create_telemetry_manager(TelemetryConfig(enable_tracing=True))
        assert isinstance(manager, TelemetryManager)
        assert manager.is_tracing_enabled

    def test_returns_manager_when_logging_enabled(self):
        assert isinstance(create_telemetry_manager(TelemetryConfig(enable_logging=True)), TelemetryManager)

    def test_returns_manager_when_hooks_provided(self):
        assert isinstance(create_telemetry_manager(TelemetryConfig(hooks=[MagicMock()])), TelemetryManager)


class TestTelemetryManager:
    """Tests for TelemetryManager request tracing."""

    def test_hooks_receive_start_and_end(self):
        hook = MagicMock()
        manager = TelemetryManager(TelemetryConfig(hooks=[hook]))
        with manager.trace_request("query.execute", "GET", "https://x/q") as ctx:
            manager.record_response(ctx, 200)

        hook.on_request_start.assert_called_once()
        started = hook.on_request_start.call_args[0][0]
        assert isinstance(started, RequestContext)
        assert started.operation == "query.execute"
        request, response = hook.on_request_end.call_args[0]
        assert request is started
        assert isinstance(response, ResponseContext)
        assert response.status_code == 200
        assert response.duration_ms >= 0

    def test_hook_error_dispatch_and_reraise(self):
        hook = MagicMock()
        manager = TelemetryManager(TelemetryConfig(hooks=[hook]))
        with pytest.raises(RuntimeError):
            with manager.trace_request("auth.token", "POST", "https://x/t"):
                raise RuntimeError("boom")
        hook.on_request_error.assert_called_once()
        assert isinstance(hook.on_request_error.call_args[0][1], RuntimeError)

    def test_failing_hook_does_not_break_request(self, caplog):
        hook = MagicMock()
        hook.on_request_start.side_effect = ValueError("bad hook")
        manager = TelemetryManager(TelemetryConfig(hooks=[hook]))
        with caplog.at_level(logging.WARNING, logger="salesforce_api.core.telemetry"):
            with manager.trace_request("objects.list", "GET", "https://x/s") as ctx:
                manager.record_response(ctx, 200)
        hook.on_request_end.assert_called_once()
        assert "on_request_start" in caplog.text

    def test_logging_levels(self, caplog):
        manager = TelemetryManager(TelemetryConfig(enable_logging=True, log_level="DEBUG"))
        with caplog.at_level(logging.DEBUG, logger="salesforce_api.requests"):
            with manager.trace_request("query.next_page", "GET", "https://x/p2") as ctx:
                manager.record_response(ctx, 500)
        record = next(r for r in caplog.records if r.name == "salesforce_api.requests")
        assert record.levelno == logging.WARNING
        assert "query.next_page" in record.getMessage()

    def test_tracing_with_default_provider(self):
        manager = TelemetryManager(TelemetryConfig(enable_tracing=True, service_name="sf-tests"))
        with manager.trace_request("objects.describe", "GET", "https://x/d", object_name="Account") as ctx:
            manager.record_response(ctx, 200)
        assert ctx._span is not None


class TestNoOpTelemetryManager:
    def test_yields_context(self):
        manager = NoOpTelemetryManager()
        with manager.trace_request("versions.list", "GET", "https://x/v") as ctx:
            manager.record_response(ctx, 200)
        assert ctx.operation == "versions.list"
        assert manager.is_tracing_enabled is False


class TestRestClientTelemetry:
    def test_operation_names_reach_hooks(self, session, scripted_rest, base_uri):
        hook = MagicMock()
        _, http = scripted_rest([(200, {"done": True, "records": []})])
        rest = _RestClient(http, TelemetryManager(TelemetryConfig(hooks=[hook])))
        rest.get(session, session.query_path, params={"q": "SELECT Id FROM Account"}, operation="query.execute")
        ctx = hook.on_request_start.call_args[0][0]
        assert ctx.operation == "query.execute"
        assert ctx.method == "GET"
        assert ctx.url == f"{base_uri}/services/data/v59.0/query"
