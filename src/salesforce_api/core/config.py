# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from ._error_codes import VALIDATION_MISSING_SETTING
from .errors import ValidationError
from .telemetry import TelemetryConfig

ENV_BASE_URI = "SALESFORCE_BASE_URI"
ENV_CLIENT_ID = "SALESFORCE_CLIENT_ID"
ENV_CLIENT_SECRET = "SALESFORCE_CLIENT_SECRET"


@dataclass(frozen=True)
class SalesforceConfig:
    """
    Configuration settings for Salesforce client operations.

    :param http_timeout: Request timeout in seconds (default: method-dependent).
    :type http_timeout: float or None
    :param telemetry: Optional telemetry settings. ``None`` disables tracing and request logging.
    :type telemetry: ~salesforce_api.core.telemetry.TelemetryConfig or None
    """

    http_timeout: Optional[float] = None
    telemetry: Optional[TelemetryConfig] = None

    @classmethod
    def from_env(cls) -> "SalesforceConfig":
        """
        Create a configuration instance with default settings.

        :return: Configuration instance with default values.
        :rtype: ~salesforce_api.core.config.SalesforceConfig
        """
        return cls(
            http_timeout=None,  # Will use method-dependent defaults in _HttpClient
            telemetry=None,
        )


@dataclass(frozen=True)
class SalesforceCredentials:
    """
    Connected-app credentials for the client-credentials grant.

    :param base_uri: Instance URL, e.g. ``"https://acme.my.salesforce.com"``.
    :param client_id: Connected app consumer key.
    :param client_secret: Connected app consumer secret. Never shown in ``repr``.
    """

    base_uri: str
    client_id: str
    client_secret: str = field(repr=False)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SalesforceCredentials":
        """
        Read credentials from ``SALESFORCE_BASE_URI``, ``SALESFORCE_CLIENT_ID``
        and ``SALESFORCE_CLIENT_SECRET``.

        :param environ: Mapping to read from. Defaults to ``os.environ``.
        :raises ~salesforce_api.core.errors.ValidationError: If any variable is missing or empty.
        """
        env = os.environ if environ is None else environ
        values = {}
        missing = []
        for name in (ENV_BASE_URI, ENV_CLIENT_ID, ENV_CLIENT_SECRET):
            value = (env.get(name) or "").strip()
            if not value:
                missing.append(name)
            values[name] = value
        if missing:
            raise ValidationError(
                f"Missing required environment variables: {', '.join(missing)}",
                subcode=VALIDATION_MISSING_SETTING,
                details={"missing": missing},
            )
        return cls(
            base_uri=values[ENV_BASE_URI],
            client_id=values[ENV_CLIENT_ID],
            client_secret=values[ENV_CLIENT_SECRET],
        )
