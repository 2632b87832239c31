# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Salesforce REST API client.

Bootstraps an authenticated, immutable session and runs SOQL queries that may
span many server-paginated pages.
"""

from .client import SalesforceClient
from .core.config import SalesforceConfig, SalesforceCredentials
from .core.errors import (
    ApiError,
    AuthError,
    InvariantError,
    PaginationError,
    QueryParseError,
    SalesforceError,
    SinkError,
    ValidationError,
)
from .core.results import Err, Ok
from .core.telemetry import TelemetryConfig
from .data._bootstrap import bootstrap_session
from .data._sink import FileSink, Sink
from .models import ObjectDescription, QueryConfirmation, QueryOptions, QueryPage, Session, VersionEntry

__version__ = "0.1.0"

__all__ = [
    "SalesforceClient",
    "SalesforceConfig",
    "SalesforceCredentials",
    "TelemetryConfig",
    "bootstrap_session",
    "Session",
    "VersionEntry",
    "ObjectDescription",
    "QueryOptions",
    "QueryPage",
    "QueryConfirmation",
    "Sink",
    "FileSink",
    "Ok",
    "Err",
    "SalesforceError",
    "ApiError",
    "AuthError",
    "InvariantError",
    "PaginationError",
    "QueryParseError",
    "SinkError",
    "ValidationError",
]
