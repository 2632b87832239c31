# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Core infrastructure components for the Salesforce API client.

This module contains the foundational components including authentication,
configuration, HTTP client, result values, telemetry and error handling.
"""

from .config import SalesforceConfig, SalesforceCredentials
from .errors import (
    ApiError,
    AuthError,
    InvariantError,
    PaginationError,
    QueryParseError,
    SalesforceError,
    SinkError,
    ValidationError,
)
from .results import Err, Ok, QueryOutcome, Result

__all__ = [
    "SalesforceConfig",
    "SalesforceCredentials",
    "SalesforceError",
    "ApiError",
    "AuthError",
    "InvariantError",
    "PaginationError",
    "QueryParseError",
    "SinkError",
    "ValidationError",
    "Ok",
    "Err",
    "Result",
    "QueryOutcome",
]
