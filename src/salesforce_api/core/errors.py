# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Structured error types for the Salesforce API client.

Operations never raise these for ordinary failures; they are carried inside
:class:`~salesforce_api.core.results.Err` values and only raised when a caller
asks for it via :meth:`~salesforce_api.core.results.Err.unwrap`.
:class:`InvariantError` is the exception: it signals a state that cannot
occur by construction and is always raised.
"""

from __future__ import annotations

import datetime as _dt
from typing import Any, Dict, List, Optional


class SalesforceError(Exception):
    """Base structured error for the Salesforce API client."""

    def __init__(
        self,
        message: str,
        *,
        code: str,
        subcode: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
        source: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.subcode = subcode
        self.status_code = status_code
        self.details = details or {}
        self.source = source or "client"
        self.timestamp = _dt.datetime.now(_dt.timezone.utc).isoformat()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "code": self.code,
            "subcode": self.subcode,
            "status_code": self.status_code,
            "details": self.details,
            "source": self.source,
            "timestamp": self.timestamp,
        }

    def __repr__(self) -> str:  # pragma: no cover
        return f"{self.__class__.__name__}(code={self.code!r}, subcode={self.subcode!r}, message={self.message!r})"


class ValidationError(SalesforceError):
    def __init__(self, message: str, *, subcode: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="validation_error", subcode=subcode, details=details, source="client")


class QueryParseError(SalesforceError):
    def __init__(self, message: str, *, subcode: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="sql_parse_error", subcode=subcode, details=details, source="client")


class AuthError(SalesforceError):
    """Credentials were unusable or the token endpoint returned an unusable payload."""

    def __init__(self, message: str, *, subcode: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="auth_error", subcode=subcode, details=details, source="server")


class ApiError(SalesforceError):
    """A call to the REST API did not produce a usable 200 response.

    :param status_code: HTTP status, or ``None`` when the request never got a response.
    :param body: Decoded response body (or raw text when it was not JSON).
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        body: Any = None,
        subcode: Optional[str] = None,
        url: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        d = dict(details or {})
        if url is not None:
            d["url"] = url
        if body is not None:
            d["body"] = body
        super().__init__(
            message,
            code="http_error",
            subcode=subcode,
            status_code=status_code,
            details=d,
            source="server" if status_code is not None else "client",
        )
        self.body = body


class PaginationError(SalesforceError):
    """Pagination stopped early.

    ``partial_records`` holds every record fetched from pages that arrived
    before the failure, in arrival order. ``cause`` is set when the failing
    page fetch itself produced an error (HTTP or transport).
    """

    def __init__(
        self,
        message: str,
        *,
        partial_records: Optional[List[Any]] = None,
        cause: Optional[SalesforceError] = None,
        subcode: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        d = dict(details or {})
        if cause is not None:
            d["cause"] = cause.to_dict()
        super().__init__(
            message,
            code="pagination_error",
            subcode=subcode,
            status_code=cause.status_code if cause is not None else None,
            details=d,
            source="server",
        )
        self.partial_records: List[Any] = list(partial_records or [])
        self.cause = cause


class SinkError(SalesforceError):
    """Persisting a result failed. Carries no records."""

    def __init__(self, message: str, *, location: Optional[str] = None, subcode: Optional[str] = None):
        details = {"location": location} if location is not None else None
        super().__init__(message, code="sink_error", subcode=subcode, details=details, source="client")
        self.location = location


class InvariantError(SalesforceError):
    """An internally inconsistent state that is impossible by construction. Always raised."""

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="invariant_error", details=details, source="client")


__all__ = [
    "SalesforceError",
    "ValidationError",
    "QueryParseError",
    "AuthError",
    "ApiError",
    "PaginationError",
    "SinkError",
    "InvariantError",
]
