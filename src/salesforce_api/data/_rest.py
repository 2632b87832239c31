# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Authenticated REST transport for the Salesforce API.

Turns every HTTP exchange into a result value: a 200 response becomes
``Ok(decoded_body)``; any other status, or a transport failure, becomes
``Err(ApiError)``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Protocol, Union
from urllib.parse import urlsplit

import requests

from ..core._error_codes import FOREIGN_HOST, TRANSPORT_ERROR, http_subcode
from ..core._http import _HttpClient
from ..core.errors import ApiError
from ..core.results import Err, Ok, Result
from ..core.telemetry import NoOpTelemetryManager, TelemetryManager

_logger = logging.getLogger(__name__)

# Longest response body kept on an ApiError when it could not be decoded
_BODY_EXCERPT_LIMIT = 2000


class _Authenticated(Protocol):
    base_uri: str
    access_token: str


@dataclass(frozen=True)
class AuthContext:
    """Base URI plus bearer token: everything an authenticated call needs."""

    base_uri: str
    access_token: str = field(repr=False)


def join_url(base_uri: str, path: str) -> str:
    """Join an instance URL and a relative (or root-relative) resource path."""
    if path.startswith(("http://", "https://")):
        return path
    return f"{base_uri.rstrip('/')}/{path.lstrip('/')}"


def same_origin(url: str, base_uri: str) -> bool:
    """True when ``url`` has the scheme and host of ``base_uri``."""
    a, b = urlsplit(url), urlsplit(base_uri)
    return (a.scheme.lower(), a.netloc.lower()) == (b.scheme.lower(), b.netloc.lower())


class _RestClient:
    """
    Low-level client that performs GET/POST calls and maps responses to results.

    :param http: Underlying HTTP client.
    :param telemetry: Telemetry manager used to trace each request.
    """

    def __init__(
        self,
        http: _HttpClient,
        telemetry: Optional[Union[TelemetryManager, NoOpTelemetryManager]] = None,
    ) -> None:
        self._http = http
        self._telemetry = telemetry or NoOpTelemetryManager()

    def get(
        self,
        auth: _Authenticated,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        operation: str = "get",
        object_name: Optional[str] = None,
    ) -> Result[Any]:
        """
        GET ``path`` relative to ``auth.base_uri`` with a bearer token.

        An absolute ``path`` on another host is refused without sending the token.
        """
        headers = {
            "Authorization": f"Bearer {auth.access_token}",
            "Accept": "application/json",
        }
        url = join_url(auth.base_uri, path)
        if not same_origin(url, auth.base_uri):
            _logger.warning("Refusing %s request to foreign host: %s", operation, url)
            return Err(ApiError(f"{operation} refused: {url} is not on {auth.base_uri}", subcode=FOREIGN_HOST, url=url))
        return self._send("GET", url, operation, object_name, headers=headers, params=params)

    def post_form(
        self,
        base_uri: str,
        path: str,
        data: Dict[str, str],
        *,
        operation: str = "post",
    ) -> Result[Any]:
        """POST a form-encoded body without authentication."""
        url = join_url(base_uri, path)
        return self._send("POST", url, operation, None, headers={"Accept": "application/json"}, data=data)

    def _send(self, method: str, url: str, operation: str, object_name: Optional[str], **kwargs: Any) -> Result[Any]:
        _logger.debug("%s %s (%s)", method, url, operation)
        try:
            with self._telemetry.trace_request(operation, method, url, object_name=object_name) as ctx:
                r = self._http._request(method.lower(), url, **kwargs)
                self._telemetry.record_response(ctx, r.status_code)
        except requests.exceptions.RequestException as e:
            return Err(ApiError(f"{operation} request failed: {e}", subcode=TRANSPORT_ERROR, url=url))

        body = _decode_body(r)
        if r.status_code != 200:
            return Err(
                ApiError(
                    f"{operation} returned HTTP {r.status_code}",
                    status_code=r.status_code,
                    body=body,
                    subcode=http_subcode(r.status_code),
                    url=url,
                )
            )
        return Ok(body)

    def close(self) -> None:
        self._http.close()


def _decode_body(r: requests.Response) -> Any:
    try:
        return r.json()
    except ValueError:
        text = r.text or ""
        return text[:_BODY_EXCERPT_LIMIT]


__all__ = ["AuthContext", "join_url", "same_origin"]
