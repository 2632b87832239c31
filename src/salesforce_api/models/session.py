# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Session and access token models.

A :class:`Session` is produced once by the bootstrap chain and is read-only
afterwards; there is no in-place token refresh.
"""

from __future__ import annotations

import posixpath
from dataclasses import dataclass, field
from typing import Any, Optional

from ..common.constants import BODY_ACCESS_TOKEN, BODY_ISSUED_AT, QUERY_SEGMENT, SOBJECTS_SEGMENT
from ..core._error_codes import AUTH_INVALID_TOKEN_RESPONSE
from ..core.errors import AuthError, InvariantError
from ..core.results import Err, Ok, Result


@dataclass(frozen=True)
class AccessToken:
    """
    Opaque bearer token returned by the OAuth token endpoint.

    :param token: The bearer token value.
    :param issued_at: Server-issued timestamp string (milliseconds since epoch).
    """

    token: str = field(repr=False)
    issued_at: str

    @classmethod
    def from_response(cls, body: Any) -> Result["AccessToken"]:
        """
        Build a token from a decoded token endpoint body.

        Both ``access_token`` and ``issued_at`` must be strings; anything else
        yields an :class:`~salesforce_api.core.errors.AuthError`.
        """
        if isinstance(body, dict):
            token = body.get(BODY_ACCESS_TOKEN)
            issued_at = body.get(BODY_ISSUED_AT)
            if isinstance(token, str) and isinstance(issued_at, str):
                return Ok(cls(token=token, issued_at=issued_at))
        keys = sorted(body.keys()) if isinstance(body, dict) else None
        return Err(
            AuthError(
                "invalid token response",
                subcode=AUTH_INVALID_TOKEN_RESPONSE,
                details={"keys": keys, "body_type": type(body).__name__},
            )
        )


def objects_path_for(data_path: str) -> str:
    return posixpath.join(data_path, SOBJECTS_SEGMENT)


def query_path_for(data_path: str) -> str:
    return posixpath.join(data_path, QUERY_SEGMENT)


@dataclass(frozen=True)
class Session:
    """
    Immutable bundle of resolved endpoint paths plus a live access token.

    Safe to share across threads and concurrent queries.

    :param base_uri: Instance URL.
    :param client_id: Connected app consumer key.
    :param client_secret: Connected app consumer secret (hidden from ``repr``).
    :param access_token: Bearer token.
    :param token_issued_at: Server-issued timestamp of the token.
    :param data_path: Path of the latest API version, e.g. ``/services/data/v59.0``.
    :param objects_path: ``<data_path>/sobjects``.
    :param query_path: ``<data_path>/query``.
    :param query_size_limit: Tenant's ``maxBatchSize``.
    """

    base_uri: str
    client_id: str
    client_secret: str = field(repr=False)
    access_token: str = field(repr=False)
    token_issued_at: str
    data_path: str
    objects_path: str
    query_path: str
    query_size_limit: Optional[int] = None

    def validate(self) -> "Session":
        """
        Check internal consistency and return ``self``.

        :raises ~salesforce_api.core.errors.InvariantError: If the token is missing or the
            derived paths do not match ``data_path``.
        """
        if not self.access_token:
            raise InvariantError("Session has no access token")
        if not self.data_path:
            raise InvariantError("Session has no data path")
        if self.objects_path != objects_path_for(self.data_path) or self.query_path != query_path_for(self.data_path):
            raise InvariantError(
                "Session paths are not derived from its data path",
                details={
                    "data_path": self.data_path,
                    "objects_path": self.objects_path,
                    "query_path": self.query_path,
                },
            )
        return self

    @property
    def bearer_header(self) -> str:
        return f"Bearer {self.access_token}"


__all__ = ["AccessToken", "Session", "objects_path_for", "query_path_for"]
