# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Discovery of the resources available under the selected API version."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Protocol

from ..core._error_codes import UNEXPECTED_BODY
from ..core.errors import ApiError
from ..core.results import Err, Ok, Result

if TYPE_CHECKING:
    from ._rest import _RestClient


class _HasDataPath(Protocol):
    base_uri: str
    access_token: str
    data_path: str


def list_endpoints(rest: "_RestClient", session: _HasDataPath) -> Result[Dict[str, str]]:
    """GET ``<data_path>``: a mapping of resource name to relative path (``{"query": "/services/data/v59.0/query", ...}``)."""

    def _check(body: Any) -> Result[Dict[str, str]]:
        if not isinstance(body, dict):
            return Err(ApiError("resource listing is not an object", body=body, subcode=UNEXPECTED_BODY))
        return Ok(body)

    return rest.get(session, session.data_path, operation="resources.list").and_then(_check)


__all__ = ["list_endpoints"]
