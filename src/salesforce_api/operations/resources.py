# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""API version and resource discovery namespace."""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, List

from ..core.results import Result
from ..data._resources import list_endpoints
from ..data._versions import list_versions
from ..models.metadata import VersionEntry

if TYPE_CHECKING:
    from ..client import SalesforceClient


class ResourceOperations:
    """
    Discovery of API versions and the resources under the session's version.

    Accessed via ``client.resources``.
    """

    def __init__(self, client: "SalesforceClient") -> None:
        self._client = client

    def endpoints(self) -> Result[Dict[str, str]]:
        """Resources available under the session's API version."""
        return list_endpoints(self._client._get_rest(), self._client.session)

    def versions(self) -> Result[List[VersionEntry]]:
        """Every API version the instance supports."""
        return list_versions(self._client._get_rest(), self._client.session)


__all__ = ["ResourceOperations"]
