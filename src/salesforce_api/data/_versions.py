# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
API version discovery and latest-version selection.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Sequence

from ..common.constants import API_VERSIONS_PATH
from ..core._error_codes import UNEXPECTED_BODY, VALIDATION_NO_VERSIONS
from ..core.errors import ApiError, ValidationError
from ..core.results import Err, Ok, Result
from ..models.metadata import VersionEntry

if TYPE_CHECKING:
    from ._rest import _Authenticated, _RestClient


def list_versions(rest: "_RestClient", auth: "_Authenticated") -> Result[List[VersionEntry]]:
    """GET ``services/data`` and parse the version listing."""
    return rest.get(auth, API_VERSIONS_PATH, operation="versions.list").and_then(_parse_versions)


def _parse_versions(body: Any) -> Result[List[VersionEntry]]:
    if not isinstance(body, list):
        return Err(ApiError("version listing is not a list", body=body, subcode=UNEXPECTED_BODY))
    entries: List[VersionEntry] = []
    for item in body:
        try:
            entry = VersionEntry.from_api_response(item)
            major = entry.major
        except (KeyError, TypeError, ValueError, OverflowError):
            major = -1
        if major < 0:
            return Err(ApiError(f"invalid version entry: {item!r}", body=body, subcode=UNEXPECTED_BODY))
        entries.append(entry)
    return Ok(entries)


def pick_latest(entries: Sequence[VersionEntry]) -> str:
    """
    Return the URL of the highest major version.

    Versions are compared by their integer-truncated value and a later entry
    only replaces the current maximum when strictly greater, so on a tie the
    first entry encountered wins: ``59.0`` beats a later ``59.9``.

    :raises ~salesforce_api.core.errors.ValidationError: If ``entries`` is empty.
    """
    if not entries:
        raise ValidationError("no API versions available", subcode=VALIDATION_NO_VERSIONS)
    best_major, best_url = 0, ""
    for entry in entries:
        major = entry.major
        if major > best_major:
            best_major, best_url = major, entry.url
    return best_url


def latest_version_path(rest: "_RestClient", auth: "_Authenticated") -> Result[str]:
    """List versions and pick the latest one's path."""
    listed = list_versions(rest, auth)
    if listed.is_err():
        return listed
    if not listed.value:
        return Err(ValidationError("no API versions available", subcode=VALIDATION_NO_VERSIONS))
    path = pick_latest(listed.value)
    if not path:
        return Err(
            ValidationError(
                "no API version with a major version above 0",
                subcode=VALIDATION_NO_VERSIONS,
                details={"versions": [e.version for e in listed.value]},
            )
        )
    return Ok(path)


__all__ = ["list_versions", "pick_latest", "latest_version_path"]
