# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Business object metadata: object listing, descriptions and field names.

All functions take the session explicitly and return result values.
"""

from __future__ import annotations

import logging
import posixpath
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Protocol

from ..common.constants import BODY_MAX_BATCH_SIZE, BODY_SOBJECTS, DESCRIBE_SEGMENT
from ..core._error_codes import UNEXPECTED_BODY
from ..core.errors import ApiError
from ..core.results import Err, Ok, Result
from ..models.metadata import ObjectDescription
from ..models.query import QueryConfirmation
from ._sink import Sink, persist

if TYPE_CHECKING:
    from ._rest import _RestClient

_logger = logging.getLogger(__name__)


class _HasObjectsPath(Protocol):
    base_uri: str
    access_token: str
    objects_path: str


def list_objects(rest: "_RestClient", session: _HasObjectsPath) -> Result[Dict[str, Any]]:
    """Return the raw ``sobjects`` listing body (objects visible to the user plus ``maxBatchSize``)."""
    return rest.get(session, session.objects_path, operation="objects.list").and_then(_expect_mapping)


def get_object_names(rest: "_RestClient", session: _HasObjectsPath) -> Result[List[str]]:
    """Names of every object visible to the user, in server order."""

    def _names(body: Dict[str, Any]) -> Result[List[str]]:
        try:
            return Ok([item["name"] for item in body.get(BODY_SOBJECTS) or []])
        except (KeyError, TypeError):
            return Err(ApiError("object listing entry has no name", body=body, subcode=UNEXPECTED_BODY))

    return list_objects(rest, session).and_then(_names)


def get_max_batch_size(rest: "_RestClient", session: _HasObjectsPath) -> Result[Optional[int]]:
    """The tenant's maximum batch size (``maxBatchSize``), or ``None`` if the server omits it."""
    return list_objects(rest, session).map(lambda body: body.get(BODY_MAX_BATCH_SIZE))


def describe(rest: "_RestClient", session: _HasObjectsPath, object_name: str) -> Result[ObjectDescription]:
    """GET ``<objects_path>/<object_name>/describe``."""
    path = posixpath.join(session.objects_path, object_name, DESCRIBE_SEGMENT)
    fetched = rest.get(session, path, operation="objects.describe", object_name=object_name)
    if fetched.is_err():
        return fetched
    body = fetched.value
    if not isinstance(body, dict):
        return Err(ApiError(f"describe {object_name} returned a non-object body", body=body, subcode=UNEXPECTED_BODY))
    try:
        return Ok(ObjectDescription.from_api_response(object_name, body))
    except (KeyError, TypeError, AttributeError):
        return Err(ApiError(f"describe {object_name} returned a field without a name", body=body, subcode=UNEXPECTED_BODY))


def get_field_names(rest: "_RestClient", session: _HasObjectsPath, object_name: str) -> Result[List[str]]:
    """Field names of ``object_name`` in the order the server returned them."""
    return describe(rest, session, object_name).map(lambda d: d.field_names)


def describe_all(rest: "_RestClient", session: _HasObjectsPath) -> Result[List[ObjectDescription]]:
    """Describe every visible object, stopping at the first failure."""
    names = get_object_names(rest, session)
    if names.is_err():
        return names
    descriptions: List[ObjectDescription] = []
    for name in names.value:
        described = describe(rest, session, name)
        if described.is_err():
            _logger.warning("Describing %s failed after %d objects", name, len(descriptions))
            return described
        descriptions.append(described.value)
    return Ok(descriptions)


def export_descriptions(rest: "_RestClient", session: _HasObjectsPath, sink: Sink) -> Result[QueryConfirmation]:
    """Describe every visible object and write the raw descriptions to ``sink`` as JSON."""
    described = describe_all(rest, session)
    if described.is_err():
        return described
    return persist([d.raw for d in described.value], sink)


def _expect_mapping(body: Any) -> Result[Dict[str, Any]]:
    if not isinstance(body, dict):
        return Err(ApiError("object listing is not an object", body=body, subcode=UNEXPECTED_BODY))
    return Ok(body)


__all__ = [
    "list_objects",
    "get_object_names",
    "get_max_batch_size",
    "describe",
    "get_field_names",
    "describe_all",
    "export_descriptions",
]
