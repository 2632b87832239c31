# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Object metadata operations namespace."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Union

from ..core.errors import ValidationError
from ..core.results import Err, Result
from ..data import _sobjects
from ..data._sink import Sink, as_sink
from ..models.metadata import ObjectDescription
from ..models.query import QueryConfirmation

if TYPE_CHECKING:
    from ..client import SalesforceClient


class ObjectOperations:
    """
    Business object listing and metadata.

    Accessed via ``client.objects``.

    Example::

        names = client.objects.names().unwrap()
        fields = client.objects.field_names("Account").unwrap()
        client.objects.export_descriptions("descriptions.json")
    """

    def __init__(self, client: "SalesforceClient") -> None:
        self._client = client

    def list(self) -> Result[Dict[str, Any]]:
        """Raw listing of every object visible to the user, including ``maxBatchSize``."""
        return _sobjects.list_objects(self._client._get_rest(), self._client.session)

    def names(self) -> Result[List[str]]:
        """Names of every object visible to the user."""
        return _sobjects.get_object_names(self._client._get_rest(), self._client.session)

    def max_batch_size(self) -> Result[Optional[int]]:
        """The tenant's maximum batch size, fetched live."""
        return _sobjects.get_max_batch_size(self._client._get_rest(), self._client.session)

    def describe(self, object_name: str) -> Result[ObjectDescription]:
        """
        Describe one object.

        :param object_name: API name, e.g. ``"Account"``.
        :return: ``Ok(ObjectDescription)`` or ``Err(ApiError)``.
        """
        return _sobjects.describe(self._client._get_rest(), self._client.session, object_name)

    def field_names(self, object_name: str) -> Result[List[str]]:
        """Field names of ``object_name`` in server order."""
        return _sobjects.get_field_names(self._client._get_rest(), self._client.session, object_name)

    def describe_all(self) -> Result[List[ObjectDescription]]:
        """Describe every visible object. Issues one request per object."""
        return _sobjects.describe_all(self._client._get_rest(), self._client.session)

    def export_descriptions(self, target: Union[str, "os.PathLike[str]", Sink]) -> Result[QueryConfirmation]:
        """
        Describe every visible object and write the descriptions to ``target`` as JSON.

        :param target: File path or sink object.
        """
        try:
            sink = as_sink(target)
        except TypeError as e:
            return Err(ValidationError(str(e)))
        return _sobjects.export_descriptions(self._client._get_rest(), self._client.session, sink)


__all__ = ["ObjectOperations"]
