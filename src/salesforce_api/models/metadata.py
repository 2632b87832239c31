# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
API version and object metadata models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from ..common.constants import BODY_FIELDS


@dataclass(frozen=True)
class VersionEntry:
    """
    One entry of the ``services/data`` version listing.

    :param version: Numeric version string, e.g. ``"59.0"``.
    :param url: Relative path of that version's resources.
    :param label: Release label, e.g. ``"Winter '24"``.
    """

    version: str
    url: str
    label: Optional[str] = None

    @property
    def major(self) -> int:
        """Integer-truncated version number (``"59.9"`` -> ``59``)."""
        return int(float(self.version))

    @classmethod
    def from_api_response(cls, data: Dict[str, Any]) -> "VersionEntry":
        return cls(version=str(data["version"]), url=str(data["url"]), label=data.get("label"))


@dataclass(frozen=True)
class FieldInfo:
    """
    A single field from an object description.

    :param name: API name of the field, e.g. ``"AccountNumber"``.
    :param type: Field type, e.g. ``"string"``, ``"reference"``.
    :param label: Display label.
    """

    name: str
    type: Optional[str] = None
    label: Optional[str] = None

    @classmethod
    def from_api_response(cls, data: Dict[str, Any]) -> "FieldInfo":
        return cls(name=data["name"], type=data.get("type"), label=data.get("label"))


@dataclass(frozen=True)
class ObjectDescription:
    """
    Description of a business object, as returned by ``sobjects/<name>/describe``.

    Field order is the order the server returned.

    Example::

        desc = client.objects.describe("Account").unwrap()
        print(desc.field_names[:3])  # ['Id', 'IsDeleted', 'MasterRecordId']
    """

    name: str
    fields: Tuple[FieldInfo, ...] = ()
    label: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def field_names(self) -> List[str]:
        return [f.name for f in self.fields]

    @classmethod
    def from_api_response(cls, object_name: str, data: Dict[str, Any]) -> "ObjectDescription":
        """
        Build a description from a describe response body.

        :raises KeyError: If a field descriptor has no ``name``.
        """
        fields = tuple(FieldInfo.from_api_response(f) for f in data.get(BODY_FIELDS) or [])
        return cls(
            name=data.get("name") or object_name,
            fields=fields,
            label=data.get("label"),
            raw=data,
        )


__all__ = ["VersionEntry", "FieldInfo", "ObjectDescription"]
