# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Data models and type definitions for the Salesforce API client.
"""

from .metadata import FieldInfo, ObjectDescription, VersionEntry
from .query import QueryConfirmation, QueryOptions, QueryPage
from .session import AccessToken, Session

__all__ = [
    "AccessToken",
    "Session",
    "VersionEntry",
    "FieldInfo",
    "ObjectDescription",
    "QueryOptions",
    "QueryPage",
    "QueryConfirmation",
]
