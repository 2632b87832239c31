# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Operation namespace classes for the Salesforce API client.

This module contains the operation namespace classes that organize
related operations under intuitive namespaces:
- ObjectOperations: object listing and metadata
- QueryOperations: SOQL queries
- ResourceOperations: API version and resource discovery
"""

__all__ = []
