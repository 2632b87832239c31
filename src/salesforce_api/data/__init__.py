# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Data access layer for the Salesforce API client.

This module contains the REST transport, session bootstrap, version discovery,
object metadata and SOQL query execution.
"""
