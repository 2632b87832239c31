# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Utilities and adapters for the Salesforce API client.

This module contains helper functions and adapters such as the pandas integration.
"""
