# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Shared pytest fixtures and fakes for Salesforce API client tests.

:class:`ScriptedHTTP` stands in for the requests-based ``_HttpClient``: it
returns scripted ``(status, body)`` pairs in order and records every call.
"""

import json

import pytest

from salesforce_api.data._rest import _RestClient
from salesforce_api.models.session import Session

BASE_URI = "https://acme.my.salesforce.com"
DATA_PATH = "/services/data/v59.0"


class FakeResponse:
    def __init__(self, status, body):
        self.status_code = status
        self.headers = {}
        self._body = body
        if isinstance(body, (dict, list)):
            self.text = json.dumps(body)
        else:
            self.text = body or ""

    def json(self):
        if isinstance(self._body, (dict, list)):
            return self._body
        raise ValueError("non-json")


class ScriptedHTTP:
    def __init__(self, responses):
        self._responses = list(responses)
        self.calls = []
        self.closed = False

    def _request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if not self._responses:
            raise AssertionError(f"No more responses for {method} {url}")
        item = self._responses.pop(0)
        if isinstance(item, Exception):
            raise item
        status, body = item
        return FakeResponse(status, body)

    def close(self):
        self.closed = True

    @property
    def urls(self):
        return [url for _, url, _ in self.calls]


def make_rest(responses):
    http = ScriptedHTTP(responses)
    return _RestClient(http), http


def make_session(**overrides):
    values = dict(
        base_uri=BASE_URI,
        client_id="cid",
        client_secret="secret",
        access_token="tok-123",
        token_issued_at="1700000000000",
        data_path=DATA_PATH,
        objects_path=f"{DATA_PATH}/sobjects",
        query_path=f"{DATA_PATH}/query",
        query_size_limit=2000,
    )
    values.update(overrides)
    return Session(**values)


@pytest.fixture
def session():
    """A consistent, bootstrapped session."""
    return make_session()


@pytest.fixture
def scripted_rest():
    """Factory returning ``(rest_client, scripted_http)`` for a list of responses."""
    return make_rest


@pytest.fixture
def session_factory():
    """Factory building a session with selected fields overridden."""
    return make_session


@pytest.fixture
def base_uri():
    return BASE_URI
