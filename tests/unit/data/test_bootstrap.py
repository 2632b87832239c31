# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

import logging

import pytest

from salesforce_api.core._error_codes import (
    AUTH_INVALID_CLIENT,
    AUTH_INVALID_TOKEN_RESPONSE,
    VALIDATION_NO_VERSIONS,
)
from salesforce_api.core.errors import ApiError, AuthError, ValidationError
from salesforce_api.data._bootstrap import BOOTSTRAP_STEPS, bootstrap_session
from salesforce_api.models.session import Session

TOKEN_OK = (200, {"access_token": "00Dxx!AQ0", "issued_at": "1700000000000", "token_type": "Bearer"})
VERSIONS_OK = (
    200,
    [
        {"version": "58.0", "label": "Summer '23", "url": "/services/data/v58.0"},
        {"version": "59.0", "label": "Winter '24", "url": "/services/data/v59.0"},
    ],
)
SOBJECTS_OK = (200, {"encoding": "UTF-8", "maxBatchSize": 200, "sobjects": [{"name": "Account"}]})


def _bootstrap(rest, base_uri="https://acme.my.salesforce.com", client_id="cid", client_secret="secret"):
    return bootstrap_session(base_uri, client_id, client_secret, rest=rest)


class TestBootstrapSuccess:
    def test_builds_consistent_session(self, scripted_rest):
        rest, _ = scripted_rest([TOKEN_OK, VERSIONS_OK, SOBJECTS_OK])
        outcome = _bootstrap(rest)
        assert outcome.is_ok()
        s = outcome.value
        assert isinstance(s, Session)
        assert s.access_token == "00Dxx!AQ0"
        assert s.token_issued_at == "1700000000000"
        assert s.data_path == "/services/data/v59.0"
        assert s.objects_path == "/services/data/v59.0/sobjects"
        assert s.query_path == "/services/data/v59.0/query"
        assert s.query_size_limit == 200
        assert s.validate() is s

    def test_request_sequence(self, scripted_rest, base_uri):
        rest, http = scripted_rest([TOKEN_OK, VERSIONS_OK, SOBJECTS_OK])
        _bootstrap(rest)
        assert [m for m, _, _ in http.calls] == ["post", "get", "get"]
        assert http.urls == [
            f"{base_uri}/services/oauth2/token",
            f"{base_uri}/services/data",
            f"{base_uri}/services/data/v59.0/sobjects",
        ]
        token_kwargs = http.calls[0][2]
        assert token_kwargs["data"] == {
            "grant_type": "client_credentials",
            "client_id": "cid",
            "client_secret": "secret",
        }
        assert "Authorization" not in token_kwargs["headers"]
        assert http.calls[1][2]["headers"]["Authorization"] == "Bearer 00Dxx!AQ0"

    def test_trailing_slash_on_base_uri(self, scripted_rest, base_uri):
        rest, http = scripted_rest([TOKEN_OK, VERSIONS_OK, SOBJECTS_OK])
        outcome = _bootstrap(rest, base_uri=base_uri + "/")
        assert outcome.value.base_uri == base_uri
        assert http.urls[0] == f"{base_uri}/services/oauth2/token"

    def test_missing_max_batch_size(self, scripted_rest):
        rest, _ = scripted_rest([TOKEN_OK, VERSIONS_OK, (200, {"sobjects": []})])
        assert _bootstrap(rest).value.query_size_limit is None

    def test_step_order(self):
        assert [name for name, _ in BOOTSTRAP_STEPS] == [
            "token",
            "request_context",
            "data_path",
            "derived_paths",
            "query_size_limit",
        ]


class TestBootstrapFailure:
    @pytest.mark.parametrize(
        "client_id,client_secret",
        [("", "secret"), ("cid", ""), (None, "secret")],
    )
    def test_missing_credentials_make_no_network_call(self, scripted_rest, client_id, client_secret):
        rest, http = scripted_rest([])
        outcome = _bootstrap(rest, client_id=client_id, client_secret=client_secret)
        assert isinstance(outcome.error, AuthError)
        assert outcome.error.subcode == AUTH_INVALID_CLIENT
        assert http.calls == []

    def test_token_endpoint_error_status(self, scripted_rest):
        rest, http = scripted_rest([(400, {"error": "invalid_client", "error_description": "invalid client credentials"})])
        outcome = _bootstrap(rest)
        assert isinstance(outcome.error, ApiError)
        assert outcome.error.status_code == 400
        assert outcome.error.body["error"] == "invalid_client"
        assert len(http.calls) == 1

    def test_token_payload_without_issued_at(self, scripted_rest):
        rest, http = scripted_rest([(200, {"access_token": "tok"})])
        outcome = _bootstrap(rest)
        assert isinstance(outcome.error, AuthError)
        assert outcome.error.subcode == AUTH_INVALID_TOKEN_RESPONSE
        assert len(http.calls) == 1

    def test_versions_failure_stops_chain(self, scripted_rest):
        rest, http = scripted_rest([TOKEN_OK, (503, "maintenance")])
        outcome = _bootstrap(rest)
        assert outcome.is_err()
        assert outcome.error.status_code == 503
        assert len(http.calls) == 2

    def test_empty_version_list(self, scripted_rest):
        rest, _ = scripted_rest([TOKEN_OK, (200, [])])
        outcome = _bootstrap(rest)
        assert isinstance(outcome.error, ValidationError)
        assert outcome.error.subcode == VALIDATION_NO_VERSIONS

    def test_metadata_failure_returns_only_the_error(self, scripted_rest):
        rest, http = scripted_rest([TOKEN_OK, VERSIONS_OK, (500, [{"errorCode": "UNKNOWN_EXCEPTION"}])])
        outcome = _bootstrap(rest)
        assert outcome.is_err()
        assert not outcome.is_ok()
        assert isinstance(outcome.error, ApiError)
        assert not isinstance(outcome.error, Session)
        assert outcome.unwrap_or(None) is None
        assert len(http.calls) == 3

    def test_failure_is_logged(self, scripted_rest, caplog):
        rest, _ = scripted_rest([TOKEN_OK, (500, "boom")])
        with caplog.at_level(logging.WARNING, logger="salesforce_api.data._bootstrap"):
            _bootstrap(rest)
        assert "data_path" in caplog.text

    @pytest.mark.parametrize(
        "listing",
        [
            [{"version": "0.9", "url": "/services/data/v0.9"}],
            [{"version": "inf", "url": "/services/data/vinf"}],
            [{"version": "nan", "url": "/services/data/vnan"}],
        ],
    )
    def test_unusable_version_listing_is_err(self, scripted_rest, listing):
        rest, http = scripted_rest([TOKEN_OK, (200, listing)])
        outcome = _bootstrap(rest)
        assert outcome.is_err()
        assert isinstance(outcome.error, (ValidationError, ApiError))
        assert len(http.calls) == 2
