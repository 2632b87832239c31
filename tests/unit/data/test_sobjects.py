# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

import json

from salesforce_api.core._error_codes import UNEXPECTED_BODY
from salesforce_api.core.errors import ApiError
from salesforce_api.data._resources import list_endpoints
from salesforce_api.data._sink import FileSink
from salesforce_api.data._sobjects import (
    describe,
    describe_all,
    export_descriptions,
    get_field_names,
    get_max_batch_size,
    get_object_names,
    list_objects,
)

LISTING = (200, {"maxBatchSize": 200, "sobjects": [{"name": "Account"}, {"name": "Contact"}]})
ACCOUNT = {
    "name": "Account",
    "label": "Account",
    "fields": [
        {"name": "Id", "type": "id", "label": "Account ID"},
        {"name": "Name", "type": "string", "label": "Account Name"},
        {"name": "AccountNumber", "type": "string", "label": "Account Number"},
    ],
}
CONTACT = {"name": "Contact", "fields": [{"name": "Id", "type": "id"}]}


class TestObjectListing:
    def test_list_objects(self, session, scripted_rest, base_uri):
        rest, http = scripted_rest([LISTING])
        assert list_objects(rest, session).value["maxBatchSize"] == 200
        assert http.urls == [f"{base_uri}/services/data/v59.0/sobjects"]

    def test_object_names(self, session, scripted_rest):
        rest, _ = scripted_rest([LISTING])
        assert get_object_names(rest, session).value == ["Account", "Contact"]

    def test_max_batch_size(self, session, scripted_rest):
        rest, _ = scripted_rest([LISTING])
        assert get_max_batch_size(rest, session).value == 200

    def test_listing_not_an_object(self, session, scripted_rest):
        rest, _ = scripted_rest([(200, ["Account"])])
        assert list_objects(rest, session).error.subcode == UNEXPECTED_BODY

    def test_listing_http_error(self, session, scripted_rest):
        rest, _ = scripted_rest([(401, [{"errorCode": "INVALID_SESSION_ID"}])])
        outcome = get_object_names(rest, session)
        assert isinstance(outcome.error, ApiError)
        assert outcome.error.status_code == 401


class TestDescribe:
    def test_describe_url_and_fields(self, session, scripted_rest, base_uri):
        rest, http = scripted_rest([(200, ACCOUNT)])
        desc = describe(rest, session, "Account").value
        assert http.urls == [f"{base_uri}/services/data/v59.0/sobjects/Account/describe"]
        assert desc.name == "Account"
        assert desc.fields[1].type == "string"
        assert desc.raw == ACCOUNT

    def test_field_names_keep_server_order(self, session, scripted_rest):
        rest, _ = scripted_rest([(200, ACCOUNT)])
        assert get_field_names(rest, session, "Account").value == ["Id", "Name", "AccountNumber"]

    def test_field_without_name(self, session, scripted_rest):
        rest, _ = scripted_rest([(200, {"fields": [{"type": "string"}]})])
        assert describe(rest, session, "Account").error.subcode == UNEXPECTED_BODY

    def test_unknown_object(self, session, scripted_rest):
        rest, _ = scripted_rest([(404, [{"errorCode": "NOT_FOUND", "message": "The requested resource does not exist"}])])
        outcome = get_field_names(rest, session, "Nope__c")
        assert outcome.error.status_code == 404


class TestDescribeAll:
    def test_describes_every_object(self, session, scripted_rest):
        rest, _ = scripted_rest([LISTING, (200, ACCOUNT), (200, CONTACT)])
        outcome = describe_all(rest, session)
        assert [d.name for d in outcome.value] == ["Account", "Contact"]

    def test_stops_at_first_failure(self, session, scripted_rest):
        rest, http = scripted_rest([LISTING, (500, "boom"), (200, CONTACT)])
        outcome = describe_all(rest, session)
        assert outcome.error.status_code == 500
        assert len(http.calls) == 2

    def test_export_descriptions(self, session, scripted_rest, tmp_path):
        target = tmp_path / "describe.json"
        rest, _ = scripted_rest([LISTING, (200, ACCOUNT), (200, CONTACT)])
        outcome = export_descriptions(rest, session, FileSink(target))
        assert outcome.value.record_count == 2
        assert json.loads(target.read_text(encoding="utf-8")) == [ACCOUNT, CONTACT]


class TestResources:
    def test_list_endpoints(self, session, scripted_rest, base_uri):
        body = {"sobjects": "/services/data/v59.0/sobjects", "query": "/services/data/v59.0/query"}
        rest, http = scripted_rest([(200, body)])
        assert list_endpoints(rest, session).value == body
        assert http.urls == [f"{base_uri}/services/data/v59.0"]
