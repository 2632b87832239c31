# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

import pytest

from salesforce_api.core._error_codes import VALIDATION_MISSING_SETTING
from salesforce_api.core.config import SalesforceConfig, SalesforceCredentials
from salesforce_api.core.errors import ValidationError

ENV = {
    "SALESFORCE_BASE_URI": "https://acme.my.salesforce.com",
    "SALESFORCE_CLIENT_ID": "3MVG9",
    "SALESFORCE_CLIENT_SECRET": "s3cr3t",
}


def test_config_defaults():
    cfg = SalesforceConfig.from_env()
    assert cfg.http_timeout is None
    assert cfg.telemetry is None


def test_credentials_from_env():
    creds = SalesforceCredentials.from_env(ENV)
    assert creds.base_uri == "https://acme.my.salesforce.com"
    assert creds.client_id == "3MVG9"
    assert creds.client_secret == "s3cr3t"


def test_credentials_repr_hides_secret():
    assert "s3cr3t" not in repr(SalesforceCredentials.from_env(ENV))


def test_credentials_read_os_environ(monkeypatch):
    for k, v in ENV.items():
        monkeypatch.setenv(k, v)
    assert SalesforceCredentials.from_env().client_id == "3MVG9"


@pytest.mark.parametrize("blank", ["SALESFORCE_CLIENT_ID", "SALESFORCE_CLIENT_SECRET"])
def test_missing_variable(blank):
    env = dict(ENV, **{blank: "  "})
    with pytest.raises(ValidationError) as exc:
        SalesforceCredentials.from_env(env)
    assert exc.value.subcode == VALIDATION_MISSING_SETTING
    assert exc.value.details["missing"] == [blank]
