# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

import sys
from pathlib import Path

# Add src to PYTHONPATH for local runs
sys.path.append(str(Path(__file__).resolve().parents[2] / "src"))

from salesforce_api import PaginationError, SalesforceClient, SalesforceConfig, TelemetryConfig

# Credentials come from SALESFORCE_BASE_URI, SALESFORCE_CLIENT_ID and SALESFORCE_CLIENT_SECRET
config = SalesforceConfig(telemetry=TelemetryConfig(enable_logging=True, log_level="DEBUG"))
connected = SalesforceClient.from_env(config)
if connected.is_err():
    print({"connect_error": connected.error.to_dict()})
    sys.exit(1)


def log_call(call: str) -> None:
    print({"call": call})


with connected.value as client:
    print({"data_path": client.session.data_path, "query_size_limit": client.session.query_size_limit})

    log_call("client.objects.names()")
    names = client.objects.names()
    if names.is_ok():
        print({"objects": names.value[:10], "total": len(names.value)})

    log_call("client.objects.field_names('Account')")
    print(client.objects.field_names("Account").unwrap_or([])[:10])

    log_call("client.query.execute(..., all_pages=True)")
    outcome = client.query.execute("SELECT Id, Name FROM Account", all_pages=True)
    if outcome.is_ok():
        print({"records": len(outcome.value)})
    elif isinstance(outcome.error, PaginationError):
        print({"partial_records": len(outcome.error.partial_records), "error": outcome.error.message})
    else:
        print({"error": outcome.error.to_dict()})

    log_call("client.query.execute(..., expand_fields=True, sink='accounts.json')")
    written = client.query.execute("FROM Account LIMIT 5", expand_fields=True, sink="accounts.json")
    print(written.value.message if written.is_ok() else written.error.to_dict())

    log_call("client.query.pages(...)")
    for i, page in enumerate(client.query.pages("SELECT Id FROM Contact"), start=1):
        if page.is_err():
            print({"page": i, "error": page.error.message})
            break
        print({"page": i, "records": len(page.value.records), "done": page.value.done})

    log_call("client.query.dataframe(...)")
    df = client.query.dataframe("SELECT Id, Name, Owner.Name FROM Account LIMIT 20")
    if df.is_ok():
        print(df.value.head())
