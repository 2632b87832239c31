# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Constants for the Salesforce REST API wire contract and telemetry attributes.
"""

# Relative resource paths
OAUTH_TOKEN_PATH = "services/oauth2/token"
API_VERSIONS_PATH = "services/data"
SOBJECTS_SEGMENT = "sobjects"
QUERY_SEGMENT = "query"
DESCRIBE_SEGMENT = "describe"

# OAuth grant used to exchange client credentials for a token
GRANT_TYPE_CLIENT_CREDENTIALS = "client_credentials"

# Query endpoint parameter carrying the SOQL string
QUERY_PARAM = "q"

# Response body keys
BODY_ACCESS_TOKEN = "access_token"
BODY_ISSUED_AT = "issued_at"
BODY_SOBJECTS = "sobjects"
BODY_MAX_BATCH_SIZE = "maxBatchSize"
BODY_FIELDS = "fields"
BODY_DONE = "done"
BODY_RECORDS = "records"
BODY_NEXT_RECORDS_URL = "nextRecordsUrl"
BODY_TOTAL_SIZE = "totalSize"

# Per-record metadata key added by the query endpoint
RECORD_ATTRIBUTES_KEY = "attributes"

# OpenTelemetry span attribute names
OTEL_ATTR_HTTP_METHOD = "http.request.method"
OTEL_ATTR_HTTP_URL = "url.full"
OTEL_ATTR_HTTP_STATUS_CODE = "http.response.status_code"
OTEL_ATTR_SALESFORCE_OPERATION = "salesforce.operation"
OTEL_ATTR_SALESFORCE_OBJECT = "salesforce.object"
