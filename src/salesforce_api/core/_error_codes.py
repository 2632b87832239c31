# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

# HTTP subcode constants
HTTP_400 = "http_400"
HTTP_401 = "http_401"
HTTP_403 = "http_403"
HTTP_404 = "http_404"
HTTP_500 = "http_500"
HTTP_503 = "http_503"

_HTTP_STATUS_TO_SUBCODE = {
    400: HTTP_400,
    401: HTTP_401,
    403: HTTP_403,
    404: HTTP_404,
    500: HTTP_500,
    503: HTTP_503,
}

# Transport / body subcodes
TRANSPORT_ERROR = "transport_error"
FOREIGN_HOST = "foreign_host"
UNEXPECTED_BODY = "unexpected_body"

# Auth subcodes
AUTH_INVALID_CLIENT = "auth_invalid_client"
AUTH_INVALID_TOKEN_RESPONSE = "auth_invalid_token_response"

# Validation subcodes
VALIDATION_QUERY_NOT_STRING = "validation_query_not_string"
VALIDATION_QUERY_EMPTY = "validation_query_empty"
VALIDATION_NO_VERSIONS = "validation_no_versions"
VALIDATION_MISSING_SETTING = "validation_missing_setting"

# SQL parse subcodes
SQL_PARSE_TABLE_NOT_FOUND = "sql_parse_table_not_found"

# Pagination subcodes
PAGINATION_MALFORMED_PAGE = "pagination_malformed_page"
PAGINATION_FETCH_FAILED = "pagination_fetch_failed"

# Sink subcodes
SINK_WRITE_FAILED = "sink_write_failed"
SINK_ENCODE_FAILED = "sink_encode_failed"


def http_subcode(status_code: int) -> str:
    """Map an HTTP status to its subcode, falling back to ``http_<status>``."""
    return _HTTP_STATUS_TO_SUBCODE.get(status_code, f"http_{status_code}")
