# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Client-credentials token acquisition for the Salesforce API.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..common.constants import GRANT_TYPE_CLIENT_CREDENTIALS, OAUTH_TOKEN_PATH
from ..models.session import AccessToken
from ._error_codes import AUTH_INVALID_CLIENT
from .errors import AuthError
from .results import Err, Result

if TYPE_CHECKING:
    from ..data._rest import _RestClient

_logger = logging.getLogger(__name__)


def acquire_token(rest: "_RestClient", base_uri: str, client_id: str, client_secret: str) -> Result[AccessToken]:
    """
    Exchange connected-app credentials for an access token.

    Issues one POST to ``services/oauth2/token`` with a client-credentials
    grant. There is no retry.

    :return: ``Ok(AccessToken)``; ``Err(AuthError)`` for missing credentials or an
        unusable token payload; ``Err(ApiError)`` for a non-200 response.
    """
    if not client_id or not client_secret:
        return Err(AuthError("invalid client", subcode=AUTH_INVALID_CLIENT))
    if not base_uri:
        return Err(AuthError("invalid client: base_uri is required", subcode=AUTH_INVALID_CLIENT))

    form = {
        "grant_type": GRANT_TYPE_CLIENT_CREDENTIALS,
        "client_id": client_id,
        "client_secret": client_secret,
    }
    outcome = rest.post_form(base_uri, OAUTH_TOKEN_PATH, form, operation="auth.token")
    if outcome.is_err():
        _logger.warning("Token request to %s failed: %s", base_uri, outcome.error.message)
        return outcome
    return AccessToken.from_response(outcome.value)
