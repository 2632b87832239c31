# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Session bootstrap.

Builds a :class:`~salesforce_api.models.session.Session` by running an ordered
sequence of steps over an immutable state value. Each step returns either the
advanced state or an error; the first error stops the chain and is the only
thing returned, so a partially built session is never exposed.

Steps, in order:

1. acquire an access token;
2. build the authenticated request context (base URI + bearer token);
3. list API versions and keep the latest version's path as ``data_path``;
4. derive ``objects_path`` and ``query_path`` from ``data_path``;
5. read the tenant's ``maxBatchSize`` into ``query_size_limit``.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence, Tuple

from ..core._auth import acquire_token
from ..core._http import _HttpClient
from ..core.config import SalesforceConfig
from ..core.errors import InvariantError
from ..core.results import Ok, Result
from ..core.telemetry import create_telemetry_manager
from ..models.session import Session, objects_path_for, query_path_for
from ._rest import AuthContext, _RestClient
from ._sobjects import get_max_batch_size
from ._versions import latest_version_path

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _BootstrapState:
    base_uri: str
    client_id: str
    client_secret: str = field(repr=False)
    access_token: Optional[str] = field(default=None, repr=False)
    token_issued_at: Optional[str] = None
    auth: Optional[AuthContext] = None
    data_path: Optional[str] = None
    objects_path: Optional[str] = None
    query_path: Optional[str] = None
    query_size_limit: Optional[int] = None

    def advance(self, **changes) -> "_BootstrapState":
        return dataclasses.replace(self, **changes)


_Step = Callable[[_RestClient, _BootstrapState], Result[_BootstrapState]]


def _require(value, what: str):
    if value is None:
        raise InvariantError(f"bootstrap step ran before {what} was set")
    return value


def _acquire_token(rest: _RestClient, state: _BootstrapState) -> Result[_BootstrapState]:
    return acquire_token(rest, state.base_uri, state.client_id, state.client_secret).map(
        lambda token: state.advance(access_token=token.token, token_issued_at=token.issued_at)
    )


def _build_request_context(rest: _RestClient, state: _BootstrapState) -> Result[_BootstrapState]:
    token = _require(state.access_token, "the access token")
    return Ok(state.advance(auth=AuthContext(base_uri=state.base_uri, access_token=token)))


def _resolve_data_path(rest: _RestClient, state: _BootstrapState) -> Result[_BootstrapState]:
    auth = _require(state.auth, "the request context")
    return latest_version_path(rest, auth).map(lambda path: state.advance(data_path=path))


def _derive_paths(rest: _RestClient, state: _BootstrapState) -> Result[_BootstrapState]:
    data_path = _require(state.data_path, "the data path")
    return Ok(state.advance(objects_path=objects_path_for(data_path), query_path=query_path_for(data_path)))


def _read_query_size_limit(rest: _RestClient, state: _BootstrapState) -> Result[_BootstrapState]:
    _require(state.objects_path, "the objects path")
    return get_max_batch_size(rest, state).map(lambda limit: state.advance(query_size_limit=limit))


BOOTSTRAP_STEPS: Tuple[Tuple[str, _Step], ...] = (
    ("token", _acquire_token),
    ("request_context", _build_request_context),
    ("data_path", _resolve_data_path),
    ("derived_paths", _derive_paths),
    ("query_size_limit", _read_query_size_limit),
)


def _run_steps(
    rest: _RestClient,
    state: _BootstrapState,
    steps: Sequence[Tuple[str, _Step]] = BOOTSTRAP_STEPS,
) -> Result[_BootstrapState]:
    for name, step in steps:
        outcome = step(rest, state)
        if outcome.is_err():
            _logger.warning("Session bootstrap failed at step %r: %s", name, outcome.error.message)
            return outcome
        state = outcome.value
        _logger.debug("Session bootstrap step %r complete", name)
    return Ok(state)


def _to_session(state: _BootstrapState) -> Session:
    return Session(
        base_uri=state.base_uri,
        client_id=state.client_id,
        client_secret=state.client_secret,
        access_token=_require(state.access_token, "the access token"),
        token_issued_at=_require(state.token_issued_at, "the token timestamp"),
        data_path=_require(state.data_path, "the data path"),
        objects_path=_require(state.objects_path, "the objects path"),
        query_path=_require(state.query_path, "the query path"),
        query_size_limit=state.query_size_limit,
    ).validate()


def bootstrap_session(
    base_uri: str,
    client_id: str,
    client_secret: str,
    *,
    config: Optional[SalesforceConfig] = None,
    rest: Optional[_RestClient] = None,
) -> Result[Session]:
    """
    Authenticate and resolve every path a session needs.

    :param base_uri: Instance URL, e.g. ``"https://acme.my.salesforce.com"``. A trailing slash is ignored.
    :param client_id: Connected app consumer key.
    :param client_secret: Connected app consumer secret.
    :param config: Optional configuration used to build the transport when ``rest`` is not given.
    :param rest: Optional pre-built REST client (shares its HTTP session and telemetry).
    :return: ``Ok(Session)`` or the error of the first failing step.
    :raises ~salesforce_api.core.errors.InvariantError: If the completed state is internally inconsistent.
    """
    if rest is None:
        cfg = config or SalesforceConfig.from_env()
        rest = _RestClient(_HttpClient(timeout=cfg.http_timeout), create_telemetry_manager(cfg.telemetry))
    initial = _BootstrapState(base_uri=(base_uri or "").rstrip("/"), client_id=client_id, client_secret=client_secret)
    return _run_steps(rest, initial).map(_to_session)


__all__ = ["bootstrap_session", "BOOTSTRAP_STEPS"]
