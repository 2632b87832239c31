# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from __future__ import annotations

from typing import Mapping, Optional

import requests

from .core._http import _HttpClient
from .core.config import SalesforceConfig, SalesforceCredentials
from .core.errors import ValidationError
from .core.results import Err, Result
from .core.telemetry import create_telemetry_manager
from .data._bootstrap import bootstrap_session
from .data._rest import _RestClient
from .models.session import Session
from .operations.objects import ObjectOperations
from .operations.query import QueryOperations
from .operations.resources import ResourceOperations


class SalesforceClient:
    """
    High-level client for the Salesforce REST API.

    The client wraps an immutable :class:`~salesforce_api.models.session.Session`
    and delegates HTTP calls to an internal REST client. Operations are grouped
    under namespaces:

    - ``client.objects``: object listing and metadata
    - ``client.query``: SOQL queries with field expansion, pagination and sinks
    - ``client.resources``: API version and resource discovery

    Every operation returns a result value (``Ok`` or ``Err``) instead of raising.

    **Context Manager Support (Recommended)**:
        Using the client as a context manager enables connection pooling and
        releases the pooled connections on exit::

            outcome = SalesforceClient.connect(base_uri, client_id, client_secret)
            with outcome.unwrap() as client:
                records = client.query.execute("SELECT Id FROM Account", all_pages=True).unwrap()

    :param session: A bootstrapped session.
    :type session: ~salesforce_api.models.session.Session
    :param config: Optional configuration for timeouts and telemetry.
    :type config: ~salesforce_api.core.config.SalesforceConfig or None

    :raises ~salesforce_api.core.errors.InvariantError: If ``session`` is internally inconsistent.
    """

    def __init__(self, session: Session, config: Optional[SalesforceConfig] = None) -> None:
        self._session = session.validate()
        self._config = config or SalesforceConfig.from_env()
        self._rest: Optional[_RestClient] = None
        self._http_session: Optional[requests.Session] = None
        self._owns_session: bool = False

        self.objects = ObjectOperations(self)
        self.query = QueryOperations(self)
        self.resources = ResourceOperations(self)

    @classmethod
    def connect(
        cls,
        base_uri: str,
        client_id: str,
        client_secret: str,
        config: Optional[SalesforceConfig] = None,
    ) -> Result["SalesforceClient"]:
        """
        Bootstrap a session and wrap it in a client.

        :return: ``Ok(SalesforceClient)`` or the bootstrap error. No client is
            produced when any bootstrap step fails.
        """
        cfg = config or SalesforceConfig.from_env()
        return bootstrap_session(base_uri, client_id, client_secret, config=cfg).map(lambda s: cls(s, cfg))

    @classmethod
    def from_env(
        cls,
        config: Optional[SalesforceConfig] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> Result["SalesforceClient"]:
        """Connect with credentials read from ``SALESFORCE_*`` environment variables."""
        try:
            creds = SalesforceCredentials.from_env(environ)
        except ValidationError as e:
            return Err(e)
        return cls.connect(creds.base_uri, creds.client_id, creds.client_secret, config)

    @property
    def session(self) -> Session:
        return self._session

    def __enter__(self) -> "SalesforceClient":
        if self._http_session is None:
            self._http_session = requests.Session()
            self._owns_session = True
            self._rest = None
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """
        Release pooled connections. Safe to call multiple times.

        The session itself stays valid; the client can keep issuing requests
        without pooling after it is closed.
        """
        if self._rest is not None:
            self._rest.close()
            self._rest = None
        if self._http_session is not None and self._owns_session:
            self._http_session.close()
            self._http_session = None
            self._owns_session = False

    def _get_rest(self) -> _RestClient:
        """Get or create the internal REST client instance."""
        if self._rest is None:
            self._rest = _RestClient(
                _HttpClient(timeout=self._config.http_timeout, session=self._http_session),
                create_telemetry_manager(self._config.telemetry),
            )
        return self._rest


__all__ = ["SalesforceClient"]
