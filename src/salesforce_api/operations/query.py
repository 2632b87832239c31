# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""SOQL query operations namespace."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Iterator, Optional, Union

import pandas as pd

from ..core.results import QueryOutcome, Result
from ..data import _query
from ..data._sink import Sink
from ..models.query import QueryOptions, QueryPage
from ..utils._pandas import records_to_dataframe

if TYPE_CHECKING:
    from ..client import SalesforceClient


class QueryOperations:
    """
    SOQL query operations.

    Accessed via ``client.query``.

    Example:
        First page only::

            outcome = client.query.execute("SELECT Id, Name FROM Account")
            for record in outcome.unwrap():
                print(record["Name"])

        Every page, with every field of the object::

            outcome = client.query.execute("FROM Account WHERE Industry = 'Energy'",
                                           expand_fields=True, all_pages=True)

        Persist to a file instead of returning records::

            outcome = client.query.execute("SELECT Id FROM Contact", all_pages=True,
                                           sink="contacts.json")
            print(outcome.unwrap().message)  # results written to contacts.json

        Partial results after a pagination failure::

            outcome = client.query.execute(soql, all_pages=True)
            if outcome.is_err() and isinstance(outcome.error, PaginationError):
                salvage = outcome.error.partial_records
    """

    def __init__(self, client: "SalesforceClient") -> None:
        self._client = client

    def execute(
        self,
        query: str,
        *,
        expand_fields: bool = False,
        all_pages: bool = False,
        sink: Optional[Union[str, "os.PathLike[str]", Sink]] = None,
    ) -> QueryOutcome:
        """
        Execute a SOQL query.

        :param query: SOQL text.
        :param expand_fields: Prepend ``SELECT`` with every field of the object named after ``FROM``.
        :param all_pages: Follow pagination until the server reports the last page.
        :param sink: Optional file path or sink to write the records to.
        :return: ``Ok(list)`` of records, ``Ok(QueryConfirmation)`` when ``sink`` is set, or ``Err``.
        """
        options = QueryOptions(expand_fields=expand_fields, fetch_all_pages=all_pages, sink=sink)
        return self.run(query, options)

    def run(self, query: str, options: QueryOptions) -> QueryOutcome:
        """Execute a SOQL query with a prepared :class:`QueryOptions`."""
        return _query.execute_query(self._client._get_rest(), self._client.session, query, options)

    def pages(self, query: str, *, expand_fields: bool = False) -> Iterator[Result[QueryPage]]:
        """
        Lazily iterate result pages.

        Each item is ``Ok(QueryPage)`` or a final ``Err``. Pages are fetched
        only as the iterator advances.
        """
        rest = self._client._get_rest()
        session = self._client.session
        if expand_fields:
            expanded = _query.expand_fields(rest, session, query)
            if expanded.is_err():
                yield expanded
                return
            query = expanded.value
        yield from _query.iter_pages(rest, session, query)

    def dataframe(
        self,
        query: str,
        *,
        expand_fields: bool = False,
        all_pages: bool = True,
        flatten: bool = True,
    ) -> Result[pd.DataFrame]:
        """
        Execute a query and return the records as a pandas DataFrame.

        The per-record ``attributes`` metadata is dropped. Nested relationship
        records become dotted columns unless ``flatten`` is False.
        """
        fetched = self.execute(query, expand_fields=expand_fields, all_pages=all_pages)
        return fetched.map(lambda records: records_to_dataframe(records, flatten=flatten))


__all__ = ["QueryOperations"]
