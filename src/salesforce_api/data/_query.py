# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
SOQL query execution.

One execution runs ``[field expansion] -> first fetch -> [page loop] -> [sink]``
as a single sequential chain of blocking calls. Pages are pulled lazily by
:func:`iter_pages` and never recursively, so memory held for pagination is
bounded by the records the caller keeps.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Iterable, Iterator, List, Optional, Protocol, Sequence

from ..common.constants import QUERY_PARAM
from ..core._error_codes import (
    PAGINATION_FETCH_FAILED,
    SQL_PARSE_TABLE_NOT_FOUND,
    VALIDATION_QUERY_EMPTY,
    VALIDATION_QUERY_NOT_STRING,
)
from ..core.errors import PaginationError, QueryParseError, SalesforceError, ValidationError
from ..core.results import Err, Ok, QueryOutcome, Result
from ..models.query import QueryOptions, QueryPage
from ._sink import Sink, as_sink, persist
from ._sobjects import get_field_names

if TYPE_CHECKING:
    from ._rest import _RestClient

_logger = logging.getLogger(__name__)


class _HasQueryPath(Protocol):
    base_uri: str
    access_token: str
    objects_path: str
    query_path: str


def extract_table(query_string: str) -> Optional[str]:
    """
    Return the token that immediately follows the first literal ``FROM``.

    The query is split on single spaces and matching is case-sensitive, so
    ``from`` in lowercase or ``FROM`` followed by two spaces is not recognised.
    Returns ``None`` when no table name can be found.
    """
    tokens = query_string.split(" ")
    try:
        idx = tokens.index("FROM")
    except ValueError:
        return None
    if idx + 1 >= len(tokens) or not tokens[idx + 1]:
        return None
    return tokens[idx + 1]


def add_select_clause(query_string: str, field_names: Sequence[str]) -> str:
    """
    Prepend ``SELECT <fields>`` to the query verbatim.

    A query that already has its own ``SELECT`` keeps it; the two clauses are
    simply concatenated.
    """
    return f"SELECT {','.join(field_names)} {query_string}"


def expand_fields(rest: "_RestClient", session: _HasQueryPath, query_string: str) -> Result[str]:
    """Rewrite the query with a ``SELECT`` listing every field of its table."""
    table = extract_table(query_string)
    if table is None:
        return Err(
            QueryParseError(
                "Unable to determine table name from query (expected 'FROM <name>').",
                subcode=SQL_PARSE_TABLE_NOT_FOUND,
            )
        )
    return get_field_names(rest, session, table).map(lambda fields: add_select_clause(query_string, fields))


def fetch_first_page(rest: "_RestClient", session: _HasQueryPath, query_string: str) -> Result[QueryPage]:
    return rest.get(
        session,
        session.query_path,
        params={QUERY_PARAM: query_string},
        operation="query.execute",
    ).and_then(QueryPage.from_body)


def fetch_next_page(rest: "_RestClient", session: _HasQueryPath, next_page_ref: str) -> Result[QueryPage]:
    return rest.get(session, next_page_ref, operation="query.next_page").and_then(QueryPage.from_body)


def iter_pages(rest: "_RestClient", session: _HasQueryPath, query_string: str) -> Iterator[Result[QueryPage]]:
    """
    Lazily fetch pages in arrival order.

    Yields one result per page. Iteration ends after the page that reports
    ``done``, or right after the first ``Err``.
    """
    outcome = fetch_first_page(rest, session, query_string)
    while True:
        yield outcome
        if outcome.is_err() or outcome.value.done:
            return
        outcome = fetch_next_page(rest, session, outcome.value.next_page_ref)


def collect_pages(pages: Iterable[Result[QueryPage]]) -> Result[List[Any]]:
    """
    Concatenate records from every page.

    On the first failing page, return a :class:`PaginationError` whose
    ``partial_records`` holds everything gathered from earlier pages.
    """
    records: List[Any] = []
    fetched = 0
    for outcome in pages:
        if outcome.is_err():
            _logger.warning("Pagination stopped after %d pages (%d records): %s", fetched, len(records), outcome.error.message)
            return Err(_pagination_failure(outcome.error, records, fetched))
        records.extend(outcome.value.records)
        fetched += 1
        _logger.debug("Fetched page %d (%d records so far)", fetched, len(records))
    return Ok(records)


def _pagination_failure(error: SalesforceError, records: List[Any], pages_fetched: int) -> PaginationError:
    if isinstance(error, PaginationError):
        return PaginationError(
            error.message,
            partial_records=records,
            cause=error.cause,
            subcode=error.subcode,
            details={**error.details, "pages_fetched": pages_fetched},
        )
    return PaginationError(
        f"fetching page {pages_fetched + 1} failed: {error.message}",
        partial_records=records,
        cause=error,
        subcode=PAGINATION_FETCH_FAILED,
        details={"pages_fetched": pages_fetched},
    )


def execute_query(
    rest: "_RestClient",
    session: _HasQueryPath,
    query_string: str,
    options: Optional[QueryOptions] = None,
) -> QueryOutcome:
    """
    Execute a SOQL query.

    :param rest: REST client used for every call.
    :param session: Bootstrapped session.
    :param query_string: SOQL text, sent verbatim as the ``q`` parameter (after optional expansion).
    :param options: Expansion, pagination and sink options.
    :return: ``Ok(records)``; ``Ok(QueryConfirmation)`` when a sink was given; or ``Err``:

        - ``ValidationError`` for an invalid query string or sink;
        - ``QueryParseError`` / ``ApiError`` when field expansion fails;
        - ``ApiError`` or ``PaginationError`` when fetching fails. In all-pages
          mode every fetch failure is a ``PaginationError`` carrying the records
          of earlier pages;
        - ``SinkError`` when persisting fails. It carries no records even
          though every page was fetched.
    """
    options = options or QueryOptions()
    if not isinstance(query_string, str):
        return Err(ValidationError("query_string must be a string", subcode=VALIDATION_QUERY_NOT_STRING))
    if not query_string.strip():
        return Err(ValidationError("query_string must not be empty", subcode=VALIDATION_QUERY_EMPTY))

    sink: Optional[Sink] = None
    if options.sink is not None:
        try:
            sink = as_sink(options.sink)
        except TypeError as e:
            return Err(ValidationError(str(e)))

    query = query_string
    if options.expand_fields:
        expanded = expand_fields(rest, session, query)
        if expanded.is_err():
            return expanded
        query = expanded.value

    if options.fetch_all_pages:
        fetched = collect_pages(iter_pages(rest, session, query))
    else:
        fetched = fetch_first_page(rest, session, query).map(lambda page: page.records)

    if fetched.is_err() or sink is None:
        return fetched
    return persist(fetched.value, sink)


__all__ = [
    "extract_table",
    "add_select_clause",
    "expand_fields",
    "fetch_first_page",
    "fetch_next_page",
    "iter_pages",
    "collect_pages",
    "execute_query",
]
