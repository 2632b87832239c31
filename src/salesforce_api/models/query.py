# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Query option, page and confirmation models.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, List, Optional, Union

from ..common.constants import BODY_DONE, BODY_NEXT_RECORDS_URL, BODY_RECORDS, BODY_TOTAL_SIZE
from ..core._error_codes import PAGINATION_MALFORMED_PAGE
from ..core.errors import PaginationError
from ..core.results import Err, Ok, Result


@dataclass(frozen=True)
class QueryOptions:
    """
    Options controlling one query execution.

    :param expand_fields: Prepend a ``SELECT`` clause listing every field of the queried object.
    :param fetch_all_pages: Follow ``nextRecordsUrl`` until the server reports ``done``.
    :param sink: Where to persist the records instead of returning them inline:
        a filesystem path or any object with a ``write(text)`` method returning a result.
    """

    expand_fields: bool = False
    fetch_all_pages: bool = False
    sink: Optional[Union[str, "os.PathLike[str]", Any]] = None


@dataclass(frozen=True)
class QueryPage:
    """
    One page of query results.

    :param records: Records in this page, in server order.
    :param done: ``True`` when this is the last page.
    :param next_page_ref: Opaque relative URL of the next page, when ``done`` is ``False``.
    :param total_size: Total number of matching records reported by the server.
    """

    records: List[Any] = field(default_factory=list)
    done: bool = True
    next_page_ref: Optional[str] = None
    total_size: Optional[int] = None

    @classmethod
    def from_body(cls, body: Any) -> Result["QueryPage"]:
        """
        Validate a decoded query response body.

        A body is malformed when ``done`` is not a bool, ``records`` is not a
        list, or ``done`` is false without a ``nextRecordsUrl`` to follow.
        """
        if not isinstance(body, dict):
            return Err(_malformed("query response body is not an object", body))
        done = body.get(BODY_DONE)
        records = body.get(BODY_RECORDS)
        if not isinstance(done, bool) or not isinstance(records, list):
            return Err(_malformed("query response body is missing 'done' or 'records'", body))
        next_ref = body.get(BODY_NEXT_RECORDS_URL)
        if not done and not isinstance(next_ref, str):
            return Err(_malformed("query response is not done but has no 'nextRecordsUrl'", body))
        return Ok(
            cls(
                records=records,
                done=done,
                next_page_ref=None if done else next_ref,
                total_size=body.get(BODY_TOTAL_SIZE),
            )
        )


def _malformed(message: str, body: Any) -> PaginationError:
    keys = sorted(body.keys()) if isinstance(body, dict) else None
    return PaginationError(message, subcode=PAGINATION_MALFORMED_PAGE, details={"keys": keys})


@dataclass(frozen=True)
class QueryConfirmation:
    """
    Returned instead of inline records when a result was written to a sink.

    :param location: Where the records were written.
    :param record_count: Number of records written.
    """

    location: str
    record_count: int = 0

    @property
    def message(self) -> str:
        return f"results written to {self.location}"

    def __str__(self) -> str:
        return self.message


__all__ = ["QueryOptions", "QueryPage", "QueryConfirmation"]
