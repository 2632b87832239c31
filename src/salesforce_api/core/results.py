# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Result types for Salesforce API client operations.

Every operation returns either :class:`Ok` (carrying the value) or
:class:`Err` (carrying a :class:`~salesforce_api.core.errors.SalesforceError`).
Callers branch on the tag instead of catching exceptions::

    outcome = client.query.execute("SELECT Id FROM Account", all_pages=True)
    if outcome.is_ok():
        for record in outcome.value:
            print(record["Id"])
    else:
        print(outcome.error.to_dict())

Callers that prefer exceptions can call :meth:`Result.unwrap`, which returns
the value or raises the carried error.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, List, TypeVar, Union

from .errors import SalesforceError

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """
    Successful outcome.

    :param value: The operation result.
    """

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: Any) -> T:
        return self.value

    def map(self, fn: Callable[[T], U]) -> "Ok[U]":
        """Apply ``fn`` to the carried value."""
        return Ok(fn(self.value))

    def and_then(self, fn: Callable[[T], "Result[U]"]) -> "Result[U]":
        """Chain a step that itself returns a result."""
        return fn(self.value)


@dataclass(frozen=True)
class Err:
    """
    Failed outcome.

    :param error: The structured error describing the failure.
    """

    error: SalesforceError

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> Any:
        """Raise the carried error."""
        raise self.error

    def unwrap_or(self, default: Any) -> Any:
        return default

    def map(self, fn: Callable[[Any], Any]) -> "Err":
        return self

    def and_then(self, fn: Callable[[Any], Any]) -> "Err":
        return self


Result = Union[Ok[T], Err]

# Outcome of a query: inline records, a sink confirmation, or an error.
QueryOutcome = Union[Ok[List[Any]], Ok[Any], Err]


__all__ = ["Ok", "Err", "Result", "QueryOutcome"]
