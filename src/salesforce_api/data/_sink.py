# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Result persistence: JSON serialization and file sinks.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Protocol, Union, runtime_checkable

from ..core._error_codes import SINK_ENCODE_FAILED, SINK_WRITE_FAILED
from ..core.errors import SinkError
from ..core.results import Err, Ok, Result
from ..models.query import QueryConfirmation

_logger = logging.getLogger(__name__)


@runtime_checkable
class Sink(Protocol):
    """A persistent destination for serialized results."""

    @property
    def location(self) -> str:
        ...

    def write(self, text: str) -> Result[None]:
        ...


@dataclass(frozen=True)
class FileSink:
    """
    Writes text to a file, replacing any previous content.

    :param path: Destination file.
    :param encoding: Text encoding. Default ``"utf-8"``.
    """

    path: Path
    encoding: str = "utf-8"

    @property
    def location(self) -> str:
        return str(self.path)

    def write(self, text: str) -> Result[None]:
        try:
            self.path.write_text(text, encoding=self.encoding)
        except OSError as e:
            return Err(SinkError(f"failed to write {self.location}: {e}", location=self.location, subcode=SINK_WRITE_FAILED))
        return Ok(None)


def as_sink(target: Union[str, "os.PathLike[str]", Sink]) -> Sink:
    """Wrap a filesystem path in a :class:`FileSink`; pass sink objects through."""
    if isinstance(target, (str, os.PathLike)):
        return FileSink(Path(os.fspath(target)))
    if isinstance(target, Sink):
        return target
    raise TypeError("sink must be a path or an object with 'location' and 'write(text)'")


def encode(value: Any) -> str:
    """Serialize a decoded API value to JSON text."""
    return json.dumps(value, ensure_ascii=False)


def persist(records: List[Any], sink: Sink) -> Result[QueryConfirmation]:
    """
    Serialize ``records`` and write them to ``sink``.

    A failure here yields a :class:`~salesforce_api.core.errors.SinkError`
    that carries no records.
    """
    try:
        text = encode(records)
    except (TypeError, ValueError) as e:
        return Err(SinkError(f"failed to serialize results: {e}", location=sink.location, subcode=SINK_ENCODE_FAILED))
    written = sink.write(text)
    if written.is_err():
        _logger.warning("Writing results to %s failed: %s", sink.location, written.error.message)
        return written
    _logger.debug("Wrote %d records to %s", len(records), sink.location)
    return Ok(QueryConfirmation(location=sink.location, record_count=len(records)))


__all__ = ["Sink", "FileSink", "as_sink", "encode", "persist"]
