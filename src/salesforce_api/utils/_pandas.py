# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Internal pandas helpers"""

from __future__ import annotations

from typing import Any, Dict, List

import pandas as pd

from ..common.constants import RECORD_ATTRIBUTES_KEY


def strip_attributes(record: Dict[str, Any]) -> Dict[str, Any]:
    """Remove the ``attributes`` metadata key from a record and from any nested relationship records."""
    return {
        k: strip_attributes(v) if isinstance(v, dict) else v
        for k, v in record.items()
        if k != RECORD_ATTRIBUTES_KEY
    }


def records_to_dataframe(records: List[Dict[str, Any]], flatten: bool = True) -> pd.DataFrame:
    """Convert query records to a DataFrame.

    :param records: Records as returned by the query endpoint.
    :param flatten: When True (default), nested relationship records become dotted
        columns (``Owner.Name``). When False, they stay as dict values.
    """
    rows = [strip_attributes(r) for r in records if isinstance(r, dict)]
    if not rows:
        return pd.DataFrame()
    if flatten:
        return pd.json_normalize(rows)
    return pd.DataFrame(rows)
