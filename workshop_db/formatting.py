"""
Record presentation for the CLI: pandas table or JSON lines. No query logic.
"""

from __future__ import annotations

import json
from typing import List, Sequence

import pandas as pd

from .store.engine import Record


def records_to_frame(records: List[Record], columns: Sequence[str] = ()) -> pd.DataFrame:
    """DataFrame in record order; an empty result keeps the template's columns."""
    if not records:
        return pd.DataFrame(columns=list(columns))
    return pd.DataFrame.from_records(records, columns=list(records[0].keys()))


def render_table(records: List[Record], columns: Sequence[str] = ()) -> str:
    df = records_to_frame(records, columns)
    if df.empty:
        return "(no rows)"
    return df.to_string(index=False)


def render_json(records: List[Record]) -> str:
    return json.dumps(records, indent=2)
