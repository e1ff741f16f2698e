"""
Conversion between cache entries and the tabular cache representation.

The cache is a list of DirectoryEntry in memory and a pandas DataFrame
(one row per entry) for searching and CSV persistence. List-valued
columns are encoded as JSON strings in CSV files.
"""

from typing import Any, List, Optional, Sequence
import json

import pandas as pd

from scb_catalog.models.entry import DirectoryEntry, NodeType

CACHE_COLUMNS = ['id', 'depth', 'type', 'name', 'var_desc', 'val_desc', 'date_start', 'date_end']
LIST_COLUMNS = ['var_desc', 'val_desc']
YEAR_COLUMNS = ['date_start', 'date_end']


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (list, tuple)):
        return False
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def entries_to_frame(entries: Sequence[DirectoryEntry]) -> pd.DataFrame:
    """
    Build the cache DataFrame from entries.

    Year columns use the nullable Int64 dtype so tables without a date
    range keep <NA> instead of turning the column into floats.
    """
    df = pd.DataFrame([e.to_record() for e in entries], columns=CACHE_COLUMNS)
    for column in YEAR_COLUMNS:
        df[column] = df[column].astype('Int64')
    df['depth'] = df['depth'].astype(int)
    return df


def _to_year(value: Any) -> Optional[int]:
    if _is_missing(value):
        return None
    return int(value)


def _to_list(value: Any) -> Optional[list]:
    if _is_missing(value):
        return None
    if isinstance(value, str):
        return json.loads(value)
    return list(value)


def frame_to_entries(df: pd.DataFrame) -> List[DirectoryEntry]:
    """
    Convert cache DataFrame rows back to DirectoryEntry objects.

    Accepts frames read from CSV, where list columns are still JSON text
    and missing values are NaN.
    """
    entries = []
    for row in df.to_dict(orient='records'):
        entries.append(DirectoryEntry(
            id=str(row['id']),
            depth=int(row['depth']),
            type=NodeType(row['type']),
            name='' if _is_missing(row.get('name')) else str(row['name']),
            var_desc=_to_list(row.get('var_desc')),
            val_desc=_to_list(row.get('val_desc')),
            date_start=_to_year(row.get('date_start')),
            date_end=_to_year(row.get('date_end')),
        ))
    return entries


def encode_for_csv(df: pd.DataFrame) -> pd.DataFrame:
    """Copy of df with list columns serialized to JSON strings."""
    out = df.copy()
    for column in LIST_COLUMNS:
        out[column] = out[column].map(
            lambda v: None if _is_missing(v) else json.dumps(v, ensure_ascii=False)
        )
    return out


def decode_from_csv(df: pd.DataFrame) -> pd.DataFrame:
    """Copy of df with JSON list columns parsed and dtypes restored."""
    out = df.copy()
    for column in LIST_COLUMNS:
        out[column] = out[column].map(_to_list).astype(object)
    for column in YEAR_COLUMNS:
        out[column] = out[column].astype('Int64')
    out['name'] = out['name'].fillna('')
    out['type'] = out['type'].astype(str)
    return out
