"""
Search Engine

Filters the flattened cache without any network call. Each supplied
filter narrows the current result (logical AND); absent filters impose
no constraint.

Filters:
- id, name: regex against the full path / label
- type: 'l' (directory) or 't' (table)
- var_desc, val_desc: regex, a row matches if any description matches
- year: the table's [date_start, date_end] range must contain the year

Variable/value descriptions and years only exist on table rows. Asking
for them without a type narrows the search to tables and warns; asking
for them together with the directory type warns and matches nothing.
"""

from typing import Any, Iterable, List, Optional, Sequence, Union
import re
import warnings

import pandas as pd

from scb_catalog.errors import AmbiguousSearchFiltersWarning
from scb_catalog.models.entry import DirectoryEntry, NodeType
from scb_catalog.models.requests import SearchRequest
from scb_catalog.services.frames import entries_to_frame, frame_to_entries


def _iter_texts(value: Any) -> Iterable[str]:
    """Yield every string in a (possibly nested) list value."""
    if isinstance(value, str):
        yield value
    elif isinstance(value, (list, tuple)):
        for item in value:
            yield from _iter_texts(item)


def _any_match(value: Any, regex: re.Pattern) -> bool:
    return any(regex.search(text) for text in _iter_texts(value))


class CatalogSearch:
    """
    Search over a cache DataFrame.

    The frame is never modified; every call returns a new DataFrame, so
    one CatalogSearch can serve concurrent searches.

    Usage:
        engine = CatalogSearch(cache_df)
        tables = engine.filter(SearchRequest(type="t", var_desc="observations"))
    """

    def __init__(self, cache: Union[pd.DataFrame, Sequence[DirectoryEntry]]):
        if isinstance(cache, pd.DataFrame):
            self._df = cache
        else:
            self._df = entries_to_frame(list(cache))

    def _effective_type(self, request: SearchRequest) -> Optional[str]:
        if not request.has_metadata_filters:
            return request.type

        if request.type is None:
            warnings.warn(
                "Variable, value or year filters only apply to tables; "
                "restricting the search to tables (type='t').",
                AmbiguousSearchFiltersWarning,
                stacklevel=3
            )
            return NodeType.TABLE.value

        if request.type != NodeType.TABLE.value:
            warnings.warn(
                f"Variable, value or year filters cannot match rows of type "
                f"'{request.type}'; the result will be empty.",
                AmbiguousSearchFiltersWarning,
                stacklevel=3
            )
        return request.type

    def filter(self, request: Optional[SearchRequest] = None) -> pd.DataFrame:
        """
        Apply the request's filters.

        Args:
            request: SearchRequest; None returns the whole cache

        Returns:
            Matching rows (empty DataFrame if nothing matches)

        Raises:
            re.error: If a pattern is not a valid regular expression
        """
        request = request or SearchRequest()
        flags = re.IGNORECASE if request.ignore_case else 0
        result = self._df

        node_type = self._effective_type(request)
        if node_type is not None:
            result = result[result['type'] == node_type]

        if request.id is not None:
            result = result[result['id'].str.contains(request.id, flags=flags, regex=True, na=False)]

        if request.name is not None:
            result = result[result['name'].str.contains(request.name, flags=flags, regex=True, na=False)]

        if request.var_desc is not None:
            regex = re.compile(request.var_desc, flags)
            result = result[result['var_desc'].map(lambda v: _any_match(v, regex)).astype(bool)]

        if request.val_desc is not None:
            regex = re.compile(request.val_desc, flags)
            result = result[result['val_desc'].map(lambda v: _any_match(v, regex)).astype(bool)]

        if request.year is not None:
            start = pd.to_numeric(result['date_start'], errors='coerce')
            end = pd.to_numeric(result['date_end'], errors='coerce')
            in_range = (start <= request.year) & (end >= request.year)
            result = result[in_range.fillna(False).astype(bool)]

        return result.reset_index(drop=True)


def search(
    cache: Union[pd.DataFrame, Sequence[DirectoryEntry]],
    request: Optional[SearchRequest] = None,
    **filters
) -> List[DirectoryEntry]:
    """
    Search the flattened cache.

    Args:
        cache: List of DirectoryEntry or a cache DataFrame
        request: SearchRequest; alternatively pass the filters as keywords
        **filters: id, type, name, var_desc, val_desc, year, ignore_case

    Returns:
        Matching entries, in cache order (empty list if nothing matches)

    Warns:
        AmbiguousSearchFiltersWarning: Table-only filters without type='t'

    Example:
        >>> search(entries, type="t", var_desc="observations")
        [DirectoryEntry(id='AM/AM0101/AM0101A', ...)]
        >>> search(entries, id="nonexistent")
        []
    """
    if request is None:
        request = SearchRequest(**filters)
    elif filters:
        raise ValueError("Pass either a SearchRequest or keyword filters, not both")

    matches = CatalogSearch(cache).filter(request)
    return frame_to_entries(matches)
