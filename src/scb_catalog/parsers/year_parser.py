"""
Conversion of SCB time values to numeric years.

SCB tables store time in a handful of formats, most of which have no
standard conversion to a date. Only the year is kept; months, quarters
and half-years are dropped since they are not present in all tables.

Supported formats:
- "2018"                      -> 2018
- "2018M01", "2018m01"        -> 2018 (month)
- "2018K1", "2018k1"          -> 2018 (quarter)
- "2018H1", "2018h1"          -> 2018 (half-year)
- "2015-2018", "2018/2019"    -> every year in the range, inclusive
- "2018/19"                   -> 2018, 2019
"""

import re
import warnings
from typing import Callable, List, Optional, Sequence, Tuple, Union

from scb_catalog.errors import UnrecognizedTimeFormatWarning


Year = Union[int, List[int]]
YearParser = Callable[[str], Optional[Year]]

_YEAR = re.compile(r'^(\d{4})$')
_SUB_YEAR = re.compile(r'^(\d{4})(?:M\d{2}|K\d|H\d)$', re.IGNORECASE)
_FULL_RANGE = re.compile(r'^(\d{4})[-/](\d{4})$')
_SHORT_RANGE = re.compile(r'^(\d{4})/(\d{2})$')


def _year_range(start: int, end: int) -> List[int]:
    # Descending ranges are read as covering the same years
    low, high = min(start, end), max(start, end)
    return list(range(low, high + 1))


def parse_year(token: str) -> Optional[Year]:
    """
    Convert one time value to a year or a list of years.

    Args:
        token: Time value as returned by the API (e.g., '2018K1')

    Returns:
        An int for single-year formats, a list of ints for ranges,
        or None if the format is not recognized

    Warns:
        UnrecognizedTimeFormatWarning: If the format is not recognized

    Example:
        >>> parse_year("2018M01")
        2018
        >>> parse_year("2018/19")
        [2018, 2019]
    """
    value = str(token).strip()

    match = _YEAR.match(value)
    if match:
        return int(match.group(1))

    match = _SUB_YEAR.match(value)
    if match:
        return int(match.group(1))

    match = _FULL_RANGE.match(value)
    if match:
        return _year_range(int(match.group(1)), int(match.group(2)))

    match = _SHORT_RANGE.match(value)
    if match:
        start = match.group(1)
        # Century of the first year + the trailing two digits
        end = int(start[:2] + match.group(2))
        return _year_range(int(start), end)

    warnings.warn(
        f"Unable to convert time format '{value}', it will not count towards the date range.",
        UnrecognizedTimeFormatWarning,
        stacklevel=2
    )
    return None


def resolve_date_range(
    tokens: Sequence[str],
    parser: YearParser = parse_year
) -> Tuple[Optional[int], Optional[int]]:
    """
    Resolve a list of time values to the first and last year covered.

    Args:
        tokens: Time values of a table's time variable
        parser: Function converting one token (defaults to parse_year)

    Returns:
        (date_start, date_end), or (None, None) if no token could be converted
    """
    years: List[int] = []
    for token in tokens:
        parsed = parser(token)
        if parsed is None:
            continue
        if isinstance(parsed, int):
            years.append(parsed)
        else:
            years.extend(parsed)

    if not years:
        return None, None

    return min(years), max(years)
