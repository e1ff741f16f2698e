"""
Parsing modules for SCB table metadata.

- Year parser: converts SCB time values (2018, 2018M01, 2018K1, 2015-2018,
  2018/19, ...) to numeric years
- Metadata flattener: condenses a table's variables to descriptions and
  a date range
"""

from .year_parser import parse_year, resolve_date_range
from .metadata import flatten_variables

__all__ = [
    'parse_year',
    'resolve_date_range',
    'flatten_variables',
]
