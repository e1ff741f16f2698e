"""
Flattening of table variable metadata into a compact cache record.

A table listing returns the title plus a list of variables, each with
code, text, values, valueTexts, elimination and time fields. Only the
pertinent parts are kept:
- descriptions of the non-time variables
- value descriptions of the non-time variables
- first and last year covered by the time variable
"""

from typing import Any, Iterable, List, Union

from scb_catalog.models.entry import TableSummary
from scb_catalog.models.listing import TableMetadata, TableVariable
from scb_catalog.parsers.year_parser import YearParser, parse_year, resolve_date_range


def _as_variables(raw: Union[TableMetadata, Iterable[Any], None]) -> List[TableVariable]:
    if raw is None:
        return []
    if isinstance(raw, TableMetadata):
        return list(raw.variables)
    return [
        v if isinstance(v, TableVariable) else TableVariable.model_validate(v)
        for v in raw
    ]


def flatten_variables(
    raw_variables: Union[TableMetadata, Iterable[Any], None],
    year_parser: YearParser = parse_year
) -> TableSummary:
    """
    Condense one table's variables into a TableSummary.

    Args:
        raw_variables: TableMetadata, a list of TableVariable, or the raw
            list of variable dicts from the API
        year_parser: Converts one time value to a year or list of years

    Returns:
        TableSummary. All fields are None for a table without variables;
        date_start/date_end are None without a convertible time variable.

    Warns:
        UnrecognizedTimeFormatWarning: Once per time value the parser rejects

    Example:
        >>> summary = flatten_variables([
        ...     {"code": "Kon", "text": "sex", "values": ["1", "2"],
        ...      "valueTexts": ["men", "women"]},
        ...     {"code": "Tid", "text": "year", "values": ["2016", "2017"], "time": True},
        ... ])
        >>> summary.var_desc, summary.date_start, summary.date_end
        (['sex'], 2016, 2017)
    """
    variables = _as_variables(raw_variables)

    if not variables:
        return TableSummary()

    date_start = date_end = None
    time_variables = [v for v in variables if v.time]
    if time_variables:
        date_start, date_end = resolve_date_range(time_variables[0].values, parser=year_parser)

    descriptive = [v for v in variables if not v.time]

    return TableSummary(
        var_desc=[v.text for v in descriptive],
        val_desc=[list(v.value_texts) for v in descriptive],
        date_start=date_start,
        date_end=date_end,
    )
