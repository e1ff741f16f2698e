"""
Reusable field validators for Pydantic models.

These validators work with config/catalog.yaml specifications and can be
used with Pydantic @field_validator decorator for automatic input validation.
"""

from typing import Optional
from scb_catalog.config import get_config


def validate_lang(code: str) -> str:
    """
    Validate an API language code against config/catalog.yaml.

    Args:
        code: Language code (e.g., 'en')

    Returns:
        The validated code (unchanged if valid)

    Raises:
        ValueError: If the language is not supported

    Example:
        >>> validate_lang('sv')
        'sv'
        >>> validate_lang('fr')  # Raises ValueError
    """
    config = get_config()
    if not config.is_valid_lang(code):
        raise ValueError(
            f"The lang parameter must be one of {list(config.languages)}, got: '{code}'"
        )
    return code


def validate_database_id(database_id: str) -> str:
    """
    Validate a database id against config/catalog.yaml.

    Raises:
        ValueError: If the database is not supported
    """
    config = get_config()
    if not config.is_valid_database(database_id):
        raise ValueError(
            f"Unknown database_id '{database_id}'. "
            f"Supported databases: {list(config.databases)}"
        )
    return database_id


def validate_node_path(path: Optional[str]) -> str:
    """
    Normalize a slash-joined node path.

    Leading and trailing slashes are dropped. An empty path (or None)
    addresses the database root.

    Args:
        path: Path such as 'AM/AM0101/AM0101A'

    Returns:
        Normalized path string

    Raises:
        ValueError: If the path contains empty segments (e.g., 'AM//AM0101')

    Example:
        >>> validate_node_path('/AM/AM0101/')
        'AM/AM0101'
        >>> validate_node_path(None)
        ''
    """
    if path is None:
        return ""

    path = str(path).strip().strip("/")
    if not path:
        return ""

    if any(segment.strip() == "" for segment in path.split("/")):
        raise ValueError(f"Node path contains an empty segment: '{path}'")

    return path


def validate_filter_type(code: str) -> str:
    """
    Validate a table query filter type.

    Raises:
        ValueError: If the filter type is not one of the configured types
    """
    config = get_config()
    if code not in config.filter_types:
        raise ValueError(
            f"Invalid filter type '{code}'. "
            f"Valid filter types: {list(config.filter_types)}"
        )
    return code


def validate_year(year: Optional[int]) -> Optional[int]:
    """
    Validate a four-digit year used for search.

    Raises:
        ValueError: If the year is outside 1000-9999
    """
    if year is None:
        return year
    if year < 1000 or year > 9999:
        raise ValueError(f"Year must have four digits, got: {year}")
    return year
