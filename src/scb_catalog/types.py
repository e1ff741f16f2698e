"""
Discovery helper classes for exploring SCB API specifications.

Provides user-facing APIs to discover available languages, databases,
node types and query filter types from config/catalog.yaml.
"""

from typing import Dict
from scb_catalog.config import get_config


class Languages:
    """
    Helper class for discovering supported API languages.

    All methods use the centralized configuration from catalog.yaml
    and return copies to prevent accidental mutations.

    Example:
        >>> Languages.list_available()
        {'en': 'English', 'sv': 'Svenska'}
        >>> Languages.is_valid('fr')
        False
    """

    @staticmethod
    def list_available() -> Dict[str, str]:
        """
        List all supported language codes with display names.

        Returns:
            Dictionary mapping language codes to names
        """
        return get_config().languages.copy()

    @staticmethod
    def is_valid(code: str) -> bool:
        """Check if a language code is supported."""
        return get_config().is_valid_lang(code)


class Databases:
    """
    Helper class for discovering SCB databases reachable through the API.

    Example:
        >>> Databases.list_available()
        {'ssd': 'Statistikdatabasen (main database for national statistics)'}
    """

    @staticmethod
    def list_available() -> Dict[str, str]:
        """List all supported database ids with descriptions."""
        return get_config().databases.copy()

    @staticmethod
    def is_valid(database_id: str) -> bool:
        """Check if a database id is supported."""
        return get_config().is_valid_database(database_id)


class NodeTypes:
    """
    Helper class for the node type codes used by directory listings.

    - l: Directory (internal node)
    - t: Table (leaf)

    Example:
        >>> NodeTypes.get_label('l')
        'Directory'
    """

    @staticmethod
    def list_available() -> Dict[str, str]:
        """List node type codes with labels."""
        return get_config().node_types.copy()

    @staticmethod
    def get_label(code: str) -> str:
        """
        Get the label for a node type code.

        Args:
            code: Node type code

        Returns:
            Label such as 'Directory' or 'Table'

        Raises:
            ValueError: If code is not found
        """
        try:
            return get_config().get_node_type_label(code)
        except KeyError as e:
            raise ValueError(f"Unknown node type: {code}") from e


class FilterTypes:
    """
    Helper class for discovering selection filters accepted by table queries.

    Example:
        >>> sorted(FilterTypes.list_available())
        ['agg', 'all', 'item', 'top', 'vs']
    """

    @staticmethod
    def list_available() -> Dict[str, str]:
        """List filter types with explanations."""
        return get_config().filter_types.copy()

    @staticmethod
    def is_valid(code: str) -> bool:
        """Check if a filter type is accepted."""
        return code in get_config().filter_types
