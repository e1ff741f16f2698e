"""
Configuration management using Pydantic Settings.

Automatically loads configuration from config/catalog.yaml and environment variables.
Provides type-safe access to:
- SCB API specifications (languages, databases, node types, query filters)
- SCB API endpoint and rate limit settings
- Local cache directory
"""

from pathlib import Path
from typing import Dict, Optional
import yaml
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class CatalogSpecConfig(BaseSettings):
    """
    Configuration automatically loaded from config/catalog.yaml.

    Pydantic Settings handles file resolution and parsing automatically.
    This class provides type-safe access to SCB API specifications including:
    - Supported languages (lang path segment)
    - Supported databases (database_id path segment)
    - Node type codes returned by directory listings
    - Filter types accepted by table queries

    Attributes:
        languages: Dictionary of language codes to language names
        databases: Dictionary of database ids to descriptions
        node_types: Dictionary of node type codes ('l', 't') to labels
        filter_types: Dictionary of query filter types to descriptions

    Example:
        >>> config = CatalogSpecConfig()
        >>> config.is_valid_lang('en')
        True
        >>> config.get_node_type_label('t')
        'Table'
    """

    languages: Dict[str, str] = Field(
        default_factory=dict,
        description="Supported language codes with display names"
    )
    databases: Dict[str, str] = Field(
        default_factory=dict,
        description="Supported database ids with descriptions"
    )
    node_types: Dict[str, str] = Field(
        default_factory=dict,
        description="Node type codes returned by directory listings"
    )
    filter_types: Dict[str, str] = Field(
        default_factory=dict,
        description="Selection filter types accepted by table queries"
    )

    model_config = SettingsConfigDict(
        extra='ignore'
    )

    @model_validator(mode='before')
    @classmethod
    def load_yaml_config(cls, data: dict) -> dict:
        """
        Load configuration from config/catalog.yaml if not already provided.

        This validator runs before field validation and loads the YAML file
        if the data dict is empty (i.e., no values were provided).
        """
        # If data already has values (e.g., from tests), don't override
        if data:
            return data

        # src/scb_catalog/config.py -> root
        current_file = Path(__file__)
        project_root = current_file.parent.parent.parent
        config_path = project_root / 'config' / 'catalog.yaml'

        if not config_path.exists():
            config_path = Path('config/catalog.yaml')

        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found at {config_path}. "
                f"Ensure config/catalog.yaml exists in project root."
            )

        with open(config_path, 'r', encoding='utf-8') as f:
            yaml_data = yaml.safe_load(f)

        return {
            'languages': yaml_data.get('languages', {}),
            'databases': yaml_data.get('databases', {}),
            'node_types': yaml_data.get('node_types', {}),
            'filter_types': yaml_data.get('filter_types', {})
        }

    def is_valid_lang(self, code: Optional[str]) -> bool:
        """
        Check if a language code is supported.

        Args:
            code: Language code to validate (e.g., 'en')

        Returns:
            True if code is supported, False otherwise
        """
        if code is None:
            return False
        return code in self.languages

    def is_valid_database(self, database_id: Optional[str]) -> bool:
        """Check if a database id is supported."""
        if database_id is None:
            return False
        return database_id in self.databases

    def get_node_type_label(self, code: str) -> str:
        """
        Get the label for a node type code.

        Args:
            code: Node type code ('l' or 't')

        Returns:
            Label string ('Directory' or 'Table')

        Raises:
            KeyError: If code is not found in configuration
        """
        if code not in self.node_types:
            raise KeyError(f"Unknown node type: {code}")
        return self.node_types[code]


# Singleton pattern - loaded once, cached forever
_config: Optional[CatalogSpecConfig] = None


def get_config() -> CatalogSpecConfig:
    """
    Get global catalog spec config instance (lazy-loaded singleton).

    Returns:
        Singleton CatalogSpecConfig instance

    Example:
        >>> config = get_config()
        >>> config is get_config()
        True
    """
    global _config
    if _config is None:
        _config = CatalogSpecConfig()
    return _config


class AppConfig(BaseSettings):
    """
    Application configuration loaded from environment variables.

    Provides centralized access to runtime configuration:
    - SCB API base URL and request timeout
    - Default language and database
    - Rate limit window and retry ceiling
    - Cache directory

    Environment Variables (from .env):
        SCB_BASE_URL: API root (e.g., "http://api.scb.se/OV0104/v1/doris")
        DEFAULT_LANG: Language used when none is given (e.g., "en")
        DEFAULT_DATABASE_ID: Database used when none is given (e.g., "ssd")
        REQUEST_TIMEOUT: HTTP timeout in seconds
        RATE_WINDOW_SECONDS: Length of the rolling rate limit window
        RATE_MAX_CALLS: Calls permitted within one window
        MAX_LIST_ATTEMPTS: Retry ceiling for one listing call
        CACHE_DB_DIR: Directory for cache CSV files

    Example:
        >>> config = get_app_config()
        >>> config.default_database_id
        'ssd'
        >>> config.rate_window_seconds
        10.0
    """

    scb_base_url: str = Field(
        default="http://api.scb.se/OV0104/v1/doris",
        description="Root URL of the SCB PX-Web API"
    )

    default_lang: str = Field(
        default="en",
        description="Language used when the caller gives none"
    )

    default_database_id: str = Field(
        default="ssd",
        description="Database used when the caller gives none"
    )

    request_timeout: float = Field(
        default=30.0,
        gt=0,
        description="HTTP request timeout in seconds"
    )

    rate_window_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Length of the rolling rate limit window in seconds"
    )

    rate_max_calls: int = Field(
        default=10,
        gt=0,
        description="Number of calls the API permits within one window"
    )

    max_list_attempts: int = Field(
        default=50_000,
        gt=0,
        description="Maximum attempts for a single listing call before giving up"
    )

    cache_db_dir: str = Field(
        default="data/cache",
        description="Directory path for storing catalog cache CSV files"
    )

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore'
    )


# Singleton pattern - loaded once, cached forever
_app_config: Optional[AppConfig] = None


def get_app_config() -> AppConfig:
    """
    Get global application config instance (lazy-loaded singleton).

    Configuration is loaded from environment variables and .env file.
    Cached after first access for efficiency.

    Returns:
        Singleton AppConfig instance
    """
    global _app_config
    if _app_config is None:
        _app_config = AppConfig()
    return _app_config
