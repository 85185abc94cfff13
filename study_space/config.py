"""Configuration loader for the Study Space library."""

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from study_space.models.category import BookCategory


class AppInfo(BaseModel):
    """Application metadata."""

    name: str = "Study Space"
    version: str = "1.0.0"


class LibraryConfig(BaseModel):
    """Library screen configuration."""

    recents_limit: int = Field(default=5, ge=0)
    default_category: BookCategory = BookCategory.ALL


class StorefrontConfig(BaseModel):
    """External storefront shown in the web overlay."""

    url: str = "https://3f5487-9f.myshopify.com"


class StorageConfig(BaseModel):
    """Storage paths configuration."""

    sqlite_path: str = "./db/library.db"
    imports_dir: str = "./data/imports"


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class AppConfig(BaseModel):
    """Root application configuration."""

    app: AppInfo = Field(default_factory=AppInfo)
    library: LibraryConfig = Field(default_factory=LibraryConfig)
    storefront: StorefrontConfig = Field(default_factory=StorefrontConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_config(config_path: str | Path = "config.yaml") -> AppConfig:
    """Load configuration from YAML file and environment variables.

    Args:
        config_path: Path to the YAML configuration file.

    Returns:
        Fully populated AppConfig instance.
    """
    load_dotenv()

    yaml_data: dict = {}
    config_file = Path(config_path)
    if config_file.exists():
        with open(config_file) as f:
            yaml_data = yaml.safe_load(f) or {}

    config = AppConfig(**yaml_data)

    # Environment wins over the YAML file
    storefront_url = os.getenv("STUDY_SPACE_STOREFRONT_URL")
    if storefront_url is not None:
        config.storefront.url = storefront_url
    log_level = os.getenv("STUDY_SPACE_LOG_LEVEL")
    if log_level:
        config.logging.level = log_level.upper()

    return config
