"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use MANGEN_ prefix (e.g., MANGEN_DEBUG_MODE=true).

Settings can also be loaded from a .env file in the project root.
"""

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use MANGEN_ prefix. List values are given as JSON.

    Examples:
        MANGEN_DOCS_ROOT=/src/dovecot-docs
        MANGEN_MAN_PATHS='["docs/core/man/*.[0-9].md", "docs/extra/*.[0-9].md"]'
        MANGEN_PANDOC_PATH=/opt/pandoc/bin/pandoc
        MANGEN_DEBUG_MODE=true
    """

    model_config = SettingsConfigDict(
        env_prefix="MANGEN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Manifest configuration
    docs_root: str = Field(
        default=".",
        description="Documentation base directory; manifest globs and git run relative to it",
    )

    man_paths: List[str] = Field(
        default=["docs/core/man/*.[0-9].md"],
        description="Glob patterns naming the man page sources",
    )

    # Title block configuration
    project_label: str = Field(
        default="Dovecot",
        description="Project label shown in the man page title line",
    )

    # Converter configuration
    pandoc_path: str = Field(
        default="pandoc",
        description="Path or name of the pandoc executable",
    )

    max_concurrent: int = Field(
        default=8,
        ge=0,
        description="Maximum number of concurrent pandoc processes (0 = unbounded)",
    )

    # Include configuration
    include_max_depth: int = Field(
        default=32,
        ge=1,
        description="Maximum nesting depth of @include directives",
    )

    debug_mode: bool = Field(
        default=False,
        description="Enable debug output (same as --debug)",
    )


# Singleton instance - import this in your code
appsettings = AppSettings()
