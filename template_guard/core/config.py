"""Application configuration using Pydantic v2 Settings.

Centralized configuration that loads from environment variables
and provides type-safe access throughout the application.
"""

import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from template_guard.strategies.consistency.rules import (
    DEFAULT_PLACEHOLDER_ALIASES,
    DEFAULT_STANDARD_PARAMETERS,
    ConsistencyRules,
)

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings have sensible defaults and can be overridden via
    environment variables or a .env file. Mappings and lists are given
    as JSON, e.g. ``PLACEHOLDER_ALIASES='{"link": "baseUrl"}'``.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: str = Field(
        default="sqlite+aiosqlite:///./template_guard.db",
        description="Async SQLAlchemy URL of the template/content store.",
    )
    create_tables_on_startup: bool = Field(
        default=False,
        description="Create missing tables at startup (development only).",
    )

    # Consistency rules
    placeholder_aliases: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_PLACEHOLDER_ALIASES),
        description="Content-template name -> URL-template parameter carrying the same value.",
    )
    standard_parameters: list[str] = Field(
        default_factory=lambda: sorted(DEFAULT_STANDARD_PARAMETERS),
        description="Parameters populated out-of-band, never reported as unused.",
    )
    high_severity_threshold: int = Field(
        default=5,
        ge=0,
        description="Affected-record count above which a change is rated high.",
    )

    # Integrity scan cache (API boundary only)
    integrity_cache_ttl_seconds: int = Field(
        default=60,
        ge=0,
        description="How long the last integrity scan is served from cache. 0 disables caching.",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level: DEBUG, INFO, WARNING, ERROR.",
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Normalize log level to uppercase."""
        return v.upper()

    @field_validator("placeholder_aliases")
    @classmethod
    def validate_aliases(cls, v: dict[str, str]) -> dict[str, str]:
        """Strip alias names and reject empty or self-referencing entries."""
        aliases = {source.strip(): target.strip() for source, target in v.items()}
        for source, target in aliases.items():
            if not source or not target:
                raise ValueError("placeholder aliases must map a non-empty name to a non-empty name")
            if source == target:
                raise ValueError(f"placeholder alias maps '{source}' to itself")
        return aliases

    @field_validator("standard_parameters")
    @classmethod
    def strip_standard_parameters(cls, v: list[str]) -> list[str]:
        return sorted({name.strip() for name in v if name.strip()})

    def consistency_rules(self) -> ConsistencyRules:
        """Build the frozen rule tables handed to the analyzer."""
        return ConsistencyRules.from_tables(self.placeholder_aliases, self.standard_parameters)

    def configure_logging(self) -> None:
        """Configure global logging based on settings."""
        import structlog

        level = getattr(logging, self.log_level, logging.INFO)

        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.stdlib.PositionalArgumentsFormatter(),
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer(),
            ],
            wrapper_class=structlog.stdlib.BoundLogger,
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )

        logging.basicConfig(
            format="%(message)s",
            level=level,
        )

        logger.setLevel(level)


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the global Settings instance.

    Returns:
        The singleton Settings instance.
    """
    global _settings
    if _settings is None:
        _settings = Settings()
        _settings.configure_logging()
    return _settings
