"""Pydantic models for parsing the config.yaml configuration file.

This module contains Pydantic models that correspond to the structure of config.yaml.
These models handle validation and type conversion of the YAML configuration data.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, computed_field


class CORSConfig(BaseModel):
    """CORS configuration for the application."""

    origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:3001"]
    )
    allow_credentials: bool = True
    allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    )
    allow_headers: list[str] = Field(default=["*"])


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="json", description="Log format")
    file: str = Field(default="", description="Log file path (empty disables the file sink)")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )


class DatabaseConfig(BaseModel):
    """Database configuration model."""

    url: str = Field(
        default="sqlite:///./data/absences.db",
        description="Database connection URL",
    )
    pool_size: int = Field(default=20, description="Connection pool size")
    max_overflow: int = Field(default=10, description="Maximum pool overflow")
    pool_timeout: int = Field(default=30, description="Pool timeout in seconds")
    pool_recycle: int = Field(default=1800, description="Pool recycle time in seconds")
    echo: bool = Field(default=False, description="Echo SQL statements")

    @computed_field
    @property
    def is_sqlite(self) -> bool:
        """Whether the configured URL targets SQLite."""
        return self.url.startswith("sqlite")

    @computed_field
    @property
    def safe_url(self) -> str:
        """Connection URL with any password masked, for logging."""
        from sqlalchemy.engine import make_url

        return make_url(self.url).render_as_string(hide_password=True)


class AbsenceRulesConfig(BaseModel):
    """Business rules applied to every absence declaration."""

    min_name_length: int = Field(default=2, description="Minimum first/last name length")
    max_name_length: int = Field(default=50, description="Maximum first/last name length")
    min_address_length: int = Field(default=10, description="Minimum address length")
    max_address_length: int = Field(default=500, description="Maximum address length")
    max_email_length: int = Field(default=100, description="Maximum email length")
    min_duration_days: int = Field(default=1, description="Minimum absence duration in days")
    max_duration_days: int = Field(default=30, description="Maximum absence duration in days")
    min_advance_hours: int = Field(
        default=48, description="Minimum lead time between declaration and start date"
    )
    phone_country_code: str = Field(
        default="33", description="Country calling code accepted in phone numbers"
    )
    recent_days: int = Field(
        default=7, description="Window in days for a declaration to count as recent"
    )


class PaginationConfig(BaseModel):
    """Defaults used when normalizing list queries."""

    default_page: int = Field(default=1, description="Page used when none is requested")
    default_limit: int = Field(default=10, description="Page size used when none is requested")
    max_limit: int = Field(default=100, description="Largest page size served")
    default_sort_by: str = Field(default="created_at", description="Default sort column")
    default_sort_order: Literal["asc", "desc"] = Field(
        default="desc", description="Default sort direction"
    )


class AbsencesConfig(BaseModel):
    """Absence declarations feature configuration."""

    rules: AbsenceRulesConfig = Field(
        default_factory=AbsenceRulesConfig, description="Validation rules"
    )
    pagination: PaginationConfig = Field(
        default_factory=PaginationConfig, description="List pagination defaults"
    )
    allow_delete: bool = Field(
        default=False, description="Expose deletion of declarations through the API"
    )


class AppConfig(BaseModel):
    """Application configuration model."""

    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )
    host: str = Field(default="localhost", description="Application host")
    port: int = Field(default=8000, description="Application port")
    cors: CORSConfig = Field(
        default_factory=CORSConfig, description="CORS configuration"
    )

    @property
    def base_url(self) -> str:
        """Construct the base URL from host and port."""
        scheme = "https" if self.environment == "production" else "http"
        return f"{scheme}://{self.host}:{self.port}"


class ConfigData(BaseModel):
    """Root configuration model that matches the config.yaml structure."""

    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    database: DatabaseConfig = Field(
        default_factory=DatabaseConfig, description="Database configuration"
    )
    app: AppConfig = Field(
        default_factory=AppConfig, description="Application configuration"
    )
    absences: AbsencesConfig = Field(
        default_factory=AbsencesConfig, description="Absence declarations configuration"
    )
