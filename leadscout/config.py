from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator, model_validator
from typing import Optional, Literal
from loguru import logger
import sys


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )

    environment: Literal["development", "staging", "production"] = Field(
        default="development", description="Application environment"
    )

    database_host: str = Field(default="localhost", description="Database host")
    database_port: int = Field(
        default=5432, ge=1, le=65535, description="Database port"
    )
    database_name: str = Field(
        default="leadscout", min_length=1, description="Database name"
    )
    database_user: str = Field(default="postgres", min_length=1, description="Database username")
    database_password: Optional[str] = Field(
        default="postgres", description="Database password"
    )

    database_pool_min: int = Field(
        default=1, ge=1, le=100, description="Minimum database pool size"
    )
    database_pool_max: int = Field(
        default=10, ge=1, le=100, description="Maximum database pool size"
    )

    # Vendor API keys
    serpapi_key: Optional[str] = Field(default=None, description="SerpAPI key")
    contactout_api_key: Optional[str] = Field(
        default=None, description="ContactOut API token"
    )
    rocketreach_api_key: Optional[str] = Field(
        default=None, description="RocketReach API key"
    )

    search_result_limit: int = Field(
        default=10, ge=1, le=100, description="Results requested per profile search"
    )
    company_result_limit: int = Field(
        default=5, ge=1, le=100, description="Results requested per company page search"
    )
    http_timeout: float = Field(
        default=30.0, gt=0, le=300, description="Timeout in seconds for vendor HTTP calls"
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    log_format: str = Field(
        default="{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{function}:{line} - {message}",
        description="Log format string",
    )
    log_rotation: str = Field(default="100 MB", description="Log file rotation size")
    log_retention: str = Field(default="10 days", description="Log retention period")
    log_file: Optional[str] = Field(default=None, description="Log file path")
    log_json: bool = Field(default=False, description="Emit JSON lines to stdout")

    app_name: str = Field(default="LeadScout", description="Application name")
    cors_origins: list[str] = Field(default=["*"], description="CORS allowed origins")

    # Shared secret used to verify bearer tokens (HS256)
    jwt_secret: str = Field(
        default="dev-secret-change-in-production",
        description="Secret key for JWT token verification"
    )

    @field_validator("database_port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        if not 1 <= v <= 65535:
            raise ValueError("Port must be between 1 and 65535")
        return v

    @model_validator(mode="after")
    def validate_pool_sizes(self) -> "Settings":
        """Ensure max pool size is greater than min pool size"""
        if self.database_pool_max < self.database_pool_min:
            raise ValueError(
                "database_pool_max must be greater than or equal to database_pool_min"
            )
        return self

    @property
    def database_url(self) -> str:
        """Postgres DSN for asyncpg"""
        password = f":{self.database_password}" if self.database_password else ""
        return f"postgresql://{self.database_user}{password}@{self.database_host}:{self.database_port}/{self.database_name}"

    def configure_logging(self) -> None:
        """Configure loguru based on settings"""
        from leadscout.core.logging import json_formatter

        logger.remove()

        if self.log_json:
            logger.add(sys.stdout, format=json_formatter, level=self.log_level)
        else:
            logger.add(
                sys.stderr, format=self.log_format, level=self.log_level, colorize=True
            )

        if self.log_file:
            logger.add(
                self.log_file,
                format=self.log_format,
                level=self.log_level,
                rotation=self.log_rotation,
                retention=self.log_retention,
                compression="zip",
            )

        logger.info(f"Logging configured for {self.environment} environment")


def get_settings() -> Settings:
    """Get cached settings instance"""
    settings = Settings()
    settings.configure_logging()
    return settings


settings = get_settings()
