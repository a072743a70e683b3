"""Configuration and environment for the ECS scraper."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Scraper settings loaded from environment and .env."""

    model_config = SettingsConfigDict(
        env_prefix="ECSDOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ECS
    cluster: str = Field(default="", description="ECS cluster to scrape metrics from")
    aws_region: str | None = Field(
        default=None,
        description="AWS region; falls back to the boto3 default chain if unset",
    )
    aws_endpoint_url: str | None = Field(
        default=None,
        description="Custom ECS endpoint (e.g. http://localhost:4566 for LocalStack)",
    )
    aws_max_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Total attempts per ECS call, handled by the boto3 standard retry mode",
    )

    # Metrics sink
    statsd_address: str = Field(
        default="127.0.0.1:8125",
        description="DogStatsD address as host:port or unix:///path/to/socket",
    )

    # Scheduling
    interval_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Seconds between scrape passes",
    )


def get_settings() -> Settings:
    """Return validated settings instance."""
    return Settings()
