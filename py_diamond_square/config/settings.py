"""Configuration management."""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Terrain generation settings pulled from environment variables."""

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    log_format: str = Field(default="json", description="Logging format (plain or json)")

    # Generation
    max_degree: int = Field(
        default=30, ge=1, description="Largest accepted grid degree (size 2^n + 1)"
    )
    default_workers: int = Field(
        default=1, ge=1, description="Threads used per square/diamond step"
    )
    default_seed: Optional[str] = Field(
        default=None, description="Seed for the default error model"
    )
    partition_size: int = Field(
        default=4096, ge=1, description="Coordinates handled by one parallel task"
    )

    # Normalization
    default_steps: int = Field(
        default=10, ge=1, description="Upper bound of the normalized index range"
    )

    class Config:
        env_prefix = "DSQ_"
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
