"""Configuration management for s3-tidy."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    log_level: str = "WARNING"
    otel_enabled: bool = False
    otel_service_name: str = "s3-tidy"
    otel_exporter_endpoint: str = "http://localhost:4317"

    model_config = {
        "env_prefix": "S3_TIDY_",
        "case_sensitive": False,
    }


settings = Settings()
