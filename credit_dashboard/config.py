"""Configuration management using Pydantic Settings"""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "credit-dashboard"
    log_level: str = "INFO"

    # External Services
    bureau_api_base: str = "http://localhost:8001"

    # HTTP Client
    http_timeout_seconds: float = 5.0

    # Sample datasets shipped with the package
    sample_data_dir: Path = Path(__file__).resolve().parent / "data"

    # Scoring
    bureau_weight: float = 0.4  # share of the final score taken from bureau factors


settings = Settings()
