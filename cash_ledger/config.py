"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Network address the server binds to (env: SERVICE_ADDR_CASH)
    service_addr_cash: str = "[::1]:50051"

    # Persistence
    database_url: str = "sqlite:///./data/transactions.db"

    # Service
    service_name: str = "cash-ledger"
    log_level: str = "INFO"

    # Bounded handoff buffer for streamed bulk lookups
    bulk_stream_buffer_size: int = 16


settings = Settings()
