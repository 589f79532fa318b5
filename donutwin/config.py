"""Application configuration using Pydantic Settings."""

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Only the service layer reads these; engine functions take every
    game parameter explicitly so several variants can run side by side.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False
    )

    # Crash
    crash_house_edge: float = 0.01
    crash_base: int = 100
    crash_max_point: int = 1_000_000
    crash_epsilon: float = 0.0

    # Mines
    mines_grid_size: int = 25
    mines_default_count: int = 5
    mines_house_edge: float = 0.03

    # Credits
    starting_balance: int = 1000

    # Application
    app_env: str = "dev"
    app_version: str = "1"
    log_level: str = "INFO"

    # CORS
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000"

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",")]


# Global settings instance
settings = Settings()
