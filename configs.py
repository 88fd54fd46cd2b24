"""Application settings loaded from environment variables.

Defines all environment-driven configuration used by the app.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Typed configuration model for the application."""

    # Marketplace endpoints
    ATOM_BASE_URL: str = "https://www.atom.com"
    ATOM_API_URL: str = "https://api.atom.com/v2"
    ATOM_PORTFOLIO_ID: str = "2924605"

    # Outbound request behaviour
    ATOM_REQUEST_TIMEOUT: float = 10.0
    ATOM_BATCH_MAX_WORKERS: int = 6
    ATOM_BATCH_DELAY_MS: int = 120

    # Cache-Control directive advertised on price responses
    CACHE_S_MAXAGE: int = 300
    CACHE_STALE_WHILE_REVALIDATE: int = 3600

    # API parameters
    ROOT_PATH_BACKEND: str = ""
    ALLOWED_ORIGINS: list[str] = ["*"]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def cache_control(self) -> str:
        """Header value for cacheable price responses."""
        return (
            f"s-maxage={self.CACHE_S_MAXAGE}, "
            f"stale-while-revalidate={self.CACHE_STALE_WHILE_REVALIDATE}"
        )


settings = Settings()
