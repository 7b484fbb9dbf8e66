"""Application configuration using pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Genesys Cloud OAuth client (client credentials grant)
    genesyscloud_region: str = ""
    genesyscloud_oauthclient_id: str = ""
    genesyscloud_oauthclient_secret: str = ""

    # HTTP
    http_timeout_seconds: float = 30.0

    # Analytics jobs
    job_poll_delay_seconds: float = 3.0
    job_poll_max_attempts: int = 10
    heavy_job_poll_max_attempts: int = 20

    # Recordings are unarchived out-of-band, so they may not exist yet
    recordings_retry_limit: int = 5
    recordings_retry_delay_seconds: float = 10.0

    # Logging
    log_level: str = "INFO"

    # Arize Observability
    arize_space_id: str = ""
    arize_api_key: str = ""
    arize_project_name: str = "contact-analytics-mcp"

    def missing_credentials(self) -> list[str]:
        """Return one message per Genesys Cloud variable that is not set."""
        required = {
            "GENESYSCLOUD_REGION": self.genesyscloud_region,
            "GENESYSCLOUD_OAUTHCLIENT_ID": self.genesyscloud_oauthclient_id,
            "GENESYSCLOUD_OAUTHCLIENT_SECRET": self.genesyscloud_oauthclient_secret,
        }
        return [
            f"Missing environment variable: {name}"
            for name, value in required.items()
            if not value
        ]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
