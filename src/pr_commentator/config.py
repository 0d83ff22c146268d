"""Configuration management for pr-commentator."""

from pydantic_settings import BaseSettings

DEFAULT_API_URL = "https://api.github.com"


class Settings(BaseSettings):
    """Defaults loaded from environment variables, overridden by CLI options."""

    # GitHub
    token: str = ""
    api_url: str = DEFAULT_API_URL
    timeout_seconds: float = 30.0

    # Behaviour
    dry_run: bool = False  # Log create/edit calls instead of sending them

    # Logging
    log_level: str = "INFO"

    model_config = {"env_prefix": "PR_COMMENTATOR_"}


settings = Settings()
