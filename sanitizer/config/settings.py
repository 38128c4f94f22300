from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Sanitizer configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    # Fail closed aborts the whole document when one page cannot be sanitized.
    sanitizer_fail_closed: bool = False
    sanitizer_max_workers: int = 1

    national_id_locale: str = "sa"
    custom_term_matching: str = "case_insensitive"
