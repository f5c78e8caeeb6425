from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    database_url: str = "sqlite:///./data/jobswipe.db"
    app_password: str = "changeme"
    secret_key: str = "dev-secret-key-change-in-production"
    session_expire_days: int = 30

    # Emails promoted to the admin role on login
    admin_emails: list[str] = []
    cors_origins: list[str] = ["http://localhost:3000"]

    log_level: str = "INFO"

    # Qualification oracle
    # Provider: "openai" or "skills" (offline heuristic)
    oracle_provider: str = "openai"
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"
    oracle_timeout_seconds: float = 15.0

    class Config:
        env_file = ".env"


@lru_cache
def get_settings() -> Settings:
    return Settings()
