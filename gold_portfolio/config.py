"""Application configuration via environment variables."""

from pathlib import Path
from pydantic_settings import BaseSettings

PROJECT_ROOT = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    database_url: str = f"sqlite:///{PROJECT_ROOT / 'gold_portfolio.db'}"
    log_level: str = "INFO"
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:5174"]  # admin + member SPAs
    api_prefix: str = "/api"

    # Auth
    access_token_secret: str = "change-me-access-secret"
    refresh_token_secret: str = "change-me-refresh-secret"
    jwt_algorithm: str = "HS256"
    access_token_expire_days: int = 30
    refresh_token_expire_days: int = 90
    jwt_issuer: str = "mithra-portfolio-tracker"
    jwt_audience: str = "mithra-users"
    password_reset_expire_minutes: int = 15

    # Email (SMTP). Sending is skipped when host/user/password are empty.
    smtp_host: str = ""
    smtp_port: int = 587
    smtp_user: str = ""
    smtp_password: str = ""
    smtp_use_tls: bool = True
    email_from_name: str = "Mithra Portfolio Tracker"
    email_from_address: str = ""
    app_url: str = "http://localhost:5174"  # member portal, used in email links
    company_name: str = "Mithra Portfolio Tracker"

    model_config = {"env_prefix": "GP_", "env_file": ".env"}


settings = Settings()
