from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    server_host: str = "0.0.0.0"
    server_port: int = 3000
    # "development" relaxes CORS to any origin
    environment: str = "production"
    # Token lifetime (minutes)
    token_ttl_minutes: int = 15
    # Background sweep of expired tokens (minutes)
    token_sweep_interval_minutes: int = 10
    token_length: int = 8
    # Outgoing mail; email_from falls back to smtp_username when empty
    email_from: str = ""
    email_from_name: str = "Authentication Service"
    # SMTP takes precedence over SendGrid when both are configured
    smtp_host: str = ""
    smtp_port: int = 465
    smtp_username: str = ""
    smtp_password: str = ""
    smtp_use_tls: bool = True
    smtp_timeout_seconds: int = 10
    sendgrid_api_key: str = ""
    cors_allowed_origins: List[str] = [
        "http://localhost",
        "http://localhost:3000",
        "http://localhost:5173",
        "http://localhost:5500",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
        "http://127.0.0.1:5500",
    ]

    @property
    def sender_address(self) -> str:
        """Address mail is sent from; the SMTP account when EMAIL_FROM is unset."""
        return self.email_from or self.smtp_username

    @property
    def token_sweep_interval_seconds(self) -> int:
        return self.token_sweep_interval_minutes * 60

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"

