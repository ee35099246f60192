"""Application configuration using pydantic-settings."""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables and config files."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # App Info
    app_name: str = "Site Admin API"
    app_version: str = "0.1.0"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8400
    workers: int = 1

    # Database
    data_save_folder: str = "./var"
    db_file: str = "siteadmin.db"

    @property
    def database_url(self) -> str:
        """SQLite database URL."""
        db_path = Path(self.data_save_folder) / self.db_file
        return f"sqlite+aiosqlite:///{db_path}"

    # JWT Authentication
    jwt_secret_key: str = Field(
        default="change-me-in-production-0f3b9c2a",
        alias="JWT_SECRET_KEY",
    )
    jwt_algorithm: str = "HS256"
    jwt_access_token_expire_minutes: int = 60 * 24  # 24 hours
    jwt_issuer: str = "https://localhost:8400/"
    jwt_audience: str = "https://localhost:8400/"
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)

    # Default admin account created on first start
    default_admin_username: str = "admin"
    default_admin_password: str = Field(default="admin", alias="DEFAULT_ADMIN_PASSWORD")

    # Pagination
    items_per_page: int = Field(default=25, ge=1)

    # Audit log
    logs_enabled: bool = Field(default=True, alias="LOGS_ENABLED")
    log_level: int = Field(default=4, ge=1, le=4, alias="LOG_LEVEL")
    anti_log_token: str = Field(default="", alias="ANTI_LOG_TOKEN")
    log_retention_days: int = Field(default=90, ge=0)

    # External log forwarding
    external_log_enabled: bool = Field(default=False, alias="EXTERNAL_LOG_ENABLED")
    external_log_url: str = Field(default="", alias="EXTERNAL_LOG_URL")
    external_log_token: str = Field(default="", alias="EXTERNAL_LOG_API_TOKEN")

    # Metrics exporter
    metrics_exporter_enabled: bool = Field(default=False, alias="METRICS_EXPORTER_ENABLED")
    metrics_exporter_allowed_ip: str = Field(default="127.0.0.1", alias="METRICS_EXPORTER_ALLOWED_IP")

    # Visitors
    visitor_online_seconds: int = 400
    user_agent_max_length: int = 200
    browser_list_path: str = "config/browser-list.yaml"
    geolocation_url: str = Field(
        default="",
        alias="GEOLOCATION_URL",
        description="IP geolocation endpoint, '{ip}' is replaced by the address",
    )
    geolocation_timeout: float = 3.0

    # Contact messages
    open_message_limit: int = 5
    message_max_length: int = 2000

    # CORS
    cors_origins: list[str] = ["*"]
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    @field_validator("external_log_url", "geolocation_url", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Remove trailing slash from service URLs."""
        if isinstance(v, str):
            return v.rstrip("/")
        return v


class BrowserList:
    """Browser name table loaded from YAML file (browser-list.yaml).

    The file maps a substring found in a user agent to a display name:

        Edg/: Edge
        OPR/: Opera
    """

    def __init__(self, config_path: str | None = None):
        self._entries: dict[str, str] = {}
        if config_path:
            self.load(config_path)

    def load(self, config_path: str) -> None:
        """Load browser table from YAML file."""
        path = Path(config_path)
        if path.exists():
            with open(path) as f:
                data: Any = yaml.safe_load(f) or {}
            if isinstance(data, dict):
                self._entries = {str(k): str(v) for k, v in data.items()}

    @property
    def entries(self) -> dict[str, str]:
        """Substring to display name mapping, in file order."""
        return dict(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


@lru_cache
def get_browser_list() -> BrowserList:
    """Get cached browser list instance."""
    settings = get_settings()
    return BrowserList(settings.browser_list_path)
