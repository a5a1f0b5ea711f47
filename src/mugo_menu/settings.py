from pathlib import Path
from typing import Literal, Optional, List

from pydantic import AliasChoices, AnyHttpUrl, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class AdminSettings(BaseSettings):
    """Credentials checked by the save endpoint (MUGO_ADMIN_USER / MUGO_ADMIN_PASS)."""
    model_config = SettingsConfigDict(env_prefix="MUGO_ADMIN_", extra="ignore", populate_by_name=True)
    user: str = "admin"
    password: SecretStr = Field(
        default=SecretStr("mugo1234kf"),
        validation_alias=AliasChoices("MUGO_ADMIN_PASS", "MUGO_ADMIN_PASSWORD"),
    )


class RemoteRepoSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="MUGO_REMOTE_", extra="ignore")
    api_base_url: AnyHttpUrl = "https://api.github.com"
    owner: str = ""
    repo: str = ""
    branch: str = "main"
    path: str = "menu.json"
    token: Optional[SecretStr] = None
    commit_message: str = "Update menu.json"


class Settings(BaseSettings):

    # ---- Data roots ----
    project_root: Path = Path(".").resolve()
    data_root: Path = Path("data")
    menu_path: Path = data_root / "menu.json"
    download_dir: Path = data_root / "downloads"
    local_store_path: Path = data_root / "local_store.json"

    # ---- app/runtime ----
    env: Literal["dev", "staging", "prod"] = "dev"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    verify_ssl: bool = True

    # ---- site client (admin editor / CLIs) ----
    site_url: str = "http://127.0.0.1:3000"
    http_timeout: float = 10.0

    # ---- API server configuration ----
    api_host: str = "127.0.0.1"  # localhost for dev, 0.0.0.0 for docker/prod
    api_port: int = 3000
    api_reload: bool = False
    cors_origins: List[str] = ["*"]
    max_payload_bytes: int = 1024 * 1024

    model_config = SettingsConfigDict(
        env_file = ".env",
        env_prefix="APP_",      # APP_ENV, APP_LOG_LEVEL, etc.
        env_nested_delimiter='__',
        extra = "ignore"
    )

    # ---- integrations ----
    admin: AdminSettings = Field(default_factory=AdminSettings)
    remote: RemoteRepoSettings = Field(default_factory=RemoteRepoSettings)


def get_settings() -> Settings:
    """Singleton accessor to avoid reparsing .env on every import."""
    return Settings()
