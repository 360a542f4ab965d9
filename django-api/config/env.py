"""Project settings read from the environment and an optional .env file."""

from pathlib import Path
from typing import Annotated

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent.parent


class ProjectEnv(BaseSettings):
    """Deployment settings: secrets, hosts, database and log level."""

    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env", case_sensitive=False, extra="ignore"
    )

    django_secret_key: str = "insecure-dev-key-change-me"
    django_debug: bool = False
    django_allowed_hosts: Annotated[list[str], NoDecode] = ["localhost", "127.0.0.1"]

    database_engine: str = "sqlite3"
    database_name: str | None = None
    database_user: str = "rentals"
    database_password: str = ""
    database_host: str = "localhost"
    database_port: int = 5432
    database_conn_max_age: int = 60

    log_level: str = "INFO"

    @field_validator("django_allowed_hosts", mode="before")
    @classmethod
    def split_hosts(cls, value):
        if isinstance(value, str):
            return [host.strip() for host in value.split(",") if host.strip()]
        return value

    @field_validator("log_level")
    @classmethod
    def uppercase_level(cls, value: str) -> str:
        return value.upper()
