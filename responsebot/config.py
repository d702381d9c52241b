from __future__ import annotations
import os
import yaml
from pathlib import Path
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from responsebot.services.responses.models.match_mode import MatchMode


class ConfigError(Exception):
    """Raised when the configuration file is missing or invalid."""


class BotSettings(BaseModel):
    """Validated bot settings. camelCase keys from older JSON configs are accepted."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    token: Optional[str] = Field(default=None, description="Discord bot token")
    client_id: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("client_id", "clientId")
    )
    prefix: str = Field(default="!", description="Command prefix")
    match_mode: MatchMode = Field(
        default=MatchMode.EXACT, validation_alias=AliasChoices("match_mode", "matchMode")
    )
    log_level: str = Field(
        default="info", validation_alias=AliasChoices("log_level", "logLevel")
    )
    storage: str = Field(
        default="data",
        description="Local directory path or MongoDB connection string",
    )
    mongo_db_name: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("mongo_db_name", "mongoDbName")
    )
    log_dir: str = Field(
        default="logs", validation_alias=AliasChoices("log_dir", "logDir")
    )

    @field_validator("prefix")
    @classmethod
    def prefix_not_blank(cls, value: str) -> str:
        if not value or value.isspace():
            raise ValueError("prefix must not be blank")
        return value

    @field_validator("storage")
    @classmethod
    def storage_not_blank(cls, value: str) -> str:
        if not str(value).strip():
            raise ValueError("storage is not configured")
        return str(value)

    @field_validator("client_id", mode="before")
    @classmethod
    def client_id_as_str(cls, value):
        return None if value is None else str(value)

    @field_validator("log_level")
    @classmethod
    def known_log_level(cls, value: str) -> str:
        if value.lower() not in ("debug", "info", "warn", "warning", "error"):
            raise ValueError(f"unknown log level {value!r}")
        return value.lower()


class Config:
    def __init__(self, path: Optional[str] = None):
        # Load config.yaml from project root by default
        if path is not None:
            config_path = Path(path)
        else:
            config_path = Path(__file__).parent.parent / "config.yaml"

        if config_path.exists():
            try:
                data = yaml.safe_load(config_path.read_text()) or {}
            except (yaml.YAMLError, OSError) as e:
                raise ConfigError(f"Could not read {config_path}: {e}") from e
        elif path is not None:
            raise ConfigError(f"Config file not found: {config_path}")
        else:
            data = {}

        if not isinstance(data, dict):
            raise ConfigError(f"Config file {config_path} must contain a mapping")

        try:
            self.settings = BotSettings.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration in {config_path}: {e}") from e

        self.path = config_path

    @property
    def token(self) -> Optional[str]:
        return self.settings.token or os.environ.get("DISCORD_TOKEN")

    @property
    def prefix(self) -> str:
        return self.settings.prefix

    @property
    def match_mode(self) -> MatchMode:
        return self.settings.match_mode

    @property
    def log_level(self) -> str:
        return self.settings.log_level

    @property
    def storage(self) -> str:
        return self.settings.storage

    @property
    def mongo_db_name(self) -> Optional[str]:
        return self.settings.mongo_db_name

    @property
    def log_dir(self) -> str:
        return self.settings.log_dir
