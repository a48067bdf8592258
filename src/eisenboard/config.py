"""Configuration management for eisenboard."""

import json
import os
from pathlib import Path
from typing import Any, Literal, Optional

from platformdirs import user_config_dir, user_data_dir
from pydantic import BaseModel, Field

from eisenboard.models.taxonomy import Bucket

DB_ENV_VAR = "EISENBOARD_DB"


class StorageConfig(BaseModel):
    """Storage configuration."""

    db_path: Optional[str] = Field(default=None)
    timeout: float = Field(default=30.0, gt=0)


class BoardConfig(BaseModel):
    """Board behaviour configuration."""

    # "reject" raises InvalidBucket on unknown tokens; "fallback" substitutes
    # fallback_bucket and logs a warning.
    unknown_bucket: Literal["reject", "fallback"] = Field(default="reject")
    fallback_bucket: Bucket = Field(default=Bucket.URGENT_IMPORTANT)
    show_completed: bool = Field(default=False)
    completed_limit: int = Field(default=100, ge=1)


class OutputConfig(BaseModel):
    """Output configuration."""

    format: str = Field(default="pretty")
    color: bool = Field(default=True)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")


class Config(BaseModel):
    """Main configuration."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    board: BoardConfig = Field(default_factory=BoardConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def fallback(self) -> Optional[Bucket]:
        """Bucket substituted for unknown tokens, or None when rejecting."""
        if self.board.unknown_bucket == "fallback":
            return self.board.fallback_bucket
        return None


class ConfigManager:
    """Manages eisenboard configuration."""

    def __init__(self, profile: str = "default"):
        self.profile = profile
        self.config_dir = Path(user_config_dir("eisenboard"))
        self.data_dir = Path(user_data_dir("eisenboard"))
        self.config_file = self.config_dir / f"{profile}.json"

        # Ensure directories exist
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.data_dir.mkdir(parents=True, exist_ok=True)

        self._config: Optional[Config] = None

    @property
    def config(self) -> Config:
        """Get the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> Config:
        """Load configuration from file."""
        if self.config_file.exists():
            try:
                with open(self.config_file, "r") as f:
                    data = json.load(f)
                return Config(**data)
            except Exception:
                # If config is corrupted, return default
                return Config()
        return Config()

    def save_config(self, config: Optional[Config] = None) -> None:
        """Save configuration to file."""
        if config is None:
            config = self.config

        with open(self.config_file, "w") as f:
            json.dump(config.model_dump(mode="json"), f, indent=2)

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key."""
        return self.get_from_config(self.config, key)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by dot-separated key.

        Raises:
            KeyError: If the key does not name a known setting
            pydantic.ValidationError: If the value is not valid for the setting
        """
        keys = key.split(".")
        config_dict = self.config.model_dump(mode="json")

        # Navigate to the nested dictionary
        current = config_dict
        for k in keys[:-1]:
            if not isinstance(current.get(k), dict):
                raise KeyError(key)
            current = current[k]
        if keys[-1] not in current:
            raise KeyError(key)

        current[keys[-1]] = value

        # Reload config from the modified dictionary
        self._config = Config(**config_dict)
        self.save_config()

    def reset(self, key: Optional[str] = None) -> None:
        """Reset configuration to defaults."""
        if key is None:
            self._config = Config()
        else:
            default_value = self.get_from_config(Config(), key)
            if isinstance(default_value, BaseModel):
                default_value = default_value.model_dump(mode="json")
            self.set(key, default_value)
        self.save_config()

    def get_from_config(self, config: Config, key: str) -> Any:
        """Get value from a config object using dot notation."""
        keys = key.split(".")
        value: Any = config
        for k in keys:
            if isinstance(value, BaseModel):
                value = getattr(value, k, None)
            else:
                return None
        return value

    def db_path(self) -> Path:
        """Resolve the database path (env var, then config, then data dir)."""
        override = os.environ.get(DB_ENV_VAR)
        if override:
            return Path(override).expanduser()
        if self.config.storage.db_path:
            return Path(self.config.storage.db_path).expanduser()
        return self.data_dir / "board.db"


# Global config manager instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager(profile: str = "default") -> ConfigManager:
    """Get or create the global config manager."""
    global _config_manager
    if _config_manager is None or _config_manager.profile != profile:
        _config_manager = ConfigManager(profile)
    return _config_manager
