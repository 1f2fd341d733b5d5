"""Configuration management for ProjectDesk."""

import json
import os
from pathlib import Path
from typing import Any, Optional

from platformdirs import user_config_dir, user_data_dir
from pydantic import BaseModel, Field

APP_NAME = "projectdesk"

# Environment variables take precedence over the profile file so that the
# server can be configured in a deployment without touching disk.
ENV_OVERRIDES = {
    "PROJECTDESK_AUTH_URL": "identity.url",
    "PROJECTDESK_ANON_KEY": "identity.anon_key",
    "PROJECTDESK_SERVICE_ROLE_KEY": "identity.service_role_key",
    "PROJECTDESK_DB_PATH": "server.db_path",
    "PROJECTDESK_API_URL": "api.endpoint",
}


class ServerConfig(BaseModel):
    """HTTP server configuration."""

    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8000)
    path_prefix: str = Field(default="/make-server")
    db_path: Optional[str] = Field(default=None)
    seed_sample_projects: bool = Field(default=True)


class IdentityConfig(BaseModel):
    """Identity provider configuration."""

    url: str = Field(default="")
    anon_key: str = Field(default="")
    service_role_key: str = Field(default="")
    timeout: int = Field(default=10)


class APIConfig(BaseModel):
    """API client configuration."""

    endpoint: str = Field(default="http://127.0.0.1:8000/make-server")
    timeout: int = Field(default=30)


class OutputConfig(BaseModel):
    """Output configuration."""

    format: str = Field(default="pretty")
    color: bool = Field(default=True)


class Config(BaseModel):
    """Main configuration."""

    server: ServerConfig = Field(default_factory=ServerConfig)
    identity: IdentityConfig = Field(default_factory=IdentityConfig)
    api: APIConfig = Field(default_factory=APIConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)


def _set_dotted(data: dict[str, Any], key: str, value: Any) -> None:
    keys = key.split(".")
    current = data
    for k in keys[:-1]:
        if k not in current or not isinstance(current[k], dict):
            current[k] = {}
        current = current[k]
    current[keys[-1]] = value


class ConfigManager:
    """Manages ProjectDesk configuration and stored credentials."""

    def __init__(
        self,
        profile: str = "default",
        config_dir: str | Path | None = None,
        data_dir: str | Path | None = None,
    ):
        self.profile = profile
        self.config_dir = Path(config_dir or user_config_dir(APP_NAME))
        self.data_dir = Path(data_dir or user_data_dir(APP_NAME))
        self.config_file = self.config_dir / f"{profile}.json"
        self.credentials_file = self.data_dir / f"{profile}.credentials.json"

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
        """Load configuration from file, then apply environment overrides."""
        data: dict[str, Any] = {}
        if self.config_file.exists():
            try:
                with open(self.config_file, "r") as f:
                    data = json.load(f)
            except (OSError, json.JSONDecodeError):
                # If config is corrupted, fall back to defaults
                data = {}

        for env_name, key in ENV_OVERRIDES.items():
            value = os.environ.get(env_name)
            if value:
                _set_dotted(data, key, value)

        return Config(**data)

    def save_config(self, config: Optional[Config] = None) -> None:
        """Save configuration to file."""
        if config is None:
            config = self.config

        with open(self.config_file, "w") as f:
            json.dump(config.model_dump(), f, indent=2)

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key."""
        return self.get_from_config(self.config, key)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by dot-separated key."""
        if not self._is_known_key(key):
            raise KeyError(f"Unknown configuration key: {key}")

        config_dict = self.config.model_dump()
        _set_dotted(config_dict, key, value)

        self._config = Config(**config_dict)
        self.save_config()

    def reset(self, key: Optional[str] = None) -> None:
        """Reset configuration to defaults."""
        if key is None:
            self._config = Config()
            self.save_config()
            return

        default_value = self.get_from_config(Config(), key)
        self.set(key, default_value)

    def get_from_config(self, config: Config, key: str) -> Any:
        """Get value from a config object using dot notation."""
        value: Any = config
        for k in key.split("."):
            if isinstance(value, BaseModel):
                value = getattr(value, k, None)
            else:
                return None
        return value

    def _is_known_key(self, key: str) -> bool:
        section, _, field = key.partition(".")
        section_model = Config.model_fields.get(section)
        if section_model is None or not field:
            return False
        return field in section_model.annotation.model_fields

    def save_credentials(self, token: str, refresh_token: Optional[str] = None) -> None:
        """Save authentication credentials."""
        credentials = {"token": token}
        if refresh_token:
            credentials["refresh_token"] = refresh_token

        with open(self.credentials_file, "w") as f:
            json.dump(credentials, f, indent=2)

        # Readable only by owner
        self.credentials_file.chmod(0o600)

    def load_credentials(self) -> Optional[dict[str, str]]:
        """Load authentication credentials."""
        if self.credentials_file.exists():
            try:
                with open(self.credentials_file, "r") as f:
                    return json.load(f)
            except (OSError, json.JSONDecodeError):
                return None
        return None

    def clear_credentials(self) -> None:
        """Clear authentication credentials."""
        if self.credentials_file.exists():
            self.credentials_file.unlink()


# Global config manager instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager(profile: str = "default") -> ConfigManager:
    """Get or create the global config manager."""
    global _config_manager
    if _config_manager is None or _config_manager.profile != profile:
        _config_manager = ConfigManager(profile)
    return _config_manager
