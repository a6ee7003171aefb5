"""
Configuration management for XtreamTV.

Handles loading, validation, and access to application configuration.
"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field

# Global configuration instance
_config: Optional["XtreamTVConfig"] = None


class ServerConfig(BaseModel):
    """HTTP API server configuration."""
    host: str = "0.0.0.0"
    port: int = 8420
    debug: bool = False
    log_level: str = "INFO"
    base_url: str = "http://localhost:8420"


class ProviderConfig(BaseModel):
    """Xtream Codes provider configuration.

    When server_url, username and password are all set the application
    logs in on startup unless a persisted session already exists.
    """
    server_url: str = ""
    username: str = ""
    password: str = ""
    timeout: float = 30.0  # Seconds, applied to every request
    user_agent: str = "XtreamTV/1.0"

    @property
    def has_credentials(self) -> bool:
        return bool(self.server_url and self.username and self.password)


class CacheConfig(BaseModel):
    """Catalog cache configuration."""
    ttl_hours: float = 24.0
    key_prefix: str = "huluxtream"
    rewarm_on_clear: bool = True

    @property
    def ttl_ms(self) -> int:
        """TTL in epoch milliseconds."""
        return int(self.ttl_hours * 60 * 60 * 1000)


class StorageConfig(BaseModel):
    """Persistent key-value store configuration."""
    backend: str = "sqlite"  # sqlite, memory
    url: str = "sqlite:///./xtreamtv.db"
    echo: bool = False


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: str = "INFO"
    file: str = "logs/xtreamtv.log"
    max_size: str = "10MB"
    backup_count: int = 5
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class XtreamTVConfig(BaseModel):
    """Main XtreamTV configuration."""
    server: ServerConfig = Field(default_factory=ServerConfig)
    provider: ProviderConfig = Field(default_factory=ProviderConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_config(config_path: Optional[str] = None) -> XtreamTVConfig:
    """
    Load configuration from file.

    Args:
        config_path: Path to config file. Defaults to config.yaml in project root.

    Returns:
        Loaded and validated configuration.
    """
    global _config

    if config_path is None:
        # Look for config.yaml in current directory or project root
        possible_paths = [
            Path("config.yaml"),
            Path(__file__).parent.parent / "config.yaml",
        ]
        for path in possible_paths:
            if path.exists():
                config_path = str(path)
                break

    config_data: dict[str, Any] = {}

    if config_path and Path(config_path).exists():
        with open(config_path) as f:
            config_data = yaml.safe_load(f) or {}

    # Apply environment variable overrides
    env_overrides = _get_env_overrides()
    _deep_merge(config_data, env_overrides)

    _config = XtreamTVConfig(**config_data)
    return _config


def get_config() -> XtreamTVConfig:
    """
    Get the current configuration.

    Returns:
        Current configuration (loads default if not yet loaded).
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config() -> XtreamTVConfig:
    """
    Reload configuration from disk.

    Returns:
        Freshly loaded configuration.
    """
    global _config
    _config = None
    return load_config()


def _get_env_overrides() -> dict[str, Any]:
    """Get configuration overrides from environment variables."""
    overrides: dict[str, Any] = {}

    # Map of environment variables to config paths
    env_map = {
        "XTREAMTV_HOST": ("server", "host"),
        "XTREAMTV_PORT": ("server", "port"),
        "XTREAMTV_DEBUG": ("server", "debug"),
        "XTREAMTV_SERVER_URL": ("provider", "server_url"),
        "XTREAMTV_USERNAME": ("provider", "username"),
        "XTREAMTV_PASSWORD": ("provider", "password"),
        "XTREAMTV_STORAGE_URL": ("storage", "url"),
        "XTREAMTV_CACHE_TTL_HOURS": ("cache", "ttl_hours"),
        "XTREAMTV_LOG_LEVEL": ("logging", "level"),
    }

    # Credentials stay strings even when they look numeric
    raw_strings = {"XTREAMTV_USERNAME", "XTREAMTV_PASSWORD", "XTREAMTV_SERVER_URL"}

    for env_var, path in env_map.items():
        value = os.environ.get(env_var)
        if value is not None:
            parsed = value if env_var in raw_strings else _parse_env_value(value)
            _set_nested(overrides, path, parsed)

    return overrides


def _parse_env_value(value: str) -> Any:
    """Parse environment variable value to appropriate type."""
    # Boolean
    if value.lower() in ("true", "yes"):
        return True
    if value.lower() in ("false", "no"):
        return False

    # Integer
    try:
        return int(value)
    except ValueError:
        pass

    # Float
    try:
        return float(value)
    except ValueError:
        pass

    return value


def _set_nested(d: dict[str, Any], path: tuple[str, ...], value: Any) -> None:
    """Set a nested dictionary value from a path tuple."""
    for key in path[:-1]:
        d = d.setdefault(key, {})
    d[path[-1]] = value


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> None:
    """Deep merge override into base dictionary."""
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value


class _ConfigProxy:
    """
    Proxy object that provides lazy access to configuration.

    Allows modules to import `config` directly and access it like:
        from xtreamtv.config import config
        config.cache.ttl_hours
    """

    def __getattr__(self, name: str) -> Any:
        return getattr(get_config(), name)

    def __repr__(self) -> str:
        return f"<ConfigProxy for {get_config()}>"


config = _ConfigProxy()
