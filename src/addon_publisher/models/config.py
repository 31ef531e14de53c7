"""Configuration model for addon publisher."""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ..exceptions import ConfigurationError

CATALOG_PATH_ENV = "ADDON_PUBLISHER_CATALOG"
DISCORD_WEBHOOK_URL_ENV = "DISCORD_WEBHOOK_URL"
DISCORD_USERNAME_ENV = "DISCORD_USERNAME"
TWITCH_ENDPOINT_URL_ENV = "TWITCH_ENDPOINT_URL"
TWITCH_CHANNEL_ENV = "TWITCH_CHANNEL"


def default_catalog_path() -> Path:
    """Location of the catalog file when nothing else is configured."""
    override = os.environ.get(CATALOG_PATH_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".local" / "share" / "addon-publisher" / "addons.json"


@dataclass
class StorageConfig:
    """Configuration for the catalog store."""
    catalog_path: Path = field(default_factory=default_catalog_path)


@dataclass
class DiscordConfig:
    """Configuration for the Discord webhook platform."""
    webhook_url: Optional[str] = None
    username: Optional[str] = None

    @classmethod
    def from_environment(cls) -> "DiscordConfig":
        """Read DISCORD_WEBHOOK_URL and DISCORD_USERNAME."""
        return cls(
            webhook_url=os.environ.get(DISCORD_WEBHOOK_URL_ENV),
            username=os.environ.get(DISCORD_USERNAME_ENV),
        )


@dataclass
class TwitchConfig:
    """Configuration for the Twitch chat endpoint platform."""
    endpoint_url: Optional[str] = None
    channel: Optional[str] = None

    @classmethod
    def from_environment(cls) -> "TwitchConfig":
        """Read TWITCH_ENDPOINT_URL and TWITCH_CHANNEL."""
        return cls(
            endpoint_url=os.environ.get(TWITCH_ENDPOINT_URL_ENV),
            channel=os.environ.get(TWITCH_CHANNEL_ENV),
        )


@dataclass
class PublishingConfig:
    """Configuration for all publishing platforms."""
    discord: DiscordConfig = field(default_factory=DiscordConfig)
    twitch: TwitchConfig = field(default_factory=TwitchConfig)
    timeout_seconds: float = 30.0

    def __post_init__(self):
        if self.timeout_seconds <= 0:
            raise ConfigurationError(f"timeout_seconds must be positive, got {self.timeout_seconds}")


@dataclass
class Config:
    """Main configuration model."""
    storage: StorageConfig = field(default_factory=StorageConfig)
    publishing: PublishingConfig = field(default_factory=PublishingConfig)

    @classmethod
    def default(cls) -> "Config":
        """Create a default configuration."""
        return cls()


def _dataclass_to_dict(obj):
    """Convert dataclass to dict recursively."""
    from dataclasses import is_dataclass, asdict
    if is_dataclass(obj):
        result = {}
        for key, value in asdict(obj).items():
            result[key] = _dataclass_to_dict(value)
        return result
    elif isinstance(obj, Path):
        return str(obj)
    elif isinstance(obj, dict):
        return {key: _dataclass_to_dict(value) for key, value in obj.items()}
    elif isinstance(obj, list):
        return [_dataclass_to_dict(item) for item in obj]
    else:
        return obj


def _dict_to_dataclass(data, dataclass_type):
    """Convert dict to dataclass recursively."""
    from dataclasses import is_dataclass, fields
    if not is_dataclass(dataclass_type):
        return data
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Expected an object for {dataclass_type.__name__}, got {type(data).__name__}"
        )

    field_types = {f.name: f.type for f in fields(dataclass_type)}

    kwargs = {}
    for field_name, field_type in field_types.items():
        if field_name in data:
            if isinstance(field_type, type) and is_dataclass(field_type):
                kwargs[field_name] = _dict_to_dataclass(data[field_name], field_type)
            elif field_type is Path:
                kwargs[field_name] = Path(data[field_name]).expanduser()
            elif field_type is float:
                value = data[field_name]
                if isinstance(value, bool) or not isinstance(value, (int, float)):
                    raise ConfigurationError(
                        f"{dataclass_type.__name__}.{field_name} must be a number, got {value!r}"
                    )
                kwargs[field_name] = float(value)
            else:
                kwargs[field_name] = data[field_name]

    return dataclass_type(**kwargs)


def load_config(config_path: Path) -> Config:
    """Load configuration from JSON file."""
    try:
        with open(config_path, 'r') as f:
            config_data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Cannot read configuration {config_path}: {e}") from e

    return _dict_to_dataclass(config_data, Config)


def save_config(config: Config, config_path: Path) -> None:
    """Save configuration to JSON file."""
    config_dict = _dataclass_to_dict(config)

    config_path = Path(config_path)
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, 'w') as f:
        json.dump(config_dict, f, indent=2)


def create_default_config(config_path: Path) -> None:
    """Create a default configuration file."""
    save_config(Config.default(), config_path)
