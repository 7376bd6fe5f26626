"""
User configuration for the scenario manager, stored as TOML:

    empty_epsilon_path = "/opt/EmptyEpsilon"
    registry = "https://registry.esm.latehours.net/v1"

Both fields are optional; unset fields are left out of the document.
"""
import os
import logging
import tomllib
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

import tomli_w

from esm.errors import ConfigError, ConfigNotFoundError

logger = logging.getLogger("esm.config")

DEFAULT_REGISTRY = "https://registry.esm.latehours.net/v1"


@dataclass
class Config:
    empty_epsilon_path: Optional[str] = None
    registry: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Config":
        values = {}
        for key in cls.__dataclass_fields__:
            value = d.get(key)
            if value is not None and not isinstance(value, str):
                raise ConfigError(f"Invalid value for '{key}' in config",
                                  f"expected a string, got {type(value).__name__}")
            values[key] = value
        return cls(**values)


class ConfigStore:
    """Read and write the config document at a fixed path."""

    def __init__(self, path: str):
        self.path = path

    def load(self) -> Config:
        """
        Read the config document.

        Raises:
            ConfigNotFoundError: if there is no document yet
            ConfigError: if the document cannot be read or parsed
        """
        try:
            with open(self.path, "rb") as f:
                data = tomllib.load(f)
        except FileNotFoundError as e:
            raise ConfigNotFoundError(f"Config file not found: {self.path}") from e
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Could not parse config file {self.path}", str(e)) from e
        except OSError as e:
            raise ConfigError(f"Could not read config file {self.path}", str(e)) from e
        logger.debug(f"Loaded config from {self.path}")
        return Config.from_dict(data)

    def create_default(self) -> Config:
        """Write a fresh default config, replacing any existing document."""
        config = Config(empty_epsilon_path=None, registry=DEFAULT_REGISTRY)
        self.save(config)
        logger.info(f"Created config file: {self.path}")
        return config

    def save(self, config: Config) -> None:
        """Serialize the whole record, replacing the previous document."""
        content = tomli_w.dumps(config.to_dict())
        tmp_path = self.path + ".tmp"
        try:
            os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                f.write(content)
            os.replace(tmp_path, self.path)
        except OSError as e:
            if os.path.exists(tmp_path):
                try:
                    os.remove(tmp_path)
                except OSError:
                    logger.warning(f"Could not remove temporary config file {tmp_path}")
            raise ConfigError(f"Could not write config file {self.path}", str(e)) from e
        logger.debug(f"Wrote config to {self.path}")
