"""Configuration handling for sprout"""

import json
import tomllib
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import List, Optional

from sprout.constants import DEFAULT_BRANCH_PREFIX
from sprout.exceptions import ConfigError, UnknownKeyError
from sprout.logging_config import get_logger
from sprout.utils.files import write_text_atomic

logger = get_logger(__name__)


class ConfigKey(Enum):
    """Keys accepted by ``sprout config get/set``."""
    BRANCH_PREFIX = "branch_prefix"
    COPY_PATHS = "copy_paths"

    @classmethod
    def parse(cls, key: str) -> "ConfigKey":
        """Translate a command-line key into a ConfigKey.

        Raises:
            UnknownKeyError: If the key is not one of the known options
        """
        try:
            return cls(key.strip().replace("-", "_"))
        except ValueError:
            raise UnknownKeyError(key) from None


@dataclass
class Config:
    """User configuration for sprout.

    Fields left as None are absent from the config file and fall back to
    their defaults.
    """

    branch_prefix: Optional[str] = None
    copy_paths: Optional[List[str]] = field(default=None)

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_branch_prefix()
        self._validate_copy_paths()

    def _validate_branch_prefix(self):
        """Validate branch_prefix is a string."""
        if self.branch_prefix is not None and not isinstance(self.branch_prefix, str):
            raise ConfigError(
                f"branch_prefix must be a string, got {type(self.branch_prefix).__name__}"
            )

    def _validate_copy_paths(self):
        """Validate copy_paths is a list of strings; an empty list means absent."""
        if self.copy_paths is None:
            return
        if not isinstance(self.copy_paths, list) or not all(
            isinstance(item, str) for item in self.copy_paths
        ):
            raise ConfigError("copy_paths must be a list of strings")
        if not self.copy_paths:
            self.copy_paths = None

    @property
    def effective_branch_prefix(self) -> str:
        """Prefix used for new branches."""
        if self.branch_prefix is None:
            return DEFAULT_BRANCH_PREFIX
        return self.branch_prefix

    @property
    def seed_paths(self) -> List[str]:
        """Paths copied into every new worktree."""
        return list(self.copy_paths or [])

    def get_value(self, key: ConfigKey) -> str:
        """Render a stored value the way ``config get`` prints it."""
        if key is ConfigKey.BRANCH_PREFIX:
            return self.branch_prefix or ""
        if key is ConfigKey.COPY_PATHS:
            return ",".join(self.copy_paths or [])
        raise UnknownKeyError(key.value)

    def with_value(self, key: ConfigKey, value: str) -> "Config":
        """Return a copy of the config with one key set from its string form."""
        if key is ConfigKey.BRANCH_PREFIX:
            return replace(self, branch_prefix=value)
        if key is ConfigKey.COPY_PATHS:
            paths = [item.strip() for item in value.split(",") if item.strip()]
            return replace(self, copy_paths=paths or None)
        raise UnknownKeyError(key.value)

    def to_dict(self) -> dict:
        """Convert config to a dictionary holding only the keys that are set."""
        data = {}
        if self.branch_prefix is not None:
            data[ConfigKey.BRANCH_PREFIX.value] = self.branch_prefix
        if self.copy_paths:
            data[ConfigKey.COPY_PATHS.value] = list(self.copy_paths)
        return data

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary, ignoring unknown keys."""
        known_fields = {key.value for key in ConfigKey}
        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)


def dump_toml(config: Config) -> str:
    """Serialize a config as a TOML document.

    JSON string and array syntax is valid TOML for the escapes json.dumps
    emits, so values are quoted with it. DEL is the one control character
    JSON leaves raw and TOML rejects.
    """
    lines = ["# sprout configuration"]
    for key, value in config.to_dict().items():
        quoted = json.dumps(value, ensure_ascii=False).replace("\x7f", "\\u007f")
        lines.append(f"{key} = {quoted}")
    return "\n".join(lines) + "\n"


class ConfigStore:
    """Loads and saves the user configuration file."""

    def __init__(self, config_path: Path):
        """Initialize the store.

        Args:
            config_path: Location of config.toml
        """
        self.config_path = config_path

    def load(self) -> Config:
        """Load the configuration, returning defaults when the file is absent.

        Raises:
            ConfigError: If the file is not valid TOML or has wrongly typed values
        """
        if not self.config_path.exists():
            logger.debug(f"No config file at {self.config_path}, using defaults")
            return Config()

        try:
            with open(self.config_path, 'rb') as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML in {self.config_path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Cannot read {self.config_path}: {e}") from e

        config = Config.from_dict(data)
        logger.debug(f"Loaded config from {self.config_path}: {config.to_dict()}")
        return config

    def save(self, config: Config) -> None:
        """Write the configuration, creating the parent directory if needed."""
        try:
            write_text_atomic(self.config_path, dump_toml(config))
        except OSError as e:
            raise ConfigError(f"Cannot write {self.config_path}: {e}") from e
        logger.info(f"Saved config to {self.config_path}")

    def get(self, key: ConfigKey) -> str:
        """Read one key in its command-line form."""
        return self.load().get_value(key)

    def set(self, key: ConfigKey, value: str) -> Config:
        """Update one key from its command-line form and persist the result."""
        config = self.load().with_value(key, value)
        self.save(config)
        return config
