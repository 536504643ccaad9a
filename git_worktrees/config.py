"""Configuration handling for git-worktrees"""

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

import yaml

from git_worktrees.constants import DEFAULT_CONFIG_PATH, DEFAULT_WORKTREES_ROOT
from git_worktrees.exceptions import ConfigError
from git_worktrees.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class Config:
    """Configuration for git-worktrees with validation."""

    worktrees_root: Optional[str] = None  # None = fall back to the environment, then the default
    default_base: Optional[str] = None  # Base for create when none is given

    verbose: bool = False
    debug: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_worktrees_root()
        self._validate_default_base()
        self._validate_flags()

    def _validate_worktrees_root(self):
        """Validate worktrees_root is a non-empty string when set."""
        if self.worktrees_root is None:
            return
        if not isinstance(self.worktrees_root, str) or not self.worktrees_root.strip():
            raise ConfigError(f"worktrees_root must be a non-empty path, got {self.worktrees_root!r}")
        self.worktrees_root = self.worktrees_root.strip()

    def _validate_default_base(self):
        if self.default_base is None:
            return
        if not isinstance(self.default_base, str) or not self.default_base.strip():
            raise ConfigError(f"default_base must be a non-empty ref name, got {self.default_base!r}")
        self.default_base = self.default_base.strip()

    def _validate_flags(self):
        for name in ("verbose", "debug"):
            if not isinstance(getattr(self, name), bool):
                raise ConfigError(f"{name} must be true or false, got {getattr(self, name)!r}")

    def to_dict(self) -> dict:
        return {field.name: getattr(self, field.name) for field in fields(self)}

    def get(self, key: str, default=None):
        """Get config value by key."""
        return getattr(self, key, default)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary, ignoring unknown keys."""
        known_fields = {field.name for field in fields(cls)}
        unknown = set(config_dict) - known_fields
        if unknown:
            logger.debug(f"Ignoring unknown config keys: {sorted(unknown)}")

        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)

    @classmethod
    def load(cls, path: Optional[str] = None) -> "Config":
        """
        Load configuration from a YAML file.

        A missing file yields the defaults.

        Args:
            path: Config file path (defaults to ~/.worktrees/config.yml)

        Raises:
            ConfigError: if the file cannot be read or parsed, or holds invalid values
        """
        config_path = Path(os.path.expanduser(path or DEFAULT_CONFIG_PATH))
        if not config_path.exists():
            logger.debug(f"No config file at {config_path}")
            return cls()

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Cannot read {config_path}: {e}") from e

        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError(f"{config_path} must contain a mapping, got {type(data).__name__}")

        logger.debug(f"Loaded config from {config_path}")
        return cls.from_dict(data)


def resolve_worktrees_root(
    flag: Optional[str] = None,
    env: Optional[str] = None,
    config: Optional[Config] = None,
) -> str:
    """
    Pick the worktrees root.

    Precedence: explicit flag, then the WORKTREES_ROOT value, then the config
    file, then ~/.worktrees.

    Returns:
        Absolute, user-expanded path
    """
    for candidate in (flag, env, config.worktrees_root if config else None):
        if candidate:
            root = candidate
            break
    else:
        root = DEFAULT_WORKTREES_ROOT

    return os.path.abspath(os.path.expanduser(root))
