"""
Runtime Configuration

Central configuration for the commitment tree, ballot and logging.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from votetree.schemas.errors import ConfigException

load_dotenv()


ENV_PREFIX = "VOTETREE_"

DEFAULT_BALLOT_OPTIONS = ["option-a", "option-b"]


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes")


@dataclass
class TreeConfig:
    """Configuration for the commitment tree."""
    # Raise on duplicate insertion instead of ignoring it
    strict_duplicates: bool = False


@dataclass
class CommitmentConfig:
    """Configuration for commitment construction."""
    # Never fall back to the wall-clock salt; generate a random one
    require_explicit_salt: bool = False
    salt_bytes: int = 16


@dataclass
class BallotConfig:
    """Configuration for the ballot box."""
    options: list[str] = field(default_factory=lambda: list(DEFAULT_BALLOT_OPTIONS))


@dataclass
class LoggingConfig:
    """Configuration for logging."""
    level: str = "INFO"
    file: Optional[str] = None


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables
    - YAML file
    - Programmatic construction
    """
    tree: TreeConfig = field(default_factory=TreeConfig)
    commitment: CommitmentConfig = field(default_factory=CommitmentConfig)
    ballot: BallotConfig = field(default_factory=BallotConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        This is the SINGLE source of truth for all env var reading.

        Supported variables:
        - VOTETREE_STRICT_DUPLICATES: Reject duplicate commitments (true/false)
        - VOTETREE_REQUIRE_EXPLICIT_SALT: Never use the time-based salt (true/false)
        - VOTETREE_BALLOT_OPTIONS: Comma-separated vote options
        - VOTETREE_LOG_LEVEL: Log level
        - VOTETREE_LOG_FILE: Log file path
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}STRICT_DUPLICATES"):
            overrides.setdefault("tree", {})["strict_duplicates"] = _env_flag(
                f"{ENV_PREFIX}STRICT_DUPLICATES"
            )

        if os.getenv(f"{ENV_PREFIX}REQUIRE_EXPLICIT_SALT"):
            overrides.setdefault("commitment", {})["require_explicit_salt"] = _env_flag(
                f"{ENV_PREFIX}REQUIRE_EXPLICIT_SALT"
            )

        if os.getenv(f"{ENV_PREFIX}BALLOT_OPTIONS"):
            options = [
                opt.strip()
                for opt in os.getenv(f"{ENV_PREFIX}BALLOT_OPTIONS", "").split(",")
                if opt.strip()
            ]
            overrides.setdefault("ballot", {})["options"] = options

        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides.setdefault("logging", {})["level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides.setdefault("logging", {})["file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigException(
                message=f"Config file must contain a mapping: {path}",
                details={"path": str(path), "type": type(data).__name__},
            )
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        try:
            tree = TreeConfig(**data.get("tree", {})) if data.get("tree") else TreeConfig()
            commitment = (
                CommitmentConfig(**data["commitment"])
                if data.get("commitment") else CommitmentConfig()
            )
            ballot = BallotConfig(**data["ballot"]) if data.get("ballot") else BallotConfig()
            logging_conf = (
                LoggingConfig(**data["logging"]) if data.get("logging") else LoggingConfig()
            )
        except TypeError as e:
            raise ConfigException(
                message=f"Unknown configuration key: {e}",
            ) from e

        if not ballot.options:
            raise ConfigException(message="Ballot must offer at least one option")

        return cls(
            tree=tree,
            commitment=commitment,
            ballot=ballot,
            logging=logging_conf,
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)
        for section, values in overrides.items():
            target = getattr(new_config, section)
            for key, value in values.items():
                setattr(target, key, value)

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "tree": {
                "strict_duplicates": self.tree.strict_duplicates,
            },
            "commitment": {
                "require_explicit_salt": self.commitment.require_explicit_salt,
                "salt_bytes": self.commitment.salt_bytes,
            },
            "ballot": {
                "options": list(self.ballot.options),
            },
            "logging": {
                "level": self.logging.level,
                "file": self.logging.file,
            },
            "extra": self.extra,
        }


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: Optional[RuntimeConfig]) -> None:
    """Set (or with None, reset) the default runtime configuration."""
    global _default_config
    _default_config = config
