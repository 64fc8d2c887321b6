"""
Runtime Configuration Module

Provides configuration loading and management for votetree.
"""

from .runtime import (
    BallotConfig,
    CommitmentConfig,
    LoggingConfig,
    RuntimeConfig,
    TreeConfig,
    get_default_config,
    set_default_config,
)

__all__ = [
    "RuntimeConfig",
    "TreeConfig",
    "CommitmentConfig",
    "BallotConfig",
    "LoggingConfig",
    "get_default_config",
    "set_default_config",
]
