"""
Runtime Configuration Module

Provides configuration loading and management for the Merkle library.
"""

from .runtime import (
    MerkleConfig,
    get_default_config,
    set_default_config,
    setup_logging,
)

__all__ = [
    "MerkleConfig",
    "get_default_config",
    "set_default_config",
    "setup_logging",
]
