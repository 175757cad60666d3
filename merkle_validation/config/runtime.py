"""
Runtime Configuration

Central configuration for digest selection, proof limits and logging.
"""

from __future__ import annotations

import copy
import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

load_dotenv()


# A tree over 2**32 leaves yields 32-step proofs; the default proof limit
# leaves room for callers that raise max_leaf_count.
DEFAULT_MAX_PROOF_LENGTH = 64
DEFAULT_MAX_LEAF_COUNT = 2**32


@dataclass
class MerkleConfig:
    """
    Runtime configuration for the Merkle library.

    Can be loaded from:
    - Environment variables
    - YAML file
    - Programmatic construction
    """
    algorithm: str = "sha256"
    max_proof_length: int = DEFAULT_MAX_PROOF_LENGTH
    max_leaf_count: int = DEFAULT_MAX_LEAF_COUNT
    log_level: str = "WARNING"
    extra: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        from merkle_validation.crypto.hashing import SUPPORTED_ALGORITHMS

        if self.algorithm not in SUPPORTED_ALGORITHMS:
            raise ValueError(
                f"Unsupported hash algorithm: {self.algorithm!r}. "
                f"Supported algorithms: {sorted(SUPPORTED_ALGORITHMS)}"
            )
        if self.max_proof_length < 0:
            raise ValueError("max_proof_length must be non-negative")
        if self.max_leaf_count < 1:
            raise ValueError("max_leaf_count must be at least 1")

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - MERKLE_HASH_ALGORITHM: Digest algorithm name
        - MERKLE_MAX_PROOF_LENGTH: Longest proof accepted by the verifier
        - MERKLE_MAX_LEAF_COUNT: Largest leaf set accepted by the builder
        - MERKLE_LOG_LEVEL: Log level for setup_logging()
        """
        overrides: dict[str, Any] = {}

        if os.getenv("MERKLE_HASH_ALGORITHM"):
            overrides["algorithm"] = os.getenv("MERKLE_HASH_ALGORITHM", "").strip().lower()
        if os.getenv("MERKLE_MAX_PROOF_LENGTH"):
            overrides["max_proof_length"] = int(os.getenv("MERKLE_MAX_PROOF_LENGTH", ""))
        if os.getenv("MERKLE_MAX_LEAF_COUNT"):
            overrides["max_leaf_count"] = int(os.getenv("MERKLE_MAX_LEAF_COUNT", ""))
        if os.getenv("MERKLE_LOG_LEVEL"):
            overrides["log_level"] = os.getenv("MERKLE_LOG_LEVEL", "").upper()

        return overrides

    @classmethod
    def from_env(cls) -> "MerkleConfig":
        """Load configuration purely from environment variables."""
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "MerkleConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MerkleConfig":
        """Load configuration from a dictionary (supports partial data)."""
        # Accept either a flat mapping or one nested under "merkle"
        section = data.get("merkle", data)
        known = {"algorithm", "max_proof_length", "max_leaf_count", "log_level"}
        kwargs = {k: v for k, v in section.items() if k in known}
        return cls(**kwargs, extra=dict(data.get("extra", {})))

    def with_env_overrides(self) -> "MerkleConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)
        for key, value in overrides.items():
            setattr(new_config, key, value)
        new_config.__post_init__()
        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "algorithm": self.algorithm,
            "max_proof_length": self.max_proof_length,
            "max_leaf_count": self.max_leaf_count,
            "log_level": self.log_level,
            "extra": self.extra,
        }


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure stdlib logging for applications embedding the library."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


# Global default configuration
_default_config: Optional[MerkleConfig] = None


def get_default_config() -> MerkleConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = MerkleConfig.from_env()
    return _default_config


def set_default_config(config: MerkleConfig | None) -> None:
    """Set the default runtime configuration (None resets to env on next use)."""
    global _default_config
    _default_config = config
