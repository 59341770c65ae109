"""Scan configuration for SPMShield."""

import os
from dataclasses import dataclass, field
from typing import List, Optional

from .utils.logging import get_logger

logger = get_logger("spm_shield.config")

ENV_PREFIX = "SPM_SHIELD_"


@dataclass
class ScanConfig:
    """Configuration for analyzing Swift Package Manager files."""

    swift_package_manager_enabled: bool = True
    swift_package_resolved_enabled: bool = True
    max_file_size_mb: int = 5
    ignore_patterns: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.max_file_size_mb <= 0:
            raise ValueError("max_file_size_mb must be positive")

    @property
    def max_file_size_bytes(self) -> int:
        """Size limit in bytes for files handed to the pattern matchers."""
        return self.max_file_size_mb * 1024 * 1024

    def is_enabled(self, parser_type: str) -> bool:
        """Check whether analyzers of a parser type should run.

        Args:
            parser_type: Parser type, 'manifest' or 'resolved'

        Returns:
            True if the analyzer is enabled
        """
        if parser_type == "manifest":
            return self.swift_package_manager_enabled
        if parser_type == "resolved":
            return self.swift_package_resolved_enabled
        return False


def _get_env_bool(key: str, default: bool) -> bool:
    value = os.environ.get(key, "").strip().lower()
    return value in ("true", "1", "yes", "on") if value else default


def _get_env_int(key: str, default: Optional[int] = None) -> Optional[int]:
    try:
        return int(os.environ[key]) if key in os.environ else default
    except ValueError:
        logger.warning(f"Invalid integer value for {key}, using default")
        return default


def load_config() -> ScanConfig:
    """Build the default configuration and apply environment overrides.

    Recognized variables:
        SPM_SHIELD_SWIFT_ENABLED: enable the Package.swift analyzer
        SPM_SHIELD_RESOLVED_ENABLED: enable the Package.resolved analyzer
        SPM_SHIELD_MAX_FILE_SIZE_MB: largest file that will be analyzed

    Returns:
        Scan configuration
    """
    config = ScanConfig()

    config.swift_package_manager_enabled = _get_env_bool(
        f"{ENV_PREFIX}SWIFT_ENABLED", config.swift_package_manager_enabled
    )
    config.swift_package_resolved_enabled = _get_env_bool(
        f"{ENV_PREFIX}RESOLVED_ENABLED", config.swift_package_resolved_enabled
    )

    max_file_size = _get_env_int(f"{ENV_PREFIX}MAX_FILE_SIZE_MB")
    if max_file_size is not None:
        if max_file_size > 0:
            config.max_file_size_mb = max_file_size
        else:
            logger.warning(f"{ENV_PREFIX}MAX_FILE_SIZE_MB must be positive, using default")

    return config
