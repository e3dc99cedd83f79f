"""
Configuration module for the crediário (installment plan) service.

All configuration values are loaded from environment variables with sensible defaults.
See .env.example for all available configuration options.
"""
import os
from dataclasses import dataclass, field


def _get_float(key: str, default: float) -> float:
    """Get float from environment variable."""
    return float(os.getenv(key, default))


def _get_int(key: str, default: int) -> int:
    """Get int from environment variable."""
    return int(os.getenv(key, default))


def _get_str(key: str, default: str) -> str:
    """Get string from environment variable."""
    return os.getenv(key, default)


@dataclass
class PlanConfig:
    """Installment plan limits applied at the HTTP surface."""

    # The engine itself accepts any positive count
    max_installments: int = field(default_factory=lambda: _get_int("PLAN_MAX_INSTALLMENTS", 24))
    default_installments: int = field(default_factory=lambda: _get_int("PLAN_DEFAULT_INSTALLMENTS", 3))
    default_frequency: str = field(default_factory=lambda: _get_str("PLAN_DEFAULT_FREQUENCY", "monthly"))


@dataclass
class PostalCodeConfig:
    """Postal code (CEP) lookup client settings."""

    base_url: str = field(default_factory=lambda: _get_str("POSTAL_CODE_API_URL", "https://viacep.com.br"))
    connect_timeout: float = field(default_factory=lambda: _get_float("POSTAL_CODE_CONNECT_TIMEOUT", 2.0))
    read_timeout: float = field(default_factory=lambda: _get_float("POSTAL_CODE_READ_TIMEOUT", 5.0))
    max_attempts: int = field(default_factory=lambda: _get_int("POSTAL_CODE_MAX_ATTEMPTS", 2))


# Global config instances (lazy loaded)
_plan_config = None
_postal_code_config = None


def get_plan_config() -> PlanConfig:
    """Get installment plan configuration."""
    global _plan_config
    if _plan_config is None:
        _plan_config = PlanConfig()
    return _plan_config


def get_postal_code_config() -> PostalCodeConfig:
    """Get postal code lookup configuration."""
    global _postal_code_config
    if _postal_code_config is None:
        _postal_code_config = PostalCodeConfig()
    return _postal_code_config


def reload_config():
    """Force reload of all configuration from environment variables."""
    global _plan_config, _postal_code_config
    _plan_config = PlanConfig()
    _postal_code_config = PostalCodeConfig()
