"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_client import HttpClientConfig, RateLimit
from .logging import configure_logging
from .sigsci import SIGSCI_API_ROOT, WafApiConfig, get_waf_api_config

__all__ = [
    "SIGSCI_API_ROOT",
    "ConfigurationError",
    "HttpClientConfig",
    "MissingConfigurationError",
    "RateLimit",
    "WafApiConfig",
    "configure_logging",
    "get_waf_api_config",
    "optional_env_var",
    "require_env_vars",
]
