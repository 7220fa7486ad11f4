"""
Runtime Configuration Module

Provides configuration loading and management for the distributor.
"""

from .runtime import (
    DistributionConfig,
    HttpConfig,
    OutputConfig,
    RuntimeConfig,
    SourceConfig,
    get_default_config,
    get_default_config_template,
    load_config,
    set_default_config,
)

__all__ = [
    "DistributionConfig",
    "HttpConfig",
    "OutputConfig",
    "RuntimeConfig",
    "SourceConfig",
    "get_default_config",
    "get_default_config_template",
    "load_config",
    "set_default_config",
]
