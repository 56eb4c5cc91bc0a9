"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Apifetch, a product of Garudex Labs

Configuration management for Apifetch.

Handles loading and validation of configuration files.
"""

from apifetch.config.settings import (
    ApifetchConfig,
    ClientConfig,
    LoggingConfig,
    get_default_config,
    get_default_config_path,
    load_config,
)

__all__ = [
    "ApifetchConfig",
    "ClientConfig",
    "LoggingConfig",
    "get_default_config",
    "get_default_config_path",
    "load_config",
]
