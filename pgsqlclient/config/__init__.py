"""
Configuration management for the pgsql client.

This module provides centralized configuration handling with support for
libpq environment variables, .env files, and CLI overrides, using a
schema-driven approach with Pydantic for validation.
"""

from .schema import ConnectionSettings
from .loader import ConfigLoader, ConfigError

__all__ = ["ConfigError", "ConnectionSettings", "ConfigLoader"]
