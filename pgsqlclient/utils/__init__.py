"""
Utilities module for the pgsql client.

This module provides shared utility functions organized by concern:
- Logging utilities for consistent logging setup and query records
"""

# Logging utilities
from .logging import setup_logging, log_query_event

__all__ = [
    "setup_logging",
    "log_query_event",
]
