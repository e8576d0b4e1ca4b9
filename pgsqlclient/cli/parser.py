"""
CLI argument parser module.

The parser is generated from the connection settings schema so every
configurable field gets a matching command-line flag.
"""

from ..config.loader import ConfigLoader


def create_argument_parser():
    """Create and configure the argument parser."""
    return ConfigLoader.generate_cli_parser()
