"""
Schema-driven configuration loader.

This module provides a ConfigLoader that uses the connection settings schema
to automatically load, validate, and merge configuration from multiple sources.
"""

import logging
import os
import typing
from argparse import ArgumentParser, Namespace
from typing import Any, Dict, Mapping, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from .schema import ConnectionSettings


logger = logging.getLogger(__name__)

DOTENV_FILE = ".env.local"


class ConfigError(Exception):
    """Raised when configuration validation fails."""
    pass


def _clean(value: Any) -> Any:
    """Strip strings; an explicit empty string clears the value."""
    if isinstance(value, str):
        stripped = value.strip()
        return stripped if stripped else None
    return value


class ConfigLoader:
    """Loads and validates configuration using a schema-driven approach."""

    @staticmethod
    def load(
        schema: type[ConnectionSettings] = ConnectionSettings,
        cli_args: Optional[Namespace] = None,
        cli_overrides: Optional[Mapping[str, Any]] = None,
        dotenv_path: Optional[str] = None,
    ) -> ConnectionSettings:
        """
        Load configuration from all sources with precedence handling.

        Loading order (lowest to highest priority):
        1. Schema defaults
        2. .env.local file (if it exists; never overrides the OS environment)
        3. OS environment variables
        4. CLI arguments
        5. Direct overrides keyed by environment variable name

        Args:
            schema: The configuration schema class to use
            cli_args: Parsed CLI arguments (if available)
            cli_overrides: Mapping of environment variable name to value
            dotenv_path: Path of the dotenv file to read (default: .env.local)

        Returns:
            Validated configuration instance

        Raises:
            ConfigError: If configuration validation fails
        """
        config_dict: Dict[str, Any] = {}

        # Step 1: Load from .env.local file if available
        _load_from_dotenv_file(dotenv_path or DOTENV_FILE)

        # Step 2: Load from environment variables based on schema
        for field_name, field_info in schema.model_fields.items():
            env_var = field_info.json_schema_extra.get("env_var") if field_info.json_schema_extra else None
            if env_var:
                env_value = os.getenv(env_var)
                if env_value is not None and env_value.strip():
                    config_dict[field_name] = env_value.strip()

        # Step 3: Apply CLI arguments
        if cli_args:
            for field_name, field_info in schema.model_fields.items():
                cli_arg = field_info.json_schema_extra.get("cli_arg") if field_info.json_schema_extra else None
                if cli_arg and hasattr(cli_args, cli_arg):
                    cli_value = getattr(cli_args, cli_arg)
                    if cli_value is not None:
                        config_dict[field_name] = _clean(cli_value)

        # Step 4: Apply direct overrides
        if cli_overrides:
            for field_name, field_info in schema.model_fields.items():
                env_var = field_info.json_schema_extra.get("env_var") if field_info.json_schema_extra else None
                if env_var in cli_overrides and cli_overrides[env_var] is not None:
                    config_dict[field_name] = _clean(cli_overrides[env_var])

        # Step 5: Create and validate the configuration
        try:
            config = schema(**config_dict)
            logger.debug(f"Configuration loaded and validated successfully: {config.mask()}")
            return config
        except ValidationError as e:
            errors = []
            for error in e.errors():
                field = error["loc"][0]
                msg = error["msg"]
                field_info = schema.model_fields.get(field)
                env_var = field_info.json_schema_extra.get("env_var") if field_info and field_info.json_schema_extra else str(field).upper()
                errors.append(f"{env_var}: {msg}")

            error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {err}" for err in errors)
            raise ConfigError(error_msg) from e

    @staticmethod
    def generate_cli_parser(
        schema: type[ConnectionSettings] = ConnectionSettings,
        description: str = "Run one query against a PostgreSQL server",
    ) -> ArgumentParser:
        """
        Generate an ArgumentParser from the configuration schema.

        Args:
            schema: The configuration schema class
            description: Parser description

        Returns:
            Configured ArgumentParser
        """
        parser = ArgumentParser(
            prog="pgsql-client",
            description=description,
            epilog="""
Examples:
  pgsql-client --host localhost --dbname app --ping
  pgsql-client --host db.internal --user report -c "SELECT id, name FROM users"
  PGHOST=localhost pgsql-client -c "SHOW server_version"
            """,
        )

        # CLI-only arguments that don't map to config
        action = parser.add_mutually_exclusive_group(required=True)
        action.add_argument(
            "-c",
            "--command",
            help="SQL text to run; rows are printed tab-separated",
        )
        action.add_argument(
            "--ping",
            action="store_true",
            help="Only check whether the server accepts connections",
        )
        parser.add_argument(
            "--verbose",
            action="store_true",
            help="Enable verbose logging (DEBUG level)",
        )

        # Schema-based arguments
        for field_name, field_info in schema.model_fields.items():
            if not field_info.json_schema_extra:
                continue

            cli_arg = field_info.json_schema_extra.get("cli_arg")
            if not cli_arg:
                continue

            arg_name = f"--{cli_arg.replace('_', '-')}"

            kwargs = {
                "dest": cli_arg,
                "help": field_info.description or f"Override {field_info.json_schema_extra.get('env_var', field_name.upper())} env var",
                "default": None,  # Don't set schema defaults here - let the loader handle it
            }

            # Unwrap Optional[X] to X
            field_type = field_info.annotation
            if typing.get_origin(field_type) is typing.Union:
                non_none_args = [arg for arg in typing.get_args(field_type) if arg is not type(None)]
                if len(non_none_args) == 1:
                    field_type = non_none_args[0]

            if field_type == int:
                kwargs["type"] = int

            parser.add_argument(arg_name, **kwargs)

        return parser


def _load_from_dotenv_file(path: str) -> None:
    """Load values from a dotenv file without overriding the OS environment."""
    if os.path.exists(path):
        load_dotenv(path, override=False)
        logger.debug(f"Loaded configuration from {path} file")
    else:
        logger.debug(f"{path} file not found, skipping")
