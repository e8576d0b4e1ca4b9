"""
Configuration schema definition using Pydantic.

This module defines the declarative connection settings schema. Each field
names the libpq environment variable and the CLI argument that can set it.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from ..models import ConnectionOptions


class ConnectionSettings(BaseModel):
    """
    Declarative connection configuration.

    This is the single source of truth for everything the CLI and
    ConfigLoader can set. Environment variable names follow libpq's own.
    """

    host: str = Field(
        ...,
        min_length=1,
        description="Database server host name or socket directory",
        json_schema_extra={
            "env_var": "PGHOST",
            "cli_arg": "host",
        }
    )

    port: int = Field(
        5432,
        ge=1,
        le=65535,
        description="Database server port (default: 5432)",
        json_schema_extra={
            "env_var": "PGPORT",
            "cli_arg": "port",
        }
    )

    user: Optional[str] = Field(
        None,
        description="Role to connect as",
        json_schema_extra={
            "env_var": "PGUSER",
            "cli_arg": "user",
        }
    )

    password: Optional[str] = Field(
        None,
        description="Password for the role",
        json_schema_extra={
            "env_var": "PGPASSWORD",
            "cli_arg": "password",
            "sensitive": True,
        }
    )

    database: Optional[str] = Field(
        None,
        description="Database name",
        json_schema_extra={
            "env_var": "PGDATABASE",
            "cli_arg": "dbname",
        }
    )

    connect_timeout: Optional[int] = Field(
        None,
        ge=0,
        description="Seconds to wait while connecting (0 waits forever)",
        json_schema_extra={
            "env_var": "PGCONNECT_TIMEOUT",
            "cli_arg": "connect_timeout",
        }
    )

    client_encoding: Optional[str] = Field(
        None,
        description="Client encoding applied after connecting",
        json_schema_extra={
            "env_var": "PGCLIENTENCODING",
            "cli_arg": "client_encoding",
        }
    )

    @field_validator("host", "user", "database", "client_encoding", mode="before")
    @classmethod
    def strip_text(cls, v: Any) -> Any:
        """Strip surrounding whitespace; treat blank values as unset."""
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    model_config = {
        "validate_assignment": True,
        "extra": "forbid"
    }

    def to_options(self) -> ConnectionOptions:
        """Convert the settings into ConnectionOptions for the builder."""
        return ConnectionOptions(
            host=self.host,
            port=self.port,
            user=self.user,
            password=self.password,
            database=self.database,
            connect_timeout=(
                str(self.connect_timeout) if self.connect_timeout is not None else None
            ),
        )

    def mask(self) -> dict:
        """
        Return masked version for safe logging (hides sensitive values).

        Returns:
            Dictionary with sensitive values masked
        """
        values = self.model_dump()
        for name, field_info in type(self).model_fields.items():
            extra = field_info.json_schema_extra or {}
            if extra.get("sensitive") and values.get(name) is not None:
                values[name] = "***"
        return values
