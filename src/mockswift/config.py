"""Configuration loading and Pydantic models for MockSwift."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from mockswift.metadata import DEFAULT_SYSTEM_HEADERS


class ServerConfig(BaseModel):
    """Server binding and runtime configuration."""

    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"
    log_format: str = "text"
    shutdown_timeout: int = 5


class AuthConfig(BaseModel):
    """The seeded test account and token checking."""

    enabled: bool = True
    account: str = "test"
    password: str = "test"


class MetadataConfig(BaseModel):
    """Which request headers are persisted as system metadata."""

    system_headers: list[str] = Field(default_factory=lambda: sorted(DEFAULT_SYSTEM_HEADERS))


class ObservabilityConfig(BaseModel):
    """Metrics configuration."""

    metrics: bool = False


class MockSwiftConfig(BaseModel):
    """Top-level MockSwift configuration."""

    server: ServerConfig = Field(default_factory=ServerConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    metadata: MetadataConfig = Field(default_factory=MetadataConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


def _parse_server(data: dict[str, Any] | None) -> dict[str, Any]:
    """Parse the server section from YAML data into a dict for Pydantic."""
    if data is None:
        return {}
    result: dict[str, Any] = {
        "host": data.get("host", "0.0.0.0"),
        "port": data.get("port", 8080),
        "shutdown_timeout": data.get("shutdown_timeout", 5),
    }
    logging_section = data.get("logging")
    if isinstance(logging_section, dict):
        result["log_level"] = logging_section.get("level", "INFO")
        result["log_format"] = logging_section.get("format", "text")
    return result


def _parse_auth(data: dict[str, Any] | None) -> dict[str, Any]:
    """Parse the auth section from YAML data."""
    if data is None:
        return {}
    return {
        "enabled": data.get("enabled", True),
        "account": data.get("account", "test"),
        "password": data.get("password", "test"),
    }


def _parse_metadata(data: dict[str, Any] | None) -> dict[str, Any]:
    """Parse the metadata section from YAML data."""
    if data is None:
        return {}
    headers = data.get("system_headers")
    if headers is None:
        return {}
    return {"system_headers": [str(h) for h in headers]}


def _parse_observability(data: dict[str, Any] | None) -> dict[str, Any]:
    """Parse the observability section from YAML data."""
    if data is None:
        return {}
    return {"metrics": data.get("metrics", False)}


def load_config(path: Path) -> MockSwiftConfig:
    """Load a MockSwiftConfig from a YAML file.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        A fully populated MockSwiftConfig validated by Pydantic.

    Raises:
        FileNotFoundError: If the config file does not exist.
        yaml.YAMLError: If the file is not valid YAML.
    """
    with open(path, "r") as fh:
        raw: dict[str, Any] = yaml.safe_load(fh) or {}

    return MockSwiftConfig(
        server=ServerConfig(**_parse_server(raw.get("server"))),
        auth=AuthConfig(**_parse_auth(raw.get("auth"))),
        metadata=MetadataConfig(**_parse_metadata(raw.get("metadata"))),
        observability=ObservabilityConfig(**_parse_observability(raw.get("observability"))),
    )
