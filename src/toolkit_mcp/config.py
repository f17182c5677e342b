"""
Server configuration for mcp-toolkit-server.

Supports configuration via:
1. Environment variables (highest priority)
2. TOML config file (toolkit-mcp.toml)
3. Default values (lowest priority)

Environment variables:
- MCP_MODE: Provider mode (mock, production, hybrid). Default: mock
- MCP_SERVER_NAME: Server name advertised to clients
- MCP_SERVER_VERSION: Server version advertised to clients
- BRAVE_API_KEY: Brave Search API key (production web search)
- OPENWEATHERMAP_API_KEY: OpenWeatherMap API key (production weather)
- OPENAI_API_KEY / WEATHER_API_KEY: Accepted and reported, not used by any provider
- MCP_MAX_CONCURRENT: Maximum concurrently executing tool calls (default: 5)
- MCP_TOOL_TIMEOUT_MS: Per-call timeout in milliseconds, 0 disables (default: 30000)
- MCP_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
- MCP_STRUCTURED_LOGGING: JSON log lines when true (default: true)
- MCP_CONFIG_FILE: Path to TOML config file

Example toolkit-mcp.toml:

    [server]
    mode = "production"
    max_concurrent = 10
    tool_timeout_ms = 15000

    [providers]
    brave_api_key = "..."

    [logging]
    level = "DEBUG"
    structured = false
"""

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from importlib.metadata import version as get_package_version, PackageNotFoundError
from pathlib import Path
from typing import Any, Dict, Optional

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # Python < 3.11 fallback

from toolkit_mcp.core.logging_config import configure_logging

logger = logging.getLogger(__name__)

DEFAULT_SERVER_NAME = "mcp-toolkit-server"
DEFAULT_MAX_CONCURRENT = 5
DEFAULT_TOOL_TIMEOUT_MS = 30000
DEFAULT_CONFIG_FILES = ("toolkit-mcp.toml", ".toolkit-mcp.toml")


def _get_version() -> str:
    """Get package version from metadata (single source of truth: pyproject.toml)."""
    try:
        return get_package_version("mcp-toolkit-server")
    except PackageNotFoundError:
        return "0.1.0"  # Fallback for dev without install


_PACKAGE_VERSION = _get_version()


class ServerMode(str, Enum):
    """Provider binding mode.

    Values:
        MOCK: All capabilities use deterministic offline providers
        PRODUCTION: Live providers where an API key is configured
        HYBRID: Reserved for mixed deployments; binds like MOCK
    """

    MOCK = "mock"
    PRODUCTION = "production"
    HYBRID = "hybrid"


def _parse_mode(value: Any) -> ServerMode:
    normalized = str(value).strip().lower()
    try:
        return ServerMode(normalized)
    except ValueError:
        logger.warning(
            "Invalid server mode '%s'. Falling back to 'mock'. Valid options: %s",
            value,
            ", ".join(m.value for m in ServerMode),
        )
        return ServerMode.MOCK


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"true", "1", "yes", "on"}


def _parse_int(value: Any, default: int, name: str) -> int:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        logger.warning("Invalid integer for %s: %r. Using default %s", name, value, default)
        return default


@dataclass
class ServerConfig:
    """Server configuration with support for env vars and TOML overrides."""

    # Provider mode
    mode: ServerMode = ServerMode.MOCK

    # Server identity
    server_name: str = DEFAULT_SERVER_NAME
    server_version: str = field(default_factory=lambda: _PACKAGE_VERSION)

    # Provider credentials
    brave_api_key: Optional[str] = None
    openweathermap_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None
    weather_api_key: Optional[str] = None

    # Dispatch limits
    max_concurrent_tools: int = DEFAULT_MAX_CONCURRENT
    tool_timeout_ms: int = DEFAULT_TOOL_TIMEOUT_MS

    # Logging configuration
    log_level: str = "INFO"
    structured_logging: bool = True

    @classmethod
    def from_env(cls, config_file: Optional[str] = None) -> "ServerConfig":
        """
        Create configuration from environment variables and optional TOML file.

        Priority (highest to lowest):
        1. Environment variables
        2. TOML config file
        3. Default values
        """
        config = cls()

        toml_path = config_file or os.environ.get("MCP_CONFIG_FILE")
        if toml_path:
            config._load_toml(Path(toml_path))
        else:
            for default_path in DEFAULT_CONFIG_FILES:
                if Path(default_path).exists():
                    config._load_toml(Path(default_path))
                    break

        config._load_env()
        config._validate()

        return config

    def _load_toml(self, path: Path) -> None:
        """Load configuration from TOML file."""
        if not path.exists():
            logger.warning(f"Config file not found: {path}")
            return

        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.error(f"Error loading config file {path}: {e}")
            return

        if "server" in data:
            srv = data["server"]
            if "mode" in srv:
                self.mode = _parse_mode(srv["mode"])
            if "name" in srv:
                self.server_name = str(srv["name"])
            if "version" in srv:
                self.server_version = str(srv["version"])
            if "max_concurrent" in srv:
                self.max_concurrent_tools = _parse_int(
                    srv["max_concurrent"], self.max_concurrent_tools, "server.max_concurrent"
                )
            if "tool_timeout_ms" in srv:
                self.tool_timeout_ms = _parse_int(
                    srv["tool_timeout_ms"], self.tool_timeout_ms, "server.tool_timeout_ms"
                )

        if "providers" in data:
            prov = data["providers"]
            if "brave_api_key" in prov:
                self.brave_api_key = prov["brave_api_key"] or None
            if "openweathermap_api_key" in prov:
                self.openweathermap_api_key = prov["openweathermap_api_key"] or None
            if "openai_api_key" in prov:
                self.openai_api_key = prov["openai_api_key"] or None
            if "weather_api_key" in prov:
                self.weather_api_key = prov["weather_api_key"] or None

        if "logging" in data:
            log = data["logging"]
            if "level" in log:
                self.log_level = str(log["level"]).upper()
            if "structured" in log:
                self.structured_logging = _parse_bool(log["structured"])

    def _load_env(self) -> None:
        """Load configuration from environment variables."""
        if mode := os.environ.get("MCP_MODE"):
            self.mode = _parse_mode(mode)

        if name := os.environ.get("MCP_SERVER_NAME"):
            self.server_name = name
        if server_version := os.environ.get("MCP_SERVER_VERSION"):
            self.server_version = server_version

        if brave := os.environ.get("BRAVE_API_KEY"):
            self.brave_api_key = brave
        if owm := os.environ.get("OPENWEATHERMAP_API_KEY"):
            self.openweathermap_api_key = owm
        if openai := os.environ.get("OPENAI_API_KEY"):
            self.openai_api_key = openai
        if weather := os.environ.get("WEATHER_API_KEY"):
            self.weather_api_key = weather

        if max_concurrent := os.environ.get("MCP_MAX_CONCURRENT"):
            self.max_concurrent_tools = _parse_int(
                max_concurrent, self.max_concurrent_tools, "MCP_MAX_CONCURRENT"
            )
        if timeout_ms := os.environ.get("MCP_TOOL_TIMEOUT_MS"):
            self.tool_timeout_ms = _parse_int(
                timeout_ms, self.tool_timeout_ms, "MCP_TOOL_TIMEOUT_MS"
            )

        if level := os.environ.get("MCP_LOG_LEVEL"):
            self.log_level = level.upper()
        if structured := os.environ.get("MCP_STRUCTURED_LOGGING"):
            self.structured_logging = _parse_bool(structured)

    def _validate(self) -> None:
        if self.max_concurrent_tools < 1:
            logger.warning(
                "max_concurrent_tools must be >= 1, got %s; using %s",
                self.max_concurrent_tools,
                DEFAULT_MAX_CONCURRENT,
            )
            self.max_concurrent_tools = DEFAULT_MAX_CONCURRENT

    @property
    def is_mock_mode(self) -> bool:
        """True when every capability is bound to a mock provider by mode alone."""
        return self.mode in (ServerMode.MOCK, ServerMode.HYBRID)

    @property
    def tool_timeout_seconds(self) -> Optional[float]:
        """Per-call timeout in seconds, or None when disabled."""
        if self.tool_timeout_ms <= 0:
            return None
        return self.tool_timeout_ms / 1000

    def to_public_dict(self) -> Dict[str, Any]:
        """Configuration snapshot safe to expose to clients (no credentials)."""
        return {
            "mode": self.mode.value,
            "name": self.server_name,
            "version": self.server_version,
            "maxConcurrentTools": self.max_concurrent_tools,
            "toolTimeoutMs": self.tool_timeout_ms,
            "credentials": {
                "brave": self.brave_api_key is not None,
                "openweathermap": self.openweathermap_api_key is not None,
                "openai": self.openai_api_key is not None,
                "weather": self.weather_api_key is not None,
            },
        }

    def setup_logging(self) -> None:
        """Configure logging based on settings."""
        configure_logging(
            level=self.log_level,
            format="structured" if self.structured_logging else "human",
        )


# Global configuration instance
_config: Optional[ServerConfig] = None


def get_config() -> ServerConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = ServerConfig.from_env()
    return _config


def set_config(config: ServerConfig) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config
