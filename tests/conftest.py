"""
Root pytest configuration and shared fixtures.

Provides mock provider sets, a scriptable client channel for the sampling and
elicitation tools, and a quiet server configuration.
"""

from typing import Any, Callable, Dict, List, Optional, Union

import pytest

from toolkit_mcp.config import ServerConfig, ServerMode
from toolkit_mcp.core.callbacks import (
    CallbackError,
    ClientChannel,
    ElicitationResponse,
    SamplingResponse,
)
from toolkit_mcp.providers.base import ProviderSet
from toolkit_mcp.providers.mock import (
    MockTextProvider,
    MockWeatherProvider,
    MockWebSearchProvider,
)
from toolkit_mcp.tools.registry import ToolDependencies

# Response contract version from responses.py
RESPONSE_CONTRACT_VERSION = "response-v2"


class StubChannel(ClientChannel):
    """Client channel returning scripted answers and recording every request.

    Pass an exception instance to simulate a failed round trip.
    """

    def __init__(
        self,
        sampling: Union[SamplingResponse, Exception, None] = None,
        elicitation: Union[ElicitationResponse, Exception, None] = None,
    ):
        self._sampling = sampling
        self._elicitation = elicitation
        self.sampling_requests: List[Dict[str, Any]] = []
        self.elicitation_requests: List[Dict[str, Any]] = []

    async def create_message(
        self,
        prompt: str,
        *,
        max_tokens: int,
        system_prompt: Optional[str] = None,
    ) -> SamplingResponse:
        self.sampling_requests.append(
            {"prompt": prompt, "max_tokens": max_tokens, "system_prompt": system_prompt}
        )
        if isinstance(self._sampling, Exception):
            raise self._sampling
        if self._sampling is None:
            raise CallbackError("no sampling response scripted")
        return self._sampling

    async def elicit(
        self,
        message: str,
        requested_schema: Dict[str, Any],
    ) -> ElicitationResponse:
        self.elicitation_requests.append(
            {"message": message, "requested_schema": requested_schema}
        )
        if isinstance(self._elicitation, Exception):
            raise self._elicitation
        if self._elicitation is None:
            raise CallbackError("no elicitation response scripted")
        return self._elicitation


@pytest.fixture
def mock_providers() -> ProviderSet:
    """Provider set with every capability bound to its mock."""
    return ProviderSet(
        text=MockTextProvider(),
        search=MockWebSearchProvider(),
        weather=MockWeatherProvider(),
    )


@pytest.fixture
def deps(mock_providers: ProviderSet) -> ToolDependencies:
    """Handler dependencies without a client session."""
    return ToolDependencies(providers=mock_providers)


@pytest.fixture
def stub_channel() -> Callable[..., StubChannel]:
    """Factory for scripted client channels."""
    return StubChannel


@pytest.fixture
def test_config() -> ServerConfig:
    """Mock-mode configuration with quiet logging."""
    return ServerConfig(
        mode=ServerMode.MOCK,
        server_name="toolkit-mcp-test",
        server_version="0.1.0",
        log_level="WARNING",
        structured_logging=False,
    )


@pytest.fixture(autouse=True)
def _clear_provider_env(monkeypatch):
    """Keep developer credentials out of provider and config tests."""
    for name in (
        "MCP_MODE",
        "MCP_CONFIG_FILE",
        "MCP_SERVER_NAME",
        "MCP_SERVER_VERSION",
        "MCP_MAX_CONCURRENT",
        "MCP_TOOL_TIMEOUT_MS",
        "MCP_LOG_LEVEL",
        "MCP_STRUCTURED_LOGGING",
        "BRAVE_API_KEY",
        "OPENWEATHERMAP_API_KEY",
        "OPENAI_API_KEY",
        "WEATHER_API_KEY",
    ):
        monkeypatch.delenv(name, raising=False)
