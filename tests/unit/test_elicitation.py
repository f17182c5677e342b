"""Tests for the configure_analysis elicitation tool."""

import math
from unittest.mock import AsyncMock, MagicMock

import pytest
from mcp import types
from pydantic import ValidationError

from toolkit_mcp.core.callbacks import (
    CallbackError,
    CallbackUnavailableError,
    Disposition,
    ElicitationResponse,
    SessionClientChannel,
)
from toolkit_mcp.core.result import Ok
from toolkit_mcp.tools.elicitation import (
    ANALYSIS_CONFIG_SCHEMA,
    CANCEL_MESSAGE,
    DECLINE_MESSAGE,
    DEFAULT_ANALYSIS_CONFIG,
    UNSUPPORTED_MESSAGE,
    coerce_analysis_config,
    configure_analysis,
    describe_config,
)
from toolkit_mcp.tools.registry import ToolDependencies
from toolkit_mcp.tools.schemas import ConfigureAnalysisInput


async def _run(mock_providers, channel, text="Quarterly report text"):
    deps = ToolDependencies(providers=mock_providers, channel=channel)
    return await configure_analysis(ConfigureAnalysisInput(text=text), deps)


class TestCoercion:
    def test_full_form_is_kept(self):
        raw = {
            "depth": "deep",
            "includeSentiment": False,
            "includeEntities": True,
            "maxSummaryWords": 250,
        }
        assert coerce_analysis_config(raw) == raw

    def test_empty_form_uses_defaults(self):
        assert coerce_analysis_config({}) == DEFAULT_ANALYSIS_CONFIG
        assert coerce_analysis_config(None) == DEFAULT_ANALYSIS_CONFIG

    def test_unknown_depth_falls_back(self):
        assert coerce_analysis_config({"depth": "exhaustive"})["depth"] == "standard"

    @pytest.mark.parametrize(
        "raw,expected",
        [("75", 75), (42.0, 42), (12.5, 12.5), ("lots", 100), (math.inf, 100)],
    )
    def test_word_limit(self, raw, expected):
        assert coerce_analysis_config({"maxSummaryWords": raw})["maxSummaryWords"] == expected

    def test_describe(self):
        config = dict(DEFAULT_ANALYSIS_CONFIG, includeEntities=False)
        assert describe_config(config) == (
            "Analysis configured: depth=standard, sentiment=true, "
            "entities=false, maxWords=100"
        )


class TestConfigureAnalysis:
    @pytest.mark.asyncio
    async def test_accept(self, mock_providers, stub_channel):
        form = {
            "depth": "quick",
            "includeSentiment": True,
            "includeEntities": False,
            "maxSummaryWords": 50,
        }
        channel = stub_channel(
            elicitation=ElicitationResponse(Disposition.ACCEPT, form)
        )
        result = await _run(mock_providers, channel)

        assert isinstance(result, Ok)
        assert result.value["action"] == "accept"
        assert result.value["config"] == form
        assert result.value["message"] == describe_config(form)

    @pytest.mark.asyncio
    async def test_request_shape(self, mock_providers, stub_channel):
        channel = stub_channel(elicitation=ElicitationResponse(Disposition.CANCEL))
        await _run(mock_providers, channel, text="twelve chars")

        request = channel.elicitation_requests[0]
        assert "(12 characters)" in request["message"]
        assert request["requested_schema"] == ANALYSIS_CONFIG_SCHEMA

    @pytest.mark.asyncio
    async def test_accept_without_content_uses_defaults(self, mock_providers, stub_channel):
        channel = stub_channel(elicitation=ElicitationResponse(Disposition.ACCEPT))
        result = await _run(mock_providers, channel)
        assert result.value["config"] == DEFAULT_ANALYSIS_CONFIG

    @pytest.mark.asyncio
    async def test_decline(self, mock_providers, stub_channel):
        channel = stub_channel(elicitation=ElicitationResponse(Disposition.DECLINE))
        result = await _run(mock_providers, channel)
        assert result == Ok({"action": "decline", "message": DECLINE_MESSAGE})

    @pytest.mark.asyncio
    async def test_cancel(self, mock_providers, stub_channel):
        channel = stub_channel(elicitation=ElicitationResponse(Disposition.CANCEL))
        result = await _run(mock_providers, channel)
        assert result == Ok({"action": "cancel", "message": CANCEL_MESSAGE})

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [
            CallbackUnavailableError("Client does not support elicitation"),
            CallbackError("stream closed"),
        ],
    )
    async def test_failure_falls_back_to_defaults(self, mock_providers, stub_channel, error):
        result = await _run(mock_providers, stub_channel(elicitation=error))
        assert result == Ok(
            {
                "action": "accept",
                "config": DEFAULT_ANALYSIS_CONFIG,
                "message": UNSUPPORTED_MESSAGE,
            }
        )

    @pytest.mark.asyncio
    async def test_malformed_client_reply_falls_back_to_defaults(self, mock_providers):
        try:
            types.ElicitResult.model_validate({"action": "maybe"})
        except ValidationError as exc:
            error = exc
        session = MagicMock()
        session.check_client_capability.return_value = True
        session.elicit = AsyncMock(side_effect=error)

        result = await _run(mock_providers, SessionClientChannel(session))

        assert result == Ok(
            {
                "action": "accept",
                "config": DEFAULT_ANALYSIS_CONFIG,
                "message": UNSUPPORTED_MESSAGE,
            }
        )

    @pytest.mark.asyncio
    async def test_no_session_falls_back_to_defaults(self, deps):
        result = await configure_analysis(ConfigureAnalysisInput(text="x"), deps)
        assert result.value["message"] == UNSUPPORTED_MESSAGE

    @pytest.mark.asyncio
    async def test_default_config_is_not_shared(self, deps):
        result = await configure_analysis(ConfigureAnalysisInput(text="x"), deps)
        result.value["config"]["depth"] = "deep"
        assert DEFAULT_ANALYSIS_CONFIG["depth"] == "standard"
