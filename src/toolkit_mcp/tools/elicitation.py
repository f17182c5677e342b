"""
configure_analysis: collect analysis options from the user.

The handler sends an ``elicitation/create`` request with a four-field form and
maps the answer onto a ``ConfigureAnalysisResult``. Every branch is a success
at the handler level; a user declining or cancelling is a valid outcome:

    client lacks elicitation  -> accept, default config, "default" message
    round trip fails          -> accept, default config, "default" message
    accept                    -> accept, coerced config
    accept without form data  -> accept, default config
    decline                   -> decline, no config
    cancel                    -> cancel, no config
"""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, Mapping, Optional, Union

from toolkit_mcp.core.callbacks import CallbackError, Disposition
from toolkit_mcp.core.result import Result, ok
from toolkit_mcp.tools.registry import ToolDependencies
from toolkit_mcp.tools.schemas import ConfigureAnalysisInput

logger = logging.getLogger(__name__)

ANALYSIS_DEPTHS = ("quick", "standard", "deep")

DEFAULT_ANALYSIS_CONFIG: Dict[str, Any] = {
    "depth": "standard",
    "includeSentiment": True,
    "includeEntities": True,
    "maxSummaryWords": 100,
}

ANALYSIS_CONFIG_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "depth": {
            "type": "string",
            "enum": list(ANALYSIS_DEPTHS),
            "description": "Analysis depth level",
            "default": "standard",
        },
        "includeSentiment": {
            "type": "boolean",
            "description": "Include sentiment analysis",
            "default": True,
        },
        "includeEntities": {
            "type": "boolean",
            "description": "Include entity extraction",
            "default": True,
        },
        "maxSummaryWords": {
            "type": "number",
            "description": "Maximum words in summary",
            "default": 100,
        },
    },
    "required": ["depth", "includeSentiment", "includeEntities", "maxSummaryWords"],
}

UNSUPPORTED_MESSAGE = "Using default configuration (elicitation not supported by client)."
DECLINE_MESSAGE = (
    "User declined to configure analysis. "
    "Using default settings would be required to proceed."
)
CANCEL_MESSAGE = "User cancelled the analysis configuration dialog."


def _coerce_depth(value: Any) -> str:
    if isinstance(value, str) and value in ANALYSIS_DEPTHS:
        return value
    return DEFAULT_ANALYSIS_CONFIG["depth"]


def _coerce_flag(value: Any) -> bool:
    if value is None:
        return True
    return bool(value)


def _coerce_word_limit(value: Any) -> Union[int, float]:
    default = DEFAULT_ANALYSIS_CONFIG["maxSummaryWords"]
    if value is None:
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number):
        return default
    return int(number) if number.is_integer() else number


def coerce_analysis_config(raw: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Build a config from form data, substituting defaults field by field."""
    raw = raw or {}
    return {
        "depth": _coerce_depth(raw.get("depth")),
        "includeSentiment": _coerce_flag(raw.get("includeSentiment")),
        "includeEntities": _coerce_flag(raw.get("includeEntities")),
        "maxSummaryWords": _coerce_word_limit(raw.get("maxSummaryWords")),
    }


def _flag(value: bool) -> str:
    return "true" if value else "false"


def describe_config(config: Mapping[str, Any]) -> str:
    return (
        f"Analysis configured: depth={config['depth']}, "
        f"sentiment={_flag(config['includeSentiment'])}, "
        f"entities={_flag(config['includeEntities'])}, "
        f"maxWords={config['maxSummaryWords']}"
    )


async def configure_analysis(
    params: ConfigureAnalysisInput, deps: ToolDependencies
) -> Result[Dict[str, Any], str]:
    message = (
        f"Configure analysis options for the provided text "
        f"({len(params.text)} characters):"
    )
    try:
        response = await deps.channel.elicit(message, ANALYSIS_CONFIG_SCHEMA)
    except CallbackError as exc:
        logger.info("Elicitation unavailable, using defaults: %s", exc)
        return ok(
            {
                "action": Disposition.ACCEPT.value,
                "config": dict(DEFAULT_ANALYSIS_CONFIG),
                "message": UNSUPPORTED_MESSAGE,
            }
        )

    if response.disposition is Disposition.ACCEPT:
        config = coerce_analysis_config(response.content)
        return ok(
            {
                "action": Disposition.ACCEPT.value,
                "config": config,
                "message": describe_config(config),
            }
        )
    if response.disposition is Disposition.DECLINE:
        return ok({"action": Disposition.DECLINE.value, "message": DECLINE_MESSAGE})
    return ok({"action": Disposition.CANCEL.value, "message": CANCEL_MESSAGE})
