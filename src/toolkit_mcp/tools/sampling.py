"""
smart_summarize: summarization performed by the client's own model.

Instead of calling a text provider, the handler sends a
``sampling/createMessage`` request back to the connected client and returns
whatever text the client generates. One round trip, no retry.
"""

from __future__ import annotations

import logging

from toolkit_mcp.core.callbacks import CallbackError, SamplingText
from toolkit_mcp.core.result import Result, fail, ok
from toolkit_mcp.tools.registry import ToolDependencies
from toolkit_mcp.tools.schemas import SmartSummarizeInput

logger = logging.getLogger(__name__)

SUMMARY_SYSTEM_PROMPT = (
    "You are a helpful assistant that creates concise, accurate summaries."
)


def build_summary_prompt(text: str, max_length: int) -> str:
    return (
        f"Please summarize the following text in approximately {max_length} words "
        f"or fewer. Be concise and capture the key points:\n\n{text}"
    )


async def smart_summarize(
    params: SmartSummarizeInput, deps: ToolDependencies
) -> Result[str, str]:
    try:
        response = await deps.channel.create_message(
            build_summary_prompt(params.text, params.max_length),
            max_tokens=params.max_length * 4,
            system_prompt=SUMMARY_SYSTEM_PROMPT,
        )
    except CallbackError as exc:
        return fail(f"Sampling request failed: {exc}")

    if isinstance(response, SamplingText):
        logger.debug("Client sampled summary via model %r", response.model)
        return ok(response.text)

    return fail(
        f"Client returned non-text sampling response ({response.content_type})"
    )
