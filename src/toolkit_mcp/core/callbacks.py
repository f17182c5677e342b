"""
Bidirectional callback channel to the connected client.

Two tools issue a nested request back to the client while a tool call is in
flight: ``smart_summarize`` asks the client's model to generate text
(``sampling/createMessage``) and ``configure_analysis`` asks the user to fill
in a small form (``elicitation/create``). Handlers only ever see the
``ClientChannel`` interface defined here; ``SessionClientChannel`` adapts a
live ``mcp`` ``ServerSession`` and ``UnavailableClientChannel`` stands in when
there is no session at all (CLI use, unit tests).

Every round trip ends in exactly one of:

* a ``SamplingResponse`` / ``ElicitationResponse`` value, or
* a ``CallbackError`` (``CallbackUnavailableError`` when the client never
  declared the capability). Transport failures, client-side errors and
  replies that fail result validation are all reported this way; only
  cancellation propagates.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Union

from mcp import types
from mcp.server.session import ServerSession
from mcp.shared.exceptions import McpError

logger = logging.getLogger(__name__)


class CallbackError(Exception):
    """The outward request to the client failed."""


class CallbackUnavailableError(CallbackError):
    """The client does not support the requested callback."""


@dataclass(frozen=True)
class SamplingText:
    """The client generated text."""

    text: str
    model: str = ""


@dataclass(frozen=True)
class SamplingNonText:
    """The client answered with a content kind other than text (image, audio...)."""

    content_type: str
    model: str = ""


SamplingResponse = Union[SamplingText, SamplingNonText]


class Disposition(str, Enum):
    """How the user answered an elicitation request."""

    ACCEPT = "accept"
    DECLINE = "decline"
    CANCEL = "cancel"


@dataclass(frozen=True)
class ElicitationResponse:
    """
    The user's answer to an elicitation request.

    Attributes:
        disposition: accept, decline or cancel
        content: Submitted form values; only meaningful for ``ACCEPT``
    """

    disposition: Disposition
    content: Optional[Dict[str, Any]] = field(default=None)


class ClientChannel(ABC):
    """Outward requests a tool handler may issue to the connected client."""

    @abstractmethod
    async def create_message(
        self,
        prompt: str,
        *,
        max_tokens: int,
        system_prompt: Optional[str] = None,
    ) -> SamplingResponse:
        """Ask the client's model to respond to a single user message.

        Raises:
            CallbackError: transport failure or client-side error
            CallbackUnavailableError: the client cannot sample
        """

    @abstractmethod
    async def elicit(
        self,
        message: str,
        requested_schema: Dict[str, Any],
    ) -> ElicitationResponse:
        """Ask the user to fill in a form described by ``requested_schema``.

        Raises:
            CallbackError: transport failure or client-side error
            CallbackUnavailableError: the client cannot elicit
        """


class UnavailableClientChannel(ClientChannel):
    """Channel used when no client session is attached."""

    async def create_message(
        self,
        prompt: str,
        *,
        max_tokens: int,
        system_prompt: Optional[str] = None,
    ) -> SamplingResponse:
        raise CallbackUnavailableError("No client session available for sampling")

    async def elicit(
        self,
        message: str,
        requested_schema: Dict[str, Any],
    ) -> ElicitationResponse:
        raise CallbackUnavailableError("No client session available for elicitation")



class SessionClientChannel(ClientChannel):
    """Channel backed by an MCP ``ServerSession``.

    Capability checks use what the client declared during initialization, so a
    client without a sampling or elicitation handler is reported as
    unavailable without a network round trip.
    """

    def __init__(
        self,
        session: ServerSession,
        *,
        related_request_id: Optional[types.RequestId] = None,
    ):
        self._session = session
        self._related_request_id = related_request_id

    def _supports(self, capabilities: types.ClientCapabilities) -> bool:
        return self._session.check_client_capability(capabilities)

    async def create_message(
        self,
        prompt: str,
        *,
        max_tokens: int,
        system_prompt: Optional[str] = None,
    ) -> SamplingResponse:
        if not self._supports(
            types.ClientCapabilities(sampling=types.SamplingCapability())
        ):
            raise CallbackUnavailableError("Client does not support sampling")

        message = types.SamplingMessage(
            role="user",
            content=types.TextContent(type="text", text=prompt),
        )
        try:
            result = await self._session.create_message(
                messages=[message],
                max_tokens=max_tokens,
                system_prompt=system_prompt,
                related_request_id=self._related_request_id,
            )
        except McpError as exc:
            logger.warning("Client rejected sampling request: %s", exc)
            raise CallbackError(str(exc) or type(exc).__name__) from exc
        except Exception as exc:
            logger.warning("Sampling round trip failed: %s", exc)
            raise CallbackError(str(exc) or type(exc).__name__) from exc

        content = result.content
        if isinstance(content, types.TextContent):
            return SamplingText(text=content.text, model=result.model)
        content_type = getattr(content, "type", None) or type(content).__name__
        return SamplingNonText(content_type=str(content_type), model=result.model)

    async def elicit(
        self,
        message: str,
        requested_schema: Dict[str, Any],
    ) -> ElicitationResponse:
        if not self._supports(
            types.ClientCapabilities(elicitation=types.ElicitationCapability())
        ):
            raise CallbackUnavailableError("Client does not support elicitation")

        try:
            result = await self._session.elicit(
                message=message,
                requestedSchema=requested_schema,
                related_request_id=self._related_request_id,
            )
        except McpError as exc:
            logger.warning("Client rejected elicitation request: %s", exc)
            raise CallbackError(str(exc) or type(exc).__name__) from exc
        except Exception as exc:
            logger.warning("Elicitation round trip failed: %s", exc)
            raise CallbackError(str(exc) or type(exc).__name__) from exc

        return ElicitationResponse(
            disposition=Disposition(result.action),
            content=dict(result.content) if result.content is not None else None,
        )
