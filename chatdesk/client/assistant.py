"""HTTP client for the remote assistant endpoint.

One request/response operation: POST the framed question (and the mode's
system prompt, if any), read back the answer text. Every way the call can go
wrong on the transport side (connection refused, timeout, HTTP error status,
a body that is not a JSON object) collapses into AssistantUnavailableError.
An empty answer is not an error: it comes back as an empty string.
"""

import logging

import httpx
from pydantic import ValidationError

from chatdesk.config import ClientConfig, get_client_config
from chatdesk.models.schemas import AssistantRequest, AssistantResponse

logger = logging.getLogger(__name__)


class AssistantUnavailableError(Exception):
    """Raised when the assistant endpoint cannot be reached or understood."""

    pass


class AssistantClient:
    """Client for the assistant's ask operation.

    A fresh httpx.AsyncClient is opened per call, as the chat page does for
    its streaming requests; the optional transport lets tests route requests
    to an in-process ASGI app or a mock.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Optional client configuration.
                    Loads from environment if not provided.
            transport: Optional httpx transport override.
        """
        self._config = config or get_client_config()
        self._transport = transport

    @property
    def base_url(self) -> str:
        """Base URL of the assistant, as shown to users on failure."""
        return self._config.api_url

    async def ask(self, request: AssistantRequest) -> str:
        """Send a question and return the answer text.

        Args:
            request: Framed question and optional system prompt.

        Returns:
            The answer text, empty when the assistant gave none.

        Raises:
            AssistantUnavailableError: On any transport or decoding failure.
        """
        async with httpx.AsyncClient(
            timeout=self._config.request_timeout,
            transport=self._transport,
        ) as client:
            try:
                response = await client.post(self._config.ask_url, json=request.to_json())
                response.raise_for_status()
                data = response.json()
            except httpx.HTTPStatusError as e:
                logger.warning(f"Assistant returned HTTP {e.response.status_code}")
                raise AssistantUnavailableError(f"HTTP {e.response.status_code}") from e
            except httpx.RequestError as e:
                logger.warning(f"Assistant request failed: {e!r}")
                raise AssistantUnavailableError(f"Connection failed: {e}") from e
            except ValueError as e:
                logger.warning(f"Assistant returned a non-JSON body: {e}")
                raise AssistantUnavailableError("Invalid response body") from e

        try:
            answer = AssistantResponse.model_validate(data)
        except ValidationError as e:
            logger.warning(f"Assistant returned an unexpected payload: {e}")
            raise AssistantUnavailableError("Unexpected response payload") from e

        return answer.text
