"""Assistant endpoint client."""

from chatdesk.client.assistant import AssistantClient, AssistantUnavailableError

__all__ = ["AssistantClient", "AssistantUnavailableError"]
