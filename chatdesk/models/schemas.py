from pydantic import BaseModel, ConfigDict, Field


class AssistantRequest(BaseModel):
    """Request payload for the assistant's ask operation.

    Attributes:
        message: The framed question sent to the model.
        system_prompt: Mode instruction; omitted when no mode is active.
    """

    message: str = Field(..., min_length=1)
    system_prompt: str | None = None

    def to_json(self) -> dict[str, str]:
        """Body as sent on the wire, without unset optional fields."""
        return self.model_dump(exclude_none=True)


class AssistantResponse(BaseModel):
    """Response from the assistant endpoint.

    Two variants exist in the wild: `{"response": ...}` and the simpler
    `{"answer": ...}`. Unknown keys are ignored.
    """

    model_config = ConfigDict(extra="ignore")

    response: str | None = None
    answer: str | None = None

    @property
    def text(self) -> str:
        """The answer text, or an empty string when none was given."""
        return self.response or self.answer or ""


class StatsResponse(BaseModel):
    """Global activity figures.

    Attributes:
        total_searches: Questions submitted by all users, anonymous included.
    """

    total_searches: int = Field(..., ge=0)
