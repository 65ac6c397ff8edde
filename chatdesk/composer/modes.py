"""Assistant personas selectable for a question."""

from pydantic import BaseModel

from chatdesk.models.conversation import Mode


class ModeConfig(BaseModel):
    """Display and prompting details of one mode.

    Attributes:
        icon: Prefix shown before framed messages.
        label: Button label.
        placeholder: Input hint while the mode is active.
        system_prompt: Instruction sent alongside the question.
    """

    icon: str
    label: str
    placeholder: str
    system_prompt: str


MODES: dict[Mode, ModeConfig] = {
    Mode.SEARCH: ModeConfig(
        icon="🔍",
        label="Search",
        placeholder="Search the web...",
        system_prompt=(
            "You are a web search assistant. Provide concise, factual, and "
            "well-organized answers as if you are a search engine. Include key "
            "facts, dates, and numbers. Format your response with bullet points "
            "or numbered lists when appropriate. Always cite relevant context. "
            "Start your response with a brief summary sentence."
        ),
    ),
    Mode.STUDY: ModeConfig(
        icon="📚",
        label="Study",
        placeholder="What do you want to study?",
        system_prompt=(
            "You are an expert tutor and study companion. Explain topics "
            "step-by-step in a clear, educational manner. Use examples, analogies, "
            "and bullet points to aid understanding. After explaining, suggest 2-3 "
            "follow-up questions the student might want to explore. Use emojis "
            "sparingly to make learning engaging."
        ),
    ),
    Mode.CREATE_IMAGE: ModeConfig(
        icon="🎨",
        label="Create Image",
        placeholder="Describe the image you want...",
        system_prompt=(
            "You are a creative AI image description generator. When the user "
            "describes an image they want, provide an extremely detailed, vivid, "
            "and artistic description of that image as if painting it with words. "
            "Describe the composition, colors, lighting, mood, style, and every "
            "visual detail. Format it as: first a brief title for the image, then "
            "the full detailed description. Make it feel like a professional art "
            "prompt."
        ),
    ),
}


def mode_config(mode: Mode) -> ModeConfig:
    """Look up the configuration of a mode."""
    return MODES[mode]


def mode_prefix(mode: Mode | None) -> str:
    """Icon prefix for text framed in `mode`, empty without a mode."""
    if mode is None:
        return ""
    return f"{MODES[mode].icon} "
