"""
Reply suggestion types and the generator interface.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

SUGGESTION_KINDS = ("casual", "formal", "quick")

SYSTEM_PROMPT = (
    "You help a deaf or non-verbal person reply during a live conversation. "
    "Answer only with JSON containing the keys casual, formal and quick."
)


class SuggestionSet(BaseModel):
    """Three alternative replies the user can pick from."""
    model_config = ConfigDict(frozen=True)

    casual: str = Field(description="A short, casual, and friendly reply to the input")
    formal: str = Field(description="A polite, professional, and formal reply")
    quick: str = Field(description="A very brief, one-word acknowledgment")

    @field_validator('casual', 'formal', 'quick')
    @classmethod
    def reply_must_not_be_empty(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('reply cannot be empty')
        return v

    def get(self, kind: str) -> str:
        """Return the reply of the given kind."""
        if kind not in SUGGESTION_KINDS:
            raise ValueError(f"kind must be one of: {list(SUGGESTION_KINDS)}")
        return getattr(self, kind)


def build_prompt(text: str, context_label: Optional[str] = None) -> str:
    """Build the generation prompt for a partner utterance."""
    prompt = (
        "The user is deaf or non-verbal and using this app to communicate.\n"
        f"The conversation partner just said: \"{text}\"\n"
    )
    if context_label:
        prompt += f"The current situation is: {context_label}.\n"
    prompt += (
        "\nGenerate 3 likely replies for the user to choose from: "
        "a casual one, a formal one, and a quick one-word acknowledgment."
    )
    return prompt


class ISuggestionGenerator(ABC):
    """Produces reply suggestions for a transcript and optional context label."""

    name: str = "generator"

    @abstractmethod
    async def generate(self, text: str, context_label: Optional[str] = None) -> SuggestionSet:
        """
        Generate three reply suggestions.

        Raises:
            GeneratorUnavailable: the backing model could not be reached
            GeneratorTimeout: the backing model took too long
            GeneratorRefused: the model refused or returned an unusable reply
        """
        pass

    async def health_check(self) -> bool:
        return True

    def get_status(self) -> Dict[str, Any]:
        return {
            "generator": self.name,
            "generator_type": self.__class__.__name__
        }
