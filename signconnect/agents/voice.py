"""
Speech synthesizer interface for speaking a chosen suggestion aloud.
"""

from abc import ABC, abstractmethod
from typing import List

from ..util.logging import logger, sanitize_text


class ISpeechSynthesizer(ABC):
    """Renders a chosen reply audibly."""

    @abstractmethod
    def speak(self, text: str) -> None:
        pass


class LoggingSpeechSynthesizer(ISpeechSynthesizer):
    """Synthesizer stand-in that logs and records what would be spoken."""

    def __init__(self):
        self.spoken: List[str] = []

    def speak(self, text: str) -> None:
        self.spoken.append(text)
        logger.log_operation("voice.speak", "success", {"text": sanitize_text(text)})
