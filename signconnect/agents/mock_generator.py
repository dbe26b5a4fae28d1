"""
Mock suggestion generator that works without a language model.
Used for development, tests, and when Ollama is unavailable.
"""

import asyncio
from typing import Any, Dict, Optional

from .suggestions import ISuggestionGenerator, SuggestionSet


class MockSuggestionGenerator(ISuggestionGenerator):
    """
    Deterministic generator returning canned replies per scenario label.
    """

    name = "mock"

    # Canned replies keyed by scenario label
    RESPONSE_PATTERNS = {
        "Coffee Shop": SuggestionSet(
            casual="Can I get a large oat milk latte?",
            formal="I would like a large latte with oat milk, please.",
            quick="Latte"
        ),
        "Medical": SuggestionSet(
            casual="I'm deaf, could you speak slowly?",
            formal="I am deaf. Please speak clearly so I can follow along.",
            quick="Understood"
        ),
        "Emergency": SuggestionSet(
            casual="I need help right now!",
            formal="Please call an ambulance to my location immediately.",
            quick="Help"
        ),
        "Greeting": SuggestionSet(
            casual="Hey, nice to meet you!",
            formal="Hello, it is a pleasure to meet you.",
            quick="Hi"
        ),
    }

    DEFAULT_RESPONSE = SuggestionSet(
        casual="Sure, sounds good!",
        formal="Thank you, I understand.",
        quick="Okay"
    )

    QUESTION_RESPONSE = SuggestionSet(
        casual="Yeah, definitely.",
        formal="Yes, that would be fine, thank you.",
        quick="Yes"
    )

    def __init__(self, delay: float = 0.0):
        self.delay = delay
        self.calls = 0

    async def generate(self, text: str, context_label: Optional[str] = None) -> SuggestionSet:
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)

        if context_label in self.RESPONSE_PATTERNS:
            return self.RESPONSE_PATTERNS[context_label]
        if text.strip().endswith("?"):
            return self.QUESTION_RESPONSE
        return self.DEFAULT_RESPONSE

    def get_status(self) -> Dict[str, Any]:
        status = super().get_status()
        status.update({
            'calls': self.calls,
            'known_contexts': sorted(self.RESPONSE_PATTERNS)
        })
        return status
