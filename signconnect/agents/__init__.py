"""
Suggestion generators and the speech synthesizer interface.
"""

from .suggestions import ISuggestionGenerator, SuggestionSet, SUGGESTION_KINDS, build_prompt
from .mock_generator import MockSuggestionGenerator
from .ollama_generator import OllamaSuggestionGenerator
from .voice import ISpeechSynthesizer, LoggingSpeechSynthesizer

__all__ = [
    'ISuggestionGenerator',
    'SuggestionSet',
    'SUGGESTION_KINDS',
    'build_prompt',
    'MockSuggestionGenerator',
    'OllamaSuggestionGenerator',
    'ISpeechSynthesizer',
    'LoggingSpeechSynthesizer'
]
