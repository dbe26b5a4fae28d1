"""
Transcript events and the published orchestrator state.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..agents.suggestions import SuggestionSet
from ..vector.types import ScenarioRecord


@dataclass(frozen=True)
class TranscriptEvent:
    """A transcript update tagged with its arrival order."""
    text: str
    sequence_number: int


@dataclass(frozen=True)
class OrchestratorState:
    """
    Snapshot of what the UI shows: matched context, suggestions, busy flag, last error.

    Snapshots are immutable; the orchestrator publishes a new one on every change.
    """
    current_context: Optional[ScenarioRecord] = None
    suggestions: Optional[SuggestionSet] = None
    is_busy: bool = False
    last_error: Optional[Exception] = None
    last_transcript: Optional[str] = None
    sequence_number: int = 0

    def to_dict(self) -> Dict[str, Any]:
        context = None
        if self.current_context is not None:
            context = {
                "id": str(self.current_context.id),
                "label": self.current_context.label
            }

        error = None
        if self.last_error is not None:
            error = {
                "type": type(self.last_error).__name__,
                "message": str(self.last_error)
            }

        return {
            "current_context": context,
            "suggestions": self.suggestions.model_dump() if self.suggestions else None,
            "is_busy": self.is_busy,
            "last_error": error,
            "last_transcript": self.last_transcript,
            "sequence_number": self.sequence_number
        }
