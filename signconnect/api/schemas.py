"""
Request and response models for the HTTP surface.
"""

from pydantic import BaseModel, field_validator
from typing import Optional, List

from ..agents.suggestions import SUGGESTION_KINDS


class TranscriptRequest(BaseModel):
    text: str


class TranscriptResponse(BaseModel):
    accepted: bool
    sequence_number: Optional[int] = None


class ContextInfo(BaseModel):
    id: str
    label: str


class SuggestionsInfo(BaseModel):
    casual: str
    formal: str
    quick: str


class ErrorInfo(BaseModel):
    type: str
    message: str


class StateResponse(BaseModel):
    current_context: Optional[ContextInfo] = None
    suggestions: Optional[SuggestionsInfo] = None
    is_busy: bool
    last_error: Optional[ErrorInfo] = None
    last_transcript: Optional[str] = None
    sequence_number: int


class ChooseRequest(BaseModel):
    kind: str

    @field_validator('kind')
    @classmethod
    def kind_must_be_valid(cls, v):
        if v not in SUGGESTION_KINDS:
            raise ValueError(f'kind must be one of: {list(SUGGESTION_KINDS)}')
        return v


class ChooseResponse(BaseModel):
    kind: str
    text: str


class ScenarioInfo(BaseModel):
    id: str
    label: str
    source_text: str


class ScenarioListResponse(BaseModel):
    scenarios: List[ScenarioInfo]


class HealthResponse(BaseModel):
    status: str
    version: str
    embedding_provider: str
    generator: str
    generator_status: str
    scenarios: int
    is_busy: bool
