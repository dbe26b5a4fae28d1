"""
HTTP surface over the context orchestrator.
The transcription source posts transcripts; the UI polls the published state.
"""

from contextlib import asynccontextmanager
from typing import Callable, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware

from .schemas import (
    TranscriptRequest,
    TranscriptResponse,
    StateResponse,
    ChooseRequest,
    ChooseResponse,
    ScenarioInfo,
    ScenarioListResponse,
    HealthResponse
)
from ..agents.voice import LoggingSpeechSynthesizer
from ..core.config import VERSION, debug_enabled, get_orchestrator, validate_config
from ..core.errors import ConfigurationError, NoSuggestionsAvailable
from ..core.orchestrator import ContextOrchestrator
from ..util.logging import logger


def _default_factory() -> ContextOrchestrator:
    issues = validate_config()
    if issues:
        raise ConfigurationError("; ".join(issues))
    return get_orchestrator(synthesizer=LoggingSpeechSynthesizer())


def create_app(orchestrator_factory: Optional[Callable[[], ContextOrchestrator]] = None) -> FastAPI:
    """Create the FastAPI application; the orchestrator is built at startup."""
    factory = orchestrator_factory or _default_factory

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.orchestrator = factory()
        logger.log_operation("api.startup", "success", {"version": VERSION})
        yield
        await app.state.orchestrator.close()
        logger.log_operation("api.shutdown", "success")

    app = FastAPI(
        title="SignConnect API",
        version=VERSION,
        description="Live transcript context retrieval and reply suggestions",
        docs_url="/docs" if debug_enabled() else None,
        redoc_url="/redoc" if debug_enabled() else None,
        lifespan=lifespan
    )

    # Allow a local web UI to connect
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    def orchestrator_for(request: Request) -> ContextOrchestrator:
        return request.app.state.orchestrator

    @app.get("/health", response_model=HealthResponse)
    async def health_endpoint(request: Request):
        """Check system health."""
        health = await orchestrator_for(request).health_check()
        return HealthResponse(
            status=health["overall"],
            version=VERSION,
            embedding_provider=health["embedding_provider"],
            generator=health["generator"],
            generator_status=health["generator_status"],
            scenarios=health["scenarios"],
            is_busy=health["is_busy"]
        )

    @app.get("/state", response_model=StateResponse)
    async def get_state(request: Request):
        return StateResponse(**orchestrator_for(request).state.to_dict())

    @app.post("/transcript", response_model=TranscriptResponse)
    async def submit_transcript(req: TranscriptRequest, request: Request):
        event = orchestrator_for(request).submit_transcript(req.text)
        if event is None:
            return TranscriptResponse(accepted=False)
        return TranscriptResponse(accepted=True, sequence_number=event.sequence_number)

    @app.post("/suggestions/clear", response_model=StateResponse)
    async def clear_suggestions(request: Request):
        return StateResponse(**orchestrator_for(request).clear_suggestions().to_dict())

    @app.post("/suggestions/choose", response_model=ChooseResponse)
    async def choose_suggestion(req: ChooseRequest, request: Request):
        try:
            text = orchestrator_for(request).choose(req.kind)
        except NoSuggestionsAvailable as e:
            raise HTTPException(status_code=409, detail=str(e))
        return ChooseResponse(kind=req.kind, text=text)

    @app.get("/scenarios", response_model=ScenarioListResponse)
    async def list_scenarios(request: Request):
        records = orchestrator_for(request).store.list_all()
        return ScenarioListResponse(scenarios=[
            ScenarioInfo(id=str(r.id), label=r.label, source_text=r.source_text)
            for r in records
        ])

    return app


app = create_app()
