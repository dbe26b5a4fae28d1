"""
Context orchestration: transcript → scenario retrieval → reply suggestions.

Each settled transcript runs one pass through the phases

    embedding → matching → generating → published

Passes run concurrently, but only the newest one may change the published
state. Every write goes through _commit, which runs on the orchestrator's
event loop and checks for a newer request with no suspension point between
the check and the write.
"""

import asyncio
from dataclasses import replace
from typing import Any, Callable, Dict, List, Optional

from .config import DEBOUNCE_INTERVAL_SEC, SIMILARITY_THRESHOLD, get_generator_timeout
from .debounce import DebounceScheduler
from .errors import (
    EmbeddingUnavailable,
    GeneratorError,
    GeneratorTimeout,
    GeneratorUnavailable,
    NoSuggestionsAvailable,
    StoreUnavailable,
)
from .state import OrchestratorState, TranscriptEvent
from ..agents.suggestions import ISuggestionGenerator, SuggestionSet
from ..agents.voice import ISpeechSynthesizer
from ..vector.embeddings import Vectorizer
from ..vector.index import SimilarityIndex
from ..vector.store import IScenarioStore
from ..vector.types import ScenarioRecord
from ..util.logging import logger

StateObserver = Callable[[OrchestratorState], None]


class ContextOrchestrator:
    """
    Owns the OrchestratorState and coordinates retrieval with suggestion generation.
    """

    def __init__(self, vectorizer: Vectorizer, store: IScenarioStore, generator: ISuggestionGenerator,
                 index: Optional[SimilarityIndex] = None,
                 debounce_interval: float = DEBOUNCE_INTERVAL_SEC,
                 generator_timeout: Optional[float] = None,
                 synthesizer: Optional[ISpeechSynthesizer] = None):
        self.vectorizer = vectorizer
        self.store = store
        self.generator = generator
        self.index = index or SimilarityIndex(SIMILARITY_THRESHOLD)
        if generator_timeout is None:
            generator_timeout = get_generator_timeout()
        elif generator_timeout <= 0:
            generator_timeout = None
        self.generator_timeout = generator_timeout
        self.synthesizer = synthesizer
        self.debouncer = DebounceScheduler(self.process, debounce_interval)

        self._state = OrchestratorState()
        self._observers: List[StateObserver] = []
        self._last_submitted = 0
        self._newest_started = 0

    @property
    def state(self) -> OrchestratorState:
        return self._state

    def subscribe(self, observer: StateObserver) -> Callable[[], None]:
        """
        Register an observer called with every new state snapshot.

        Returns:
            A callable that removes the observer
        """
        self._observers.append(observer)

        def unsubscribe():
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def submit_transcript(self, text: str) -> Optional[TranscriptEvent]:
        """
        Accept a transcript update from the transcription source.

        Must be called on the orchestrator's event loop. Blank transcripts are
        ignored and return None, as is anything submitted after close().
        """
        if self.debouncer.closed or text is None or not text.strip():
            return None

        self._last_submitted += 1
        event = TranscriptEvent(text=text, sequence_number=self._last_submitted)
        logger.log_transcript(event.sequence_number, text)
        self.debouncer.on_event(event)
        return event

    async def process(self, event: TranscriptEvent) -> bool:
        """
        Run one orchestration pass for a settled transcript.

        Failures never escape: they end the pass with is_busy cleared and
        last_error set, unless a newer request has started meanwhile.

        Returns:
            True if the pass published its result, False if it was superseded
        """
        seq = event.sequence_number
        if seq < self._newest_started:
            logger.log_supersession(seq, self._newest_started, "idle")
            return False

        # Nothing below may suspend before the snapshot is taken
        self._newest_started = seq
        candidates = self._snapshot_scenarios()
        self._commit(seq, "embedding", is_busy=True, last_transcript=event.text, sequence_number=seq)

        phase = "embedding"
        try:
            try:
                vector = await self.vectorizer.embed(event.text)
            except EmbeddingUnavailable as e:
                logger.log_embedding(seq, "failed", {"error": str(e)})
                return self._commit(seq, phase, is_busy=False, last_error=e)
            logger.log_embedding(seq, details={"dimension": len(vector)})

            phase = "matching"
            match = self.index.best_match(vector, candidates)
            logger.log_match(seq, match.label, match.score, len(candidates))
            if not self._commit(seq, phase, current_context=match.record):
                return False

            phase = "generating"
            try:
                suggestions = await self._generate(event.text, match.label)
            except GeneratorError as e:
                logger.log_generation(seq, "failed", {"error": type(e).__name__, "message": str(e)})
                return self._commit(seq, phase, is_busy=False, last_error=e)

            logger.log_generation(seq, details={"context": match.label})
            return self._commit(seq, phase, is_busy=False, suggestions=suggestions, last_error=None)
        except Exception as e:
            logger.log_operation(f"orchestrator.{phase}", "failed", {
                "sequence_number": seq,
                "error": type(e).__name__,
                "message": str(e)
            })
            return self._commit(seq, phase, is_busy=False, last_error=e)

    def clear_suggestions(self) -> OrchestratorState:
        """Explicitly clear the published suggestion set."""
        self._publish(replace(self._state, suggestions=None))
        return self._state

    def choose(self, kind: str) -> str:
        """
        Pick one of the current suggestions and hand it to the speech synthesizer.

        Raises:
            NoSuggestionsAvailable: nothing is published yet
            ValueError: kind is not casual, formal or quick
        """
        suggestions = self._state.suggestions
        if suggestions is None:
            raise NoSuggestionsAvailable("no suggestions to choose from")

        text = suggestions.get(kind)
        if self.synthesizer is not None:
            self.synthesizer.speak(text)
        logger.log_operation("suggestions.choose", "success", {"kind": kind})
        return text

    async def wait_idle(self) -> None:
        """Wait until no debounce is pending and no pass is running."""
        while self.debouncer.pending:
            await asyncio.sleep(max(self.debouncer.quiet_period / 4, 0.005))
        await self.debouncer.wait_callbacks()

    async def close(self) -> None:
        """Stop accepting transcripts and let running passes finish."""
        self.debouncer.close()
        await self.debouncer.wait_callbacks()

    async def health_check(self) -> Dict[str, Any]:
        """Check health of the orchestrator and its collaborators."""
        health = {
            "orchestrator": "healthy",
            "embedding_provider": self.vectorizer.provider.name,
            "generator": self.generator.name,
            "is_busy": self._state.is_busy
        }

        try:
            health["scenarios"] = len(self.store.list_all())
            health["store"] = "healthy"
        except Exception:
            health["scenarios"] = 0
            health["store"] = "unhealthy"

        try:
            health["generator_status"] = "healthy" if await self.generator.health_check() else "unhealthy"
        except Exception:
            health["generator_status"] = "unhealthy"

        healthy = health["store"] == "healthy" and health["generator_status"] == "healthy"
        health["overall"] = "healthy" if healthy else "degraded"
        return health

    async def _generate(self, text: str, context_label: Optional[str]) -> SuggestionSet:
        try:
            return await asyncio.wait_for(self.generator.generate(text, context_label), self.generator_timeout)
        except asyncio.TimeoutError as e:
            raise GeneratorTimeout(f"{self.generator.name} did not answer within {self.generator_timeout}s") from e
        except GeneratorError:
            raise
        except Exception as e:
            raise GeneratorUnavailable(f"{self.generator.name} failed: {e}") from e

    def _snapshot_scenarios(self) -> List[ScenarioRecord]:
        try:
            return list(self.store.list_all())
        except Exception as e:
            error = e if isinstance(e, StoreUnavailable) else StoreUnavailable(str(e))
            logger.log_degraded("scenario_store", f"matching without scenarios: {error}")
            return []

    def _commit(self, seq: int, phase: str, **changes) -> bool:
        if seq < self._newest_started:
            logger.log_supersession(seq, self._newest_started, phase)
            return False

        self._publish(replace(self._state, **changes))
        return True

    def _publish(self, state: OrchestratorState) -> None:
        self._state = state
        for observer in list(self._observers):
            try:
                observer(state)
            except Exception as e:
                logger.error(f"State observer failed: {e}")
