"""
Scenario store interface, an in-memory implementation and default seed data.
"""

from abc import ABC, abstractmethod
import itertools
import threading
from typing import Hashable, List, Optional, Sequence, Tuple

from .types import ScenarioRecord, as_vector
from .embeddings import Vectorizer
from ..core.errors import EmbeddingUnavailable
from ..util.logging import logger

DEFAULT_SCENARIOS: Sequence[Tuple[str, str]] = (
    ("Coffee Shop", "I would like a large latte with oat milk, please."),
    ("Medical", "I am deaf. I communicate using this app. Please speak clearly."),
    ("Emergency", "I need help. Please call an ambulance to my location."),
    ("Greeting", "Hello! Nice to meet you."),
)


class IScenarioStore(ABC):
    """Read access to stored scenarios."""

    @abstractmethod
    def list_all(self) -> List[ScenarioRecord]:
        """Return a snapshot of all scenarios in insertion order."""
        pass


class InMemoryScenarioStore(IScenarioStore):
    """Thread-safe in-memory scenario store. Reads return copies."""

    def __init__(self, records: Optional[Sequence[ScenarioRecord]] = None):
        self._lock = threading.Lock()
        self._records = {}  # id -> ScenarioRecord, insertion ordered
        self._ids = itertools.count(1)
        for record in records or ():
            self.add(record)

    def add(self, record: ScenarioRecord) -> ScenarioRecord:
        """Add or replace a scenario record."""
        with self._lock:
            self._records[record.id] = record
        return record

    def create(self, label: str, vector, source_text: str = "") -> ScenarioRecord:
        """Create a record with a store-assigned id."""
        record = ScenarioRecord(
            id=f"scenario_{next(self._ids)}",
            label=label,
            vector=as_vector(vector),
            source_text=source_text
        )
        return self.add(record)

    def remove(self, record_id: Hashable) -> None:
        with self._lock:
            self._records.pop(record_id, None)

    def clear(self) -> None:
        with self._lock:
            self._records.clear()

    def list_all(self) -> List[ScenarioRecord]:
        with self._lock:
            return list(self._records.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


def seed_default_scenarios(store: InMemoryScenarioStore, vectorizer: Vectorizer,
                           scenarios: Sequence[Tuple[str, str]] = DEFAULT_SCENARIOS) -> List[ScenarioRecord]:
    """
    Embed and store the default scenarios, replacing any existing ones.

    Scenarios whose text cannot be embedded are skipped.

    Returns:
        The records that were stored
    """
    store.clear()
    seeded = []
    for label, text in scenarios:
        try:
            vector = vectorizer.embed_sync(text)
        except EmbeddingUnavailable as e:
            logger.log_operation("scenario.seed", "failed", {"label": label, "error": str(e)})
            continue
        seeded.append(store.create(label, vector, text))

    logger.log_operation("scenario.seed", "success", {"count": len(seeded)})
    return seeded
