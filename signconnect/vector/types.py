"""
Value types shared by the vectorizer, the similarity index and the scenario store.
"""

from typing import Any, Hashable, Optional, Sequence, Tuple
from dataclasses import dataclass, field

import numpy as np

EmbeddingVector = Sequence[float]


def as_vector(values: Any) -> Tuple[float, ...]:
    """Freeze a list/array of numbers into an immutable tuple of floats."""
    return tuple(float(v) for v in np.asarray(values, dtype=float).ravel())


@dataclass(frozen=True)
class ScenarioRecord:
    """A stored conversational scenario with its embedded example text."""

    id: Hashable
    """Opaque identifier assigned by the scenario store"""

    label: str
    """Display label, e.g. "Coffee Shop" """

    vector: Tuple[float, ...]
    """Embedding of source_text"""

    source_text: str = ""
    """Example text the vector was computed from"""

    def __post_init__(self):
        if not isinstance(self.vector, tuple):
            object.__setattr__(self, "vector", as_vector(self.vector))


@dataclass(frozen=True)
class MatchResult:
    """Outcome of a best-match search."""

    scenario_id: Optional[Hashable] = None
    """Identifier of the winning scenario, None when nothing cleared the threshold"""

    label: Optional[str] = None
    """Label of the winning scenario"""

    score: float = 0.0
    """Best cosine similarity seen, in [-1, 1]"""

    record: Optional[ScenarioRecord] = field(default=None, compare=False, repr=False)

    @property
    def matched(self) -> bool:
        return self.scenario_id is not None

