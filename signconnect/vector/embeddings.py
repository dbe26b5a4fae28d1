"""
Embedding providers and the Vectorizer that turns transcript text into vectors.
Providers are injected; nothing here loads a model at import time.
"""

from abc import ABC, abstractmethod
import asyncio
import hashlib
import numpy as np

from .types import as_vector, EmbeddingVector
from ..core.errors import EmbeddingUnavailable


class IEmbeddingProvider(ABC):
    """Abstract interface for embedding providers."""

    @abstractmethod
    def embed_text(self, text: str) -> list[float]:
        """Generate embedding vector for given text."""
        pass

    @abstractmethod
    def get_dimension(self) -> int:
        """Get the dimension of the embedding vectors."""
        pass

    @property
    def name(self) -> str:
        return self.__class__.__name__


class DeterministicHashEmbedding(IEmbeddingProvider):
    """Deterministic hash-based embedding provider for testing purposes.

    Each token of the text is hashed into a seed for a pseudo-random direction,
    and the directions are summed and normalized. Texts sharing words end up
    with a positive cosine similarity, so the provider is good enough for
    offline development without downloading a model.
    """

    def __init__(self, dimension: int = 384):
        self.dimension = dimension

    def _token_vector(self, token: str) -> np.ndarray:
        seed = int(hashlib.md5(token.encode()).hexdigest()[:8], 16)
        return np.random.default_rng(seed).standard_normal(self.dimension)

    def embed_text(self, text: str) -> list[float]:
        """Generate deterministic embedding vector from hashed tokens."""
        tokens = [t for t in "".join(c.lower() if c.isalnum() else " " for c in text).split() if t]
        vector = np.zeros(self.dimension)
        for token in tokens:
            vector += self._token_vector(token)

        norm = np.linalg.norm(vector)
        if norm > 0:
            vector = vector / norm
        return vector.tolist()

    def get_dimension(self) -> int:
        """Get the dimension of the embedding vectors."""
        return self.dimension


class SentenceTransformerEmbedding(IEmbeddingProvider):
    """Sentence transformers embedding provider using pre-trained models.

    The model is loaded on first use and produces normalized sentence vectors.
    """

    def __init__(self, model_name: str = "all-MiniLM-L6-v2"):
        self.model_name = model_name
        self._model = None
        self._dimension = None

    @property
    def model(self):
        if self._model is None:
            from sentence_transformers import SentenceTransformer
            self._model = SentenceTransformer(self.model_name)
        return self._model

    @property
    def name(self) -> str:
        return f"sentence-transformers/{self.model_name}"

    def embed_text(self, text: str) -> list[float]:
        """Generate embedding vector using sentence transformers."""
        embedding = self.model.encode(text, convert_to_tensor=False, normalize_embeddings=True)
        return embedding.tolist()

    def get_dimension(self) -> int:
        """Get the dimension of the embedding vectors."""
        if self._dimension is None:
            self._dimension = self.model.get_sentence_embedding_dimension()
        return self._dimension


class Vectorizer:
    """
    Converts text into embedding vectors through an injected provider.

    Safe to call concurrently: the provider reference is the only state and it
    is never reassigned after construction. Provider calls run in a worker
    thread so the event loop keeps serving transcript updates.
    """

    def __init__(self, provider: IEmbeddingProvider):
        self.provider = provider

    def embed_sync(self, text: str) -> EmbeddingVector:
        """
        Embed text on the calling thread.

        Raises:
            EmbeddingUnavailable: text is blank, the provider failed, or the
                vector it produced is unusable
        """
        if text is None or not text.strip():
            raise EmbeddingUnavailable("cannot embed empty text")

        try:
            raw = self.provider.embed_text(text)
        except Exception as e:
            raise EmbeddingUnavailable(f"{self.provider.name} failed: {e}") from e

        if raw is None:
            raise EmbeddingUnavailable(f"{self.provider.name} returned no vector")

        vector = as_vector(raw)
        if not vector:
            raise EmbeddingUnavailable(f"{self.provider.name} returned an empty vector")
        if not np.all(np.isfinite(vector)):
            raise EmbeddingUnavailable(f"{self.provider.name} returned non-finite values")
        if not np.any(vector):
            raise EmbeddingUnavailable(f"{self.provider.name} returned a zero vector")

        expected = self.provider.get_dimension()
        if expected and len(vector) != expected:
            raise EmbeddingUnavailable(
                f"{self.provider.name} returned {len(vector)} dimensions, expected {expected}"
            )
        return vector

    async def embed(self, text: str) -> EmbeddingVector:
        """Embed text without blocking the event loop."""
        return await asyncio.to_thread(self.embed_sync, text)

    @property
    def dimension(self) -> int:
        return self.provider.get_dimension()
