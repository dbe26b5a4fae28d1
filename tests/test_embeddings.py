"""
Tests for embedding providers and the Vectorizer.
"""

import asyncio
import math

import numpy as np
import pytest
from unittest.mock import Mock

from signconnect.core.errors import EmbeddingUnavailable
from signconnect.vector.embeddings import (
    IEmbeddingProvider,
    DeterministicHashEmbedding,
    SentenceTransformerEmbedding,
    Vectorizer
)
from signconnect.vector.index import cosine_similarity


class StaticEmbedding(IEmbeddingProvider):
    """Provider returning fixed vectors for known texts."""

    def __init__(self, table, dimension=3):
        self.table = table
        self.dimension = dimension

    def embed_text(self, text):
        return self.table[text]

    def get_dimension(self):
        return self.dimension


def test_embedding_interface():
    """Test that the hash provider implements the interface correctly."""
    embedder = DeterministicHashEmbedding(dimension=384)

    assert isinstance(embedder, IEmbeddingProvider)
    assert embedder.get_dimension() == 384


def test_deterministic_embedding():
    """Test that the same input always produces the same output."""
    embedder = DeterministicHashEmbedding(dimension=384)

    vector1 = embedder.embed_text("Hello, world!")
    vector2 = DeterministicHashEmbedding(dimension=384).embed_text("Hello, world!")

    assert vector1 == vector2
    assert len(vector1) == 384


def test_hash_embedding_is_normalized():
    """Test that non-empty text produces a unit vector."""
    vector = DeterministicHashEmbedding(dimension=128).embed_text("I would like a latte")
    assert math.isclose(np.linalg.norm(vector), 1.0, rel_tol=1e-9)


def test_shared_words_are_more_similar():
    """Texts sharing words should score higher than unrelated texts."""
    embedder = DeterministicHashEmbedding(dimension=384)

    latte = embedder.embed_text("I would like a large latte with oat milk")
    similar = embedder.embed_text("a large latte with oat milk please")
    unrelated = embedder.embed_text("call an ambulance now")

    assert cosine_similarity(latte, similar) > cosine_similarity(latte, unrelated)
    assert cosine_similarity(latte, similar) > 0.5


def test_hash_embedding_ignores_case_and_punctuation():
    embedder = DeterministicHashEmbedding(dimension=64)
    assert embedder.embed_text("Hello, World!") == embedder.embed_text("hello world")


def test_hash_embedding_without_tokens_is_zero():
    vector = DeterministicHashEmbedding(dimension=16).embed_text("!!!")
    assert vector == [0.0] * 16


def test_sentence_transformer_uses_loaded_model():
    """Test the sentence-transformers provider without downloading a model."""
    provider = SentenceTransformerEmbedding("test-model")
    model = Mock()
    model.encode.return_value = np.array([0.6, 0.8])
    model.get_sentence_embedding_dimension.return_value = 2
    provider._model = model

    assert provider.embed_text("hello") == [0.6, 0.8]
    assert provider.get_dimension() == 2
    assert provider.name == "sentence-transformers/test-model"
    model.encode.assert_called_once_with("hello", convert_to_tensor=False, normalize_embeddings=True)


class TestVectorizer:
    """Test cases for the Vectorizer wrapper."""

    def test_embed_returns_immutable_vector(self):
        vectorizer = Vectorizer(StaticEmbedding({"hi": [1.0, 0.0, 0.0]}))

        vector = vectorizer.embed_sync("hi")

        assert vector == (1.0, 0.0, 0.0)
        assert isinstance(vector, tuple)

    @pytest.mark.parametrize("text", ["", "   ", "\n\t", None])
    def test_blank_text_is_unavailable(self, text):
        provider = Mock(spec=IEmbeddingProvider)
        vectorizer = Vectorizer(provider)

        with pytest.raises(EmbeddingUnavailable):
            vectorizer.embed_sync(text)
        provider.embed_text.assert_not_called()

    def test_provider_error_is_wrapped(self):
        vectorizer = Vectorizer(StaticEmbedding({}))

        with pytest.raises(EmbeddingUnavailable) as exc_info:
            vectorizer.embed_sync("unknown text")
        assert isinstance(exc_info.value.__cause__, KeyError)

    def test_missing_vector_is_unavailable(self):
        vectorizer = Vectorizer(StaticEmbedding({"hi": None}))
        with pytest.raises(EmbeddingUnavailable):
            vectorizer.embed_sync("hi")

    def test_non_finite_vector_is_unavailable(self):
        vectorizer = Vectorizer(StaticEmbedding({"hi": [1.0, float("nan"), 0.0]}))
        with pytest.raises(EmbeddingUnavailable):
            vectorizer.embed_sync("hi")

    def test_zero_vector_is_unavailable(self):
        vectorizer = Vectorizer(StaticEmbedding({"hi": [0.0, 0.0, 0.0]}))
        with pytest.raises(EmbeddingUnavailable):
            vectorizer.embed_sync("hi")

    def test_text_without_tokens_is_unavailable(self):
        vectorizer = Vectorizer(DeterministicHashEmbedding(dimension=16))
        with pytest.raises(EmbeddingUnavailable):
            vectorizer.embed_sync("?!")

    def test_dimension_mismatch_is_unavailable(self):
        vectorizer = Vectorizer(StaticEmbedding({"hi": [1.0, 0.0]}, dimension=3))
        with pytest.raises(EmbeddingUnavailable):
            vectorizer.embed_sync("hi")

    def test_async_embed(self):
        vectorizer = Vectorizer(StaticEmbedding({"hi": [0.0, 1.0, 0.0]}))

        vector = asyncio.run(vectorizer.embed("hi"))

        assert vector == (0.0, 1.0, 0.0)
        assert vectorizer.dimension == 3

    def test_concurrent_embeds(self):
        vectorizer = Vectorizer(DeterministicHashEmbedding(dimension=32))
        texts = [f"sentence number {i}" for i in range(20)]

        async def embed_all():
            return await asyncio.gather(*(vectorizer.embed(t) for t in texts))

        vectors = asyncio.run(embed_all())

        assert vectors == [vectorizer.embed_sync(t) for t in texts]
