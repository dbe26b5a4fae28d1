"""
Vector layer: embedding providers, cosine matching and the scenario store.
"""

from .types import ScenarioRecord, MatchResult, EmbeddingVector
from .embeddings import IEmbeddingProvider, DeterministicHashEmbedding, SentenceTransformerEmbedding, Vectorizer
from .index import SimilarityIndex, cosine_similarity
from .store import IScenarioStore, InMemoryScenarioStore, seed_default_scenarios

__all__ = [
    'ScenarioRecord',
    'MatchResult',
    'EmbeddingVector',
    'IEmbeddingProvider',
    'DeterministicHashEmbedding',
    'SentenceTransformerEmbedding',
    'Vectorizer',
    'SimilarityIndex',
    'cosine_similarity',
    'IScenarioStore',
    'InMemoryScenarioStore',
    'seed_default_scenarios'
]
