"""
Runtime configuration - read from environment variables with development defaults.
Single point of control for thresholds, timings and provider selection.
"""

import os
from dotenv import load_dotenv

load_dotenv()

# Debug flag
DEBUG = os.getenv("DEBUG", "true").lower() == "true"

# Retrieval configuration
SIMILARITY_THRESHOLD = float(os.getenv("SIMILARITY_THRESHOLD", "0.6"))
EMBED_PROVIDER = os.getenv("EMBED_PROVIDER", "hash")  # hash|sentence
EMBED_MODEL_NAME = os.getenv("EMBED_MODEL_NAME", "all-MiniLM-L6-v2")
EMBED_DIM = int(os.getenv("EMBED_DIM", "384"))  # used by the hash provider
SEED_SCENARIOS = os.getenv("SEED_SCENARIOS", "true").lower() == "true"

# Transcript debounce (seconds of silence before a transcript is considered settled)
DEBOUNCE_INTERVAL_SEC = float(os.getenv("DEBOUNCE_INTERVAL_SEC", "1.0"))

# Suggestion generator configuration
GENERATOR_PROVIDER = os.getenv("GENERATOR_PROVIDER", "mock")  # mock|ollama
GENERATOR_TIMEOUT_SEC = float(os.getenv("GENERATOR_TIMEOUT_SEC", "20"))
OLLAMA_MODEL = os.getenv("OLLAMA_MODEL", "llama3.2:3b")
OLLAMA_HOST = os.getenv("OLLAMA_HOST")  # None uses the client default

# Version string
VERSION = "0.1.0"


def debug_enabled():
    """Check if debug mode is enabled."""
    return os.getenv("DEBUG", "true").lower() == "true"


def get_embedding_provider():
    """Get configured embedding provider implementation."""
    if EMBED_PROVIDER == "sentence":
        from ..vector.embeddings import SentenceTransformerEmbedding
        return SentenceTransformerEmbedding(EMBED_MODEL_NAME)

    from ..vector.embeddings import DeterministicHashEmbedding
    return DeterministicHashEmbedding(dimension=EMBED_DIM)


def get_suggestion_generator():
    """Get configured suggestion generator implementation."""
    if GENERATOR_PROVIDER == "ollama":
        from ..agents.ollama_generator import OllamaSuggestionGenerator
        return OllamaSuggestionGenerator(OLLAMA_MODEL, host=OLLAMA_HOST)

    from ..agents.mock_generator import MockSuggestionGenerator
    return MockSuggestionGenerator()


def get_generator_timeout():
    """Generator timeout in seconds, None when disabled (<= 0)."""
    return GENERATOR_TIMEOUT_SEC if GENERATOR_TIMEOUT_SEC > 0 else None


def get_orchestrator(synthesizer=None):
    """Build a ContextOrchestrator wired from configuration, seeding scenarios if enabled."""
    from ..vector.embeddings import Vectorizer
    from ..vector.index import SimilarityIndex
    from ..vector.store import InMemoryScenarioStore, seed_default_scenarios
    from .orchestrator import ContextOrchestrator

    vectorizer = Vectorizer(get_embedding_provider())
    store = InMemoryScenarioStore()
    if SEED_SCENARIOS:
        seed_default_scenarios(store, vectorizer)

    return ContextOrchestrator(
        vectorizer=vectorizer,
        store=store,
        generator=get_suggestion_generator(),
        index=SimilarityIndex(SIMILARITY_THRESHOLD),
        debounce_interval=DEBOUNCE_INTERVAL_SEC,
        generator_timeout=get_generator_timeout(),
        synthesizer=synthesizer
    )


def validate_config():
    """Validate configuration and return any issues."""
    issues = []

    if not -1.0 <= SIMILARITY_THRESHOLD < 1.0:
        issues.append(f"SIMILARITY_THRESHOLD must be in [-1, 1): {SIMILARITY_THRESHOLD}")

    if DEBOUNCE_INTERVAL_SEC < 0:
        issues.append("DEBOUNCE_INTERVAL_SEC must be >= 0")

    if EMBED_PROVIDER not in ["hash", "sentence"]:
        issues.append(f"Invalid EMBED_PROVIDER: {EMBED_PROVIDER}")

    if EMBED_DIM < 1:
        issues.append("EMBED_DIM must be >= 1")

    if GENERATOR_PROVIDER not in ["mock", "ollama"]:
        issues.append(f"Invalid GENERATOR_PROVIDER: {GENERATOR_PROVIDER}")

    return issues
