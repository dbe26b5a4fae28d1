"""
Error taxonomy for the context-retrieval pipeline.
Every error here is recoverable: it degrades one request, never the orchestrator.
"""


class SignConnectError(Exception):
    """Base class for all pipeline errors."""


class EmbeddingUnavailable(SignConnectError):
    """The embedding provider could not produce a vector for this text."""


class StoreUnavailable(SignConnectError):
    """The scenario snapshot could not be read."""


class GeneratorError(SignConnectError):
    """Base class for suggestion generator failures."""


class GeneratorUnavailable(GeneratorError):
    """The suggestion generator could not be reached or failed internally."""


class GeneratorTimeout(GeneratorError):
    """The suggestion generator did not answer within the allotted time."""


class GeneratorRefused(GeneratorError):
    """The suggestion generator answered but refused or broke the reply schema."""


class NoSuggestionsAvailable(SignConnectError):
    """A suggestion was chosen while no suggestion set is published."""


class ConfigurationError(SignConnectError):
    """Configuration values are invalid."""
