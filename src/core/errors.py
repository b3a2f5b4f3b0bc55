"""
Face match error taxonomy.
Only InputError is raised by the ranking core; the embedding errors belong to the service layer.
"""


class FaceMatchError(Exception):
    """Base exception for face match operations."""
    pass


class InputError(FaceMatchError):
    """Raised when the caller supplies an unusable query (missing embedding, bad photo)."""
    pass


class EmbeddingError(FaceMatchError):
    """Raised when the embedding provider fails or returns nothing."""
    pass


class EmbeddingUnavailableError(EmbeddingError):
    """Raised when no embedding provider is configured."""
    pass
