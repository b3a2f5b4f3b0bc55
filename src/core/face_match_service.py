"""
Face match service: embeds a query photo and ranks it against a gallery of known faces.
An embedding failure aborts the whole operation; there is no partial result.
"""

from typing import Any, Dict, List, Optional, Sequence, Union

from .config import get_embedding_provider, get_match_threshold, get_match_top_n
from .errors import EmbeddingError, EmbeddingUnavailableError, InputError
from ..vector.data_uri import describe_data_uri
from ..vector.embeddings import IImageEmbeddingProvider
from ..vector.ranker import MatchRanker
from ..vector.types import Candidate, EmbeddingVector, MatchResult
from util.logging import logger

KnownFace = Union[Candidate, Dict[str, Any]]


def _to_candidates(known_faces: Sequence[KnownFace]) -> List[Candidate]:
    return [face if isinstance(face, Candidate) else Candidate.from_dict(face) for face in known_faces]


class FaceMatchService:
    """
    Missing-person face matching over a caller-supplied gallery.

    The embedding provider is injected; None means embeddings are not
    configured and every embedding call raises EmbeddingUnavailableError.
    """

    def __init__(self, embedding_provider: Optional[IImageEmbeddingProvider], ranker: Optional[MatchRanker] = None):
        self.embedding_provider = embedding_provider
        self.ranker = ranker if ranker is not None else MatchRanker(
            threshold=get_match_threshold(),
            top_n=get_match_top_n(),
        )

    @classmethod
    def from_config(cls) -> "FaceMatchService":
        """Build a service using the configured embedding provider and ranking settings."""
        return cls(get_embedding_provider())

    @property
    def embedding_enabled(self) -> bool:
        return self.embedding_provider is not None

    def _embed(self, photo_data_uri: str, operation: str, failure_message: str) -> List[float]:
        photo = describe_data_uri(photo_data_uri)

        if self.embedding_provider is None:
            logger.log_embedding_operation(operation, photo, status="failed", details={"reason": "no provider"})
            raise EmbeddingUnavailableError("Face embeddings are not configured.")

        try:
            embedding = self.embedding_provider.embed_image(photo_data_uri)
        except InputError:
            logger.log_embedding_operation(operation, photo, status="rejected")
            raise
        except Exception as e:
            logger.log_embedding_operation(operation, photo, status="failed", details={"error": str(e)[:100]})
            raise EmbeddingError(failure_message) from e

        if embedding is None or len(embedding) == 0:
            logger.log_embedding_operation(operation, photo, status="failed", details={"reason": "empty embedding"})
            raise EmbeddingError(failure_message)

        logger.log_embedding_operation(operation, photo, details={"dimension": len(embedding)})
        return list(embedding)

    def extract_face_embedding(self, photo_data_uri: str) -> List[float]:
        """
        Extract a face embedding from a photo.

        Args:
            photo_data_uri: Photo as 'data:<mimetype>;base64,<encoded_data>'

        Returns:
            The embedding vector

        Raises:
            InputError: if the photo cannot be decoded
            EmbeddingError: if the provider fails or returns nothing
            EmbeddingUnavailableError: if no provider is configured
        """
        return self._embed(photo_data_uri, "extract", "Could not generate face embedding.")

    def rank_embedding(self, query: Optional[EmbeddingVector], known_faces: Sequence[KnownFace]) -> List[MatchResult]:
        """Rank a precomputed query embedding against the known faces."""
        return self.ranker.rank(query, _to_candidates(known_faces))

    def find_matching_faces(self, query_photo_data_uri: str, known_faces: Sequence[KnownFace]) -> List[MatchResult]:
        """
        Find the known faces that best match the person in the query photo.

        Args:
            query_photo_data_uri: Photo of the person to find, as a data URI
            known_faces: Gallery of Candidate objects or dicts with id, name, photoUrl, embedding

        Returns:
            Ranked matches, possibly empty ("no matches found" is not an error)
        """
        candidates = _to_candidates(known_faces)
        query_embedding = self._embed(
            query_photo_data_uri, "query", "Could not generate embedding for the query image."
        )
        return self.ranker.rank(query_embedding, candidates)
