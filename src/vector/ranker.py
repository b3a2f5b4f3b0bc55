"""
Cosine similarity ranking of a query face embedding against a gallery of known faces.
Pure computation: no I/O, no state carried between calls.
"""

import time
from typing import List, Optional, Sequence

import numpy as np

from .types import Candidate, EmbeddingVector, MatchResult
from ..core.errors import InputError
from util.logging import logger

DEFAULT_THRESHOLD = 0.7
DEFAULT_TOP_N = 3


def _as_vector(value) -> Optional[np.ndarray]:
    """1-D float64 view of an embedding, or None if it is not a numeric vector."""
    if value is None:
        return None
    try:
        vector = np.asarray(value, dtype=np.float64)
    except (TypeError, ValueError):
        return None
    if vector.ndim != 1:
        return None
    return vector


def cosine_similarity(vec_a: EmbeddingVector, vec_b: EmbeddingVector) -> float:
    """
    Cosine similarity between two vectors.

    Vectors of different length, anything that is not a 1-D numeric vector,
    or a zero vector on either side, give 0.0 so they can never match.
    """
    a = _as_vector(vec_a)
    b = _as_vector(vec_b)

    if a is None or b is None or a.shape != b.shape:
        return 0.0

    norm_a = np.linalg.norm(a)
    norm_b = np.linalg.norm(b)
    if norm_a == 0 or norm_b == 0:
        return 0.0

    # Rounding can push identical directions slightly past 1
    return float(np.clip(np.dot(a, b) / (norm_a * norm_b), -1.0, 1.0))


class MatchRanker:
    """Ranks candidates by cosine similarity, keeping the top_n above threshold."""

    def __init__(self, threshold: float = DEFAULT_THRESHOLD, top_n: int = DEFAULT_TOP_N):
        """
        Args:
            threshold: similarity a candidate must strictly exceed to match
            top_n: maximum number of matches returned
        """
        if not -1.0 <= threshold < 1.0:
            raise ValueError(f"threshold must be in [-1, 1), got {threshold}")
        if isinstance(top_n, bool) or not isinstance(top_n, int) or top_n < 1:
            raise ValueError(f"top_n must be a positive integer, got {top_n}")

        self.threshold = threshold
        self.top_n = top_n

    def rank(self, query: Optional[EmbeddingVector], candidates: Sequence[Candidate]) -> List[MatchResult]:
        """
        Rank candidates against the query embedding.

        Args:
            query: Query face embedding, must be non-empty
            candidates: Known faces to compare against (may be empty)

        Returns:
            At most top_n matches, highest confidence first. Equal similarities
            keep their input order.

        Raises:
            InputError: if the query embedding is missing, empty or not a 1-D numeric vector
        """
        if query is None:
            raise InputError("no query embedding supplied")

        query_vector = _as_vector(query)
        if query_vector is None:
            raise InputError("query embedding must be a 1-D numeric vector")
        if query_vector.size == 0:
            raise InputError("no query embedding supplied")

        start_time = time.time()
        query_dim = query_vector.size

        scored = []
        skipped_mismatched = 0
        for candidate in candidates:
            # Malformed or wrong-sized embeddings never match, even under a negative threshold
            embedding = _as_vector(candidate.embedding)
            if embedding is None or embedding.shape != query_vector.shape:
                skipped_mismatched += 1
                continue
            similarity = cosine_similarity(query_vector, embedding)
            if similarity > self.threshold:
                scored.append((candidate, similarity))

        # sorted() is stable, so ties stay in input order
        scored = sorted(scored, key=lambda item: item[1], reverse=True)[:self.top_n]

        matches = [
            MatchResult(
                id=candidate.id,
                name=candidate.name,
                photo_url=candidate.photo_url,
                confidence_score=max(0.0, similarity) * 100,
            )
            for candidate, similarity in scored
        ]

        logger.log_match_operation(
            query_dim=query_dim,
            candidate_count=len(candidates),
            match_count=len(matches),
            threshold=self.threshold,
            top_n=self.top_n,
            skipped_mismatched=skipped_mismatched,
            duration_ms=round((time.time() - start_time) * 1000, 2),
        )

        return matches
