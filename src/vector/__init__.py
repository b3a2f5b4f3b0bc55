"""
Face embedding and similarity ranking.
"""

# Package initialization for vector module
from .ranker import MatchRanker, cosine_similarity, DEFAULT_THRESHOLD, DEFAULT_TOP_N
from .types import Candidate, MatchResult, EmbeddingVector
from .embeddings import IImageEmbeddingProvider, DeterministicHashEmbedding, SentenceTransformerImageEmbedding
from .data_uri import decode_data_uri

__all__ = [
    'MatchRanker',
    'cosine_similarity',
    'DEFAULT_THRESHOLD',
    'DEFAULT_TOP_N',
    'Candidate',
    'MatchResult',
    'EmbeddingVector',
    'IImageEmbeddingProvider',
    'DeterministicHashEmbedding',
    'SentenceTransformerImageEmbedding',
    'decode_data_uri'
]
