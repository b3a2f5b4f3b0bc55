"""
Face match service configuration.
All settings come from environment variables, optionally loaded from a .env file.
Numeric settings stay raw strings here; the accessors parse them so a bad value
is reported by validate_match_config() instead of failing at import.
"""

import os

from dotenv import load_dotenv

load_dotenv()

# Debug flag, re-read through debug_enabled() so tests can toggle it
DEBUG = os.getenv("DEBUG", "true").lower() == "true"

# Ranking configuration
MATCH_THRESHOLD = os.getenv("MATCH_THRESHOLD", "0.7")
MATCH_TOP_N = os.getenv("MATCH_TOP_N", "3")

# Embedding configuration
EMBED_PROVIDER = os.getenv("EMBED_PROVIDER", "hash")  # hash|clip|none
EMBED_DIM = os.getenv("EMBED_DIM", "1024")
EMBED_MODEL_NAME = os.getenv("EMBED_MODEL_NAME", "clip-ViT-B-32")

# HTTP surface
FACE_MATCH_API_ENABLED = os.getenv("FACE_MATCH_API_ENABLED", "true").lower() == "true"

VALID_EMBED_PROVIDERS = ["hash", "clip", "none"]

# Version string
VERSION = "1.0.0"


def debug_enabled():
    """Check if debug mode is enabled."""
    return os.getenv("DEBUG", "true").lower() == "true"


def get_match_threshold() -> float:
    """Get the strict similarity cutoff. Raises ValueError for a non-numeric value."""
    return float(os.getenv("MATCH_THRESHOLD", MATCH_THRESHOLD))


def get_match_top_n() -> int:
    """Get the maximum number of matches returned per query. Raises ValueError for a non-integer value."""
    return int(os.getenv("MATCH_TOP_N", MATCH_TOP_N))


def get_embed_dim() -> int:
    """Get the hash provider dimension. Raises ValueError for a non-integer value."""
    return int(os.getenv("EMBED_DIM", EMBED_DIM))


def get_embed_provider_name() -> str:
    """Get the configured embedding provider name (hash|clip|none)."""
    return os.getenv("EMBED_PROVIDER", EMBED_PROVIDER).lower()


def is_face_match_api_enabled():
    """Check if the /faces endpoints are enabled."""
    return os.getenv("FACE_MATCH_API_ENABLED", "true").lower() == "true"


def get_embedding_provider():
    """Get configured image embedding provider. Returns None when embeddings are disabled."""
    provider = get_embed_provider_name()

    if provider == "none":
        return None
    elif provider == "clip":
        from src.vector.embeddings import SentenceTransformerImageEmbedding
        model_name = os.getenv("EMBED_MODEL_NAME", EMBED_MODEL_NAME)
        return SentenceTransformerImageEmbedding(model_name)
    else:
        # Unknown providers fall back to the hash provider
        from src.vector.embeddings import DeterministicHashEmbedding
        return DeterministicHashEmbedding(get_embed_dim())


def validate_match_config():
    """Validate match configuration and return any issues."""
    issues = []

    try:
        threshold = get_match_threshold()
        if not -1.0 <= threshold < 1.0:
            issues.append(f"MATCH_THRESHOLD must be in [-1, 1): {threshold}")
    except ValueError:
        issues.append(f"Invalid MATCH_THRESHOLD: {os.getenv('MATCH_THRESHOLD')}")

    try:
        if get_match_top_n() < 1:
            issues.append("MATCH_TOP_N must be >= 1")
    except ValueError:
        issues.append(f"Invalid MATCH_TOP_N: {os.getenv('MATCH_TOP_N')}")

    provider = get_embed_provider_name()
    if provider not in VALID_EMBED_PROVIDERS:
        issues.append(f"Invalid EMBED_PROVIDER: {provider}")

    if provider != "none" and provider != "clip":
        try:
            if get_embed_dim() < 1:
                issues.append("EMBED_DIM must be >= 1")
        except ValueError:
            issues.append(f"Invalid EMBED_DIM: {os.getenv('EMBED_DIM')}")

    return issues
