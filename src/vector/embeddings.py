"""
Image embedding providers for face matching.
Each provider turns a photo data URI into a fixed-length embedding vector.
"""

from abc import ABC, abstractmethod
import hashlib
import io

from .data_uri import decode_data_uri
from ..core.errors import InputError


class IImageEmbeddingProvider(ABC):
    """Abstract interface for image embedding providers."""

    @abstractmethod
    def embed_image(self, photo_data_uri: str) -> list[float]:
        """Generate embedding vector for the photo in the given data URI."""
        pass

    @abstractmethod
    def get_dimension(self) -> int:
        """Get the dimension of the embedding vectors."""
        pass


class DeterministicHashEmbedding(IImageEmbeddingProvider):
    """Deterministic hash-based embedding provider for testing purposes.

    Vectors are derived from a SHA-256 digest chain over the decoded image
    bytes, so the same photo always yields the same vector and no model
    download is needed. Visually similar photos do NOT get similar vectors.
    """

    def __init__(self, dimension: int = 1024):
        if dimension < 1:
            raise ValueError("dimension must be positive")
        self.dimension = dimension

    def embed_image(self, photo_data_uri: str) -> list[float]:
        """Generate deterministic embedding vector from the photo bytes."""
        _, payload = decode_data_uri(photo_data_uri)

        vector = []
        counter = 0
        while len(vector) < self.dimension:
            digest = hashlib.sha256(payload + counter.to_bytes(4, "big")).digest()
            for i in range(0, len(digest), 4):
                value = int.from_bytes(digest[i:i + 4], "big")
                # Map to [-1, 1] for cosine similarity
                vector.append((value / (2**32)) * 2 - 1)
            counter += 1

        return vector[:self.dimension]

    def get_dimension(self) -> int:
        """Get the dimension of the embedding vectors."""
        return self.dimension


class SentenceTransformerImageEmbedding(IImageEmbeddingProvider):
    """CLIP image embeddings through sentence-transformers.

    The model is loaded on first use and shared by every call on this instance.
    """

    def __init__(self, model_name: str = "clip-ViT-B-32"):
        self.model_name = model_name
        self._model = None
        self._dimension = None

    @property
    def model(self):
        if self._model is None:
            from sentence_transformers import SentenceTransformer
            self._model = SentenceTransformer(self.model_name)
        return self._model

    def _load_image(self, photo_data_uri: str):
        from PIL import Image, UnidentifiedImageError

        mime_type, payload = decode_data_uri(photo_data_uri)
        if not mime_type.startswith("image/"):
            raise InputError(f"unsupported photo type: {mime_type}")

        try:
            image = Image.open(io.BytesIO(payload))
            return image.convert("RGB")
        except (UnidentifiedImageError, OSError) as e:
            raise InputError(f"photo could not be decoded: {e}")

    def embed_image(self, photo_data_uri: str) -> list[float]:
        """Generate embedding vector using the CLIP image encoder."""
        image = self._load_image(photo_data_uri)
        embedding = self.model.encode(image, convert_to_tensor=False)
        return embedding.tolist()

    def get_dimension(self) -> int:
        """Get the dimension of the embedding vectors."""
        if self._dimension is None:
            self._dimension = self.model.get_sentence_embedding_dimension()
        return self._dimension
