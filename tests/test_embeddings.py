"""
Image embedding providers.
"""

import base64
import io

import numpy as np
import pytest
from unittest.mock import MagicMock
from PIL import Image

from src.core.errors import InputError
from src.vector.embeddings import (
    IImageEmbeddingProvider,
    DeterministicHashEmbedding,
    SentenceTransformerImageEmbedding
)


def to_data_uri(payload: bytes, mime_type: str = "image/png") -> str:
    return f"data:{mime_type};base64,{base64.b64encode(payload).decode('ascii')}"


def png_data_uri(color=(200, 30, 30)) -> str:
    buffer = io.BytesIO()
    Image.new("RGB", (8, 8), color).save(buffer, format="PNG")
    return to_data_uri(buffer.getvalue())


def test_embedding_interface():
    """Both providers implement the interface."""
    assert isinstance(DeterministicHashEmbedding(), IImageEmbeddingProvider)
    assert isinstance(SentenceTransformerImageEmbedding(), IImageEmbeddingProvider)


def test_hash_default_dimension():
    """The hash provider defaults to the documented 1024 dimensions."""
    embedder = DeterministicHashEmbedding()
    assert embedder.get_dimension() == 1024
    assert len(embedder.embed_image(to_data_uri(b"photo bytes"))) == 1024


def test_deterministic_embedding():
    """The same photo always produces the same vector, across instances."""
    photo = to_data_uri(b"\x89PNG fake photo")

    vector1 = DeterministicHashEmbedding(dimension=64).embed_image(photo)
    vector2 = DeterministicHashEmbedding(dimension=64).embed_image(photo)

    assert vector1 == vector2
    assert len(vector1) == 64


def test_different_photos_produce_different_vectors():
    embedder = DeterministicHashEmbedding(dimension=64)

    vector1 = embedder.embed_image(to_data_uri(b"photo one"))
    vector2 = embedder.embed_image(to_data_uri(b"photo two"))

    assert vector1 != vector2


def test_hash_values_in_range():
    """Values are mapped to [-1, 1] so the vector works with cosine similarity."""
    vector = DeterministicHashEmbedding(dimension=100).embed_image(to_data_uri(b"range check"))

    assert all(-1.0 <= v <= 1.0 for v in vector)
    assert np.linalg.norm(vector) > 0


def test_hash_odd_dimension():
    """Dimensions that are not a multiple of the digest size are truncated exactly."""
    assert len(DeterministicHashEmbedding(dimension=13).embed_image(to_data_uri(b"x"))) == 13


def test_hash_invalid_dimension():
    with pytest.raises(ValueError):
        DeterministicHashEmbedding(dimension=0)


def test_hash_rejects_malformed_uri():
    with pytest.raises(InputError):
        DeterministicHashEmbedding().embed_image("not a data uri")


def test_clip_model_is_lazy():
    """Creating the provider does not load the model."""
    embedder = SentenceTransformerImageEmbedding("clip-ViT-B-32")
    assert embedder.model_name == "clip-ViT-B-32"
    assert embedder._model is None


def test_clip_embeds_decoded_image():
    """The decoded RGB image is passed to the model and the vector returned as a list."""
    embedder = SentenceTransformerImageEmbedding()
    embedder._model = MagicMock()
    embedder._model.encode.return_value = np.array([0.1, 0.2, 0.3])

    vector = embedder.embed_image(png_data_uri())

    assert vector == pytest.approx([0.1, 0.2, 0.3])
    image = embedder._model.encode.call_args[0][0]
    assert isinstance(image, Image.Image)
    assert image.mode == "RGB"
    assert image.size == (8, 8)


def test_clip_dimension_from_model():
    embedder = SentenceTransformerImageEmbedding()
    embedder._model = MagicMock()
    embedder._model.get_sentence_embedding_dimension.return_value = 512

    assert embedder.get_dimension() == 512
    assert embedder.get_dimension() == 512
    embedder._model.get_sentence_embedding_dimension.assert_called_once()


def test_clip_rejects_non_image_mime():
    embedder = SentenceTransformerImageEmbedding()
    embedder._model = MagicMock()

    with pytest.raises(InputError, match="unsupported photo type"):
        embedder.embed_image(to_data_uri(b"hello", mime_type="text/plain"))
    embedder._model.encode.assert_not_called()


def test_clip_rejects_undecodable_image():
    embedder = SentenceTransformerImageEmbedding()
    embedder._model = MagicMock()

    with pytest.raises(InputError, match="could not be decoded"):
        embedder.embed_image(to_data_uri(b"definitely not a png"))
