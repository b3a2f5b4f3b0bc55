"""
Face match data model.
Candidates are read-only gallery records; match results live for one response only.
"""

from typing import Any, Dict, Mapping, Sequence, Union
import numpy as np
from dataclasses import dataclass

from ..core.errors import InputError

EmbeddingVector = Union[Sequence[float], np.ndarray]


@dataclass(frozen=True)
class Candidate:
    """A known face from the gallery."""

    id: str
    """Opaque identifier of the known person"""

    name: str
    """Display name"""

    photo_url: str
    """Reference to the display image"""

    embedding: EmbeddingVector
    """Stored face embedding"""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Candidate":
        """
        Build a candidate from a gallery record (accepts photoUrl or photo_url).

        Raises:
            InputError: if the record is not a mapping or has no id
        """
        if not isinstance(data, Mapping):
            raise InputError(f"known face must be an object, got {type(data).__name__}")
        if data.get("id") is None or str(data["id"]).strip() == "":
            raise InputError("known face is missing an id")

        embedding = data.get("embedding")
        return cls(
            id=str(data["id"]),
            name=data.get("name", ""),
            photo_url=data.get("photoUrl", data.get("photo_url", "")),
            embedding=embedding if embedding is not None else [],
        )


@dataclass(frozen=True)
class MatchResult:
    """Represents a ranked match for a query face."""

    id: str
    """Identifier of the matched candidate"""

    name: str
    """Display name of the matched candidate"""

    photo_url: str
    """Display image of the matched candidate"""

    confidence_score: float
    """Cosine similarity rescaled to a percentage (0-100)"""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "photoUrl": self.photo_url,
            "confidenceScore": self.confidence_score,
        }
