"""
Request/response models for the face match API.
Wire names are camelCase (photoUrl, confidenceScore, ...); snake_case is accepted on input too.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class KnownFace(CamelModel):
    id: str
    name: str = ""
    photo_url: str = Field("", alias="photoUrl")
    embedding: List[float]

    @field_validator('id')
    @classmethod
    def id_must_not_be_empty(cls, v):
        if not v.strip():
            raise ValueError('id cannot be empty')
        return v


class FaceEmbedRequest(CamelModel):
    photo_data_uri: str = Field(alias="photoDataUri")

    @field_validator('photo_data_uri')
    @classmethod
    def photo_must_not_be_empty(cls, v):
        if not v.strip():
            raise ValueError('photoDataUri cannot be empty')
        return v


class FaceEmbedResponse(CamelModel):
    face_embedding: List[float] = Field(alias="faceEmbedding")


class FaceMatchRequest(CamelModel):
    query_photo_data_uri: str = Field(alias="queryPhotoDataUri")
    known_faces: List[KnownFace] = Field(default_factory=list, alias="knownFaces")

    @field_validator('query_photo_data_uri')
    @classmethod
    def photo_must_not_be_empty(cls, v):
        if not v.strip():
            raise ValueError('queryPhotoDataUri cannot be empty')
        return v


class FaceRankRequest(CamelModel):
    """Rank a precomputed embedding. An empty queryEmbedding is rejected by the ranker."""
    query_embedding: List[float] = Field(default_factory=list, alias="queryEmbedding")
    known_faces: List[KnownFace] = Field(default_factory=list, alias="knownFaces")


class MatchResultModel(CamelModel):
    id: str
    name: str
    photo_url: str = Field(alias="photoUrl")
    confidence_score: float = Field(ge=0, le=100, alias="confidenceScore")


class FaceMatchResponse(CamelModel):
    matches: List[MatchResultModel]  # Sorted by confidence, highest first


class HealthResponse(BaseModel):
    status: str
    version: str
    embed_provider: str
    embedding_enabled: bool
    match_threshold: float
    match_top_n: int
    config_issues: List[str] = []
    error: Optional[str] = None
