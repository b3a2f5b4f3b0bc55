"""
Face match HTTP API.
Exposes embedding extraction and gallery matching for the missing-person finder.
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, HTTPException, Depends, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
import logging

from .schemas import (
    FaceEmbedRequest,
    FaceEmbedResponse,
    FaceMatchRequest,
    FaceRankRequest,
    FaceMatchResponse,
    MatchResultModel,
    HealthResponse
)
from ..core.config import (
    VERSION,
    debug_enabled,
    get_embed_provider_name,
    is_face_match_api_enabled,
    validate_match_config
)
from ..core.errors import InputError, EmbeddingError, EmbeddingUnavailableError
from ..core.face_match_service import FaceMatchService
from util.logging import logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    # One service (and one embedding model) per process, shared by every request
    issues = validate_match_config()
    for issue in issues:
        logger.warning(f"Config issue: {issue}")
    logger.set_debug(debug_enabled())
    app.state.face_match_service = FaceMatchService.from_config()
    yield


# Initialize the FastAPI application
app = FastAPI(
    title="Sankat Mochan Face Match API",
    version=VERSION,
    description="Missing-person face matching for the Sankat Mochan disaster guide",
    docs_url="/docs" if debug_enabled() else None,
    redoc_url="/redoc" if debug_enabled() else None,
    lifespan=lifespan
)

# Add CORS middleware to allow frontend connections
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000", "http://localhost:9002", "http://127.0.0.1:9002"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_face_match_service(request: Request) -> FaceMatchService:
    """Service built at startup; built on demand when the app runs without lifespan."""
    service = getattr(request.app.state, "face_match_service", None)
    if service is None:
        service = FaceMatchService.from_config()
        request.app.state.face_match_service = service
    return service


def _require_api_enabled():
    if not is_face_match_api_enabled():
        raise HTTPException(status_code=404, detail="Face match endpoints disabled")


def _to_response(matches) -> FaceMatchResponse:
    return FaceMatchResponse(matches=[
        MatchResultModel(
            id=m.id,
            name=m.name,
            photo_url=m.photo_url,
            confidence_score=m.confidence_score
        )
        for m in matches
    ])


@app.get("/health", response_model=HealthResponse)
def health_check_endpoint(service: FaceMatchService = Depends(get_face_match_service)):
    """Check service health and effective match settings."""
    issues = validate_match_config()
    return HealthResponse(
        status="healthy" if not issues and service.embedding_enabled else "degraded",
        version=VERSION,
        embed_provider=get_embed_provider_name(),
        embedding_enabled=service.embedding_enabled,
        match_threshold=service.ranker.threshold,
        match_top_n=service.ranker.top_n,
        config_issues=issues
    )


@app.post("/faces/embed", response_model=FaceEmbedResponse)
def extract_face_embedding_endpoint(request: FaceEmbedRequest,
                                    service: FaceMatchService = Depends(get_face_match_service)):
    """Extract the embedding vector for the face in a photo."""
    _require_api_enabled()
    embedding = service.extract_face_embedding(request.photo_data_uri)
    return FaceEmbedResponse(face_embedding=embedding)


@app.post("/faces/match", response_model=FaceMatchResponse)
def find_matching_faces_endpoint(request: FaceMatchRequest,
                                 service: FaceMatchService = Depends(get_face_match_service)):
    """Find potential matches for a photo among the supplied known faces."""
    _require_api_enabled()
    matches = service.find_matching_faces(request.query_photo_data_uri, [face.model_dump() for face in request.known_faces])
    return _to_response(matches)


@app.post("/faces/rank", response_model=FaceMatchResponse)
def rank_embedding_endpoint(request: FaceRankRequest,
                            service: FaceMatchService = Depends(get_face_match_service)):
    """Rank a precomputed query embedding against the supplied known faces."""
    _require_api_enabled()
    matches = service.rank_embedding(request.query_embedding, [face.model_dump() for face in request.known_faces])
    return _to_response(matches)


@app.exception_handler(InputError)
async def input_error_handler(request, exc):
    return JSONResponse(
        status_code=422,
        content={"detail": f"Could not analyze photo: {exc}"},
    )


@app.exception_handler(EmbeddingUnavailableError)
async def embedding_unavailable_handler(request, exc):
    return JSONResponse(
        status_code=503,
        content={"detail": str(exc)},
    )


@app.exception_handler(EmbeddingError)
async def embedding_error_handler(request, exc):
    # Upstream model failure; the client may retry
    return JSONResponse(
        status_code=502,
        content={"detail": f"{exc} Please try again."},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Handle all unhandled exceptions."""
    logging.error(f"Unhandled exception: {exc}")
    content = {"detail": "Internal server error"}
    if debug_enabled():
        content["debug"] = str(exc)
    status_code = 500
    return JSONResponse(
        status_code=status_code,
        content=content,
    )
