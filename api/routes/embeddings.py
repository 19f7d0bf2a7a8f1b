"""
Embeddings Router.

Text -> vector endpoint backed by the local sentence-transformers model.
Model loading and encoding block, so they run in a worker thread.
"""

import asyncio
import logging

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel

from api.deps import get_embedding_service
from seedsearch.search import EmbeddingService

logger = logging.getLogger(__name__)

router = APIRouter()


class EmbeddingRequest(BaseModel):
    text: str


class EmbeddingResponse(BaseModel):
    embedding: list[float]
    text: str
    model: str
    dimensions: int


@router.post("/embeddings", response_model=EmbeddingResponse)
async def create_embedding(
    request: EmbeddingRequest,
    service: EmbeddingService = Depends(get_embedding_service),
) -> EmbeddingResponse:
    """
    Embed one text.

    InvalidInputError (400) and EmbeddingUnavailableError (503) are mapped by
    the application's exception handlers.
    """
    embedding = await asyncio.to_thread(service.embed, request.text)

    text = request.text.strip()
    return EmbeddingResponse(
        embedding=embedding,
        text=text[:100] + ("..." if len(text) > 100 else ""),
        model=service.model_name,
        dimensions=len(embedding),
    )


@router.get("/embeddings")
async def embedding_info(service: EmbeddingService = Depends(get_embedding_service)) -> dict:
    return {
        "message": "Embedding API is running",
        "model": service.model_name,
        "max_chars": service.max_chars,
        "usage": {"method": "POST", "body": {"text": "Your text to embed"}},
    }


@router.head("/embeddings")
async def embedding_health(service: EmbeddingService = Depends(get_embedding_service)) -> Response:
    available = await asyncio.to_thread(service.is_available)
    if not available:
        logger.warning("Embedding model %s unavailable", service.model_name)
    return Response(status_code=200 if available else 503)
