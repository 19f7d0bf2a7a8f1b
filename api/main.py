"""
Seedsearch API - FastAPI application for portfolio company search.

Domain errors are mapped to HTTP status codes here, so routers only
translate between request models and the search service.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.deps import get_search_service
from api.routes import embeddings, search
from seedsearch import __version__
from seedsearch.core.config import get_settings
from seedsearch.core.exceptions import DatasetError, EmbeddingUnavailableError, InvalidInputError
from seedsearch.search import CompanySearchService

settings = get_settings()

logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        "Seedsearch %s starting (env=%s, dataset=%s, embeddings=%s)",
        __version__, settings.environment, settings.dataset_path,
        settings.embedding_model if settings.embeddings_enabled else "disabled",
    )
    yield


app = FastAPI(
    title=settings.api_title,
    description="Keyword + embedding search over a startup-portfolio dataset",
    version=settings.api_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_methods=["GET", "POST", "HEAD"],
    allow_headers=["*"],
)

app.include_router(search.router, prefix="/api/v1", tags=["Search"])
app.include_router(embeddings.router, prefix="/api/v1", tags=["Embeddings"])


# =============================================================================
# Error Mapping
# =============================================================================


@app.exception_handler(InvalidInputError)
async def invalid_input_handler(request: Request, exc: InvalidInputError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(EmbeddingUnavailableError)
async def embedding_unavailable_handler(request: Request, exc: EmbeddingUnavailableError) -> JSONResponse:
    logger.error("Embedding failed on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": "Failed to generate embedding"})


@app.exception_handler(DatasetError)
async def dataset_error_handler(request: Request, exc: DatasetError) -> JSONResponse:
    logger.error("Dataset unavailable: %s", exc)
    return JSONResponse(status_code=503, content={"detail": "Company dataset unavailable"})


# =============================================================================
# Service Endpoints
# =============================================================================


@app.get("/")
async def root():
    return {"name": settings.api_title, "version": settings.api_version, "docs": "/docs"}


@app.get("/health")
async def health_check(service: CompanySearchService = Depends(get_search_service)):
    """Healthy once the dataset is loaded; 503 (via DatasetError) otherwise."""
    companies = service.companies
    return {
        "status": "healthy",
        "version": settings.api_version,
        "companies": len(companies),
        "with_embeddings": sum(1 for c in companies if c.has_embedding),
        "semantic_search": service.pipeline.embeddings is not None,
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("api.main:app", host=settings.api_host, port=settings.api_port, reload=settings.is_development)
