from typing import Annotated, Any

from fastapi import FastAPI, Path, Query
from fastapi.middleware.cors import CORSMiddleware

from article_guidance.api.dependencies import HandlerDep, lifespan
from article_guidance.config import settings
from article_guidance.dto import (
    EntityMetadataResponse,
    HealthCheckResponse,
    OutlineInvalidateResponse,
    SearchParams,
    SearchResponse,
)

app = FastAPI(
    title="Article Guidance API",
    description="Wikidata type resolution and outline matching for article guidance",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,  # type: ignore[arg-type]
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def root() -> dict[str, Any]:
    """Root endpoint with API information."""
    return {
        "name": "Article Guidance API",
        "version": "0.1.0",
        "description": "Wikidata type resolution and outline matching for article guidance",
        "endpoints": {
            "search": "/search",
            "entities": "/entities/{entity_id}",
            "health": "/health",
            "docs": "/docs",
        },
    }


@app.get("/health", response_model=HealthCheckResponse)
async def health(handler: HandlerDep) -> HealthCheckResponse:
    """Health check endpoint."""
    return await handler.health_check()


@app.get("/search", response_model=SearchResponse)
async def search(
    handler: HandlerDep,
    params: Annotated[SearchParams, Query()],
) -> SearchResponse:
    """
    Search entities and return their most specific outline matches.

    Args:
        params: Query text and language.

    Returns:
        Search response with results and lookup time.
    """
    return await handler.search(params)


@app.get("/entities/{entity_id}", response_model=EntityMetadataResponse)
async def get_entity(
    handler: HandlerDep,
    entity_id: Annotated[str, Path(pattern=r"^Q\d+$")],
    language: Annotated[str, Query(min_length=1)] = "en",
) -> EntityMetadataResponse:
    """
    Resolve label, description, image and hierarchy depth of one entity.

    Args:
        entity_id: Wikidata item id.
        language: Language code.

    Returns:
        Entity metadata (cached for a day).
    """
    return await handler.get_entity(entity_id, language)


@app.post("/outlines/invalidate", response_model=OutlineInvalidateResponse)
async def invalidate_outlines(handler: HandlerDep) -> OutlineInvalidateResponse:
    """Drop the loaded outline set so it is reloaded on next use."""
    return await handler.invalidate_outlines()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "article_guidance.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
