import logging
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from portfolio_ai.api.dependencies import HandlerDep, lifespan
from portfolio_ai.config import settings
from portfolio_ai.dto import (
    CacheClearResponse,
    CacheStatsResponse,
    HealthCheckResponse,
    ImproveRequest,
    ImproveResponse,
)
from portfolio_ai.entities import Domain

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Portfolio AI Gateway",
    description="AI text improvement for CVs, projects and certificates",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,  # type: ignore[arg-type]
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def root() -> dict[str, Any]:
    """Root endpoint with API information."""
    return {
        "name": "Portfolio AI Gateway",
        "version": "0.1.0",
        "description": "AI text improvement for CVs, projects and certificates",
        "endpoints": {
            "cv": "/api/ai/cv/improve",
            "project": "/api/ai/project/improve",
            "certificate": "/api/ai/certificate/improve",
            "stats": "/cache/stats",
            "health": "/health",
            "docs": "/docs",
        },
    }


@app.get("/health", response_model=HealthCheckResponse)
async def health(handler: HandlerDep) -> HealthCheckResponse:
    """Health check endpoint."""
    return await handler.health_check()


@app.post("/api/ai/cv/improve", response_model=ImproveResponse)
async def improve_cv(request: ImproveRequest, handler: HandlerDep) -> ImproveResponse:
    """Improve a CV summary or experience description."""
    return await handler.improve(Domain.CV, request)


@app.post("/api/ai/project/improve", response_model=ImproveResponse)
async def improve_project(request: ImproveRequest, handler: HandlerDep) -> ImproveResponse:
    """Improve a project description."""
    return await handler.improve(Domain.PROJECT, request)


@app.post("/api/ai/certificate/improve", response_model=ImproveResponse)
async def improve_certificate(request: ImproveRequest, handler: HandlerDep) -> ImproveResponse:
    """Improve a certificate description."""
    return await handler.improve(Domain.CERTIFICATE, request)


@app.get("/cache/stats", response_model=CacheStatsResponse)
async def get_stats(handler: HandlerDep) -> CacheStatsResponse:
    """Get cache statistics and request counters."""
    return await handler.get_stats()


@app.delete("/cache", response_model=CacheClearResponse)
async def clear_cache(handler: HandlerDep) -> CacheClearResponse:
    """Clear all cached results."""
    return await handler.clear_cache()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "portfolio_ai.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
