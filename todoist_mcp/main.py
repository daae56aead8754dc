"""
Todoist MCP - HTTP Application

FastAPI surface for the task tools, alongside the MCP stdio server.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from todoist_mcp.config import settings
from todoist_mcp.errors import ToolError
from todoist_mcp.logging_setup import configure_logging
from todoist_mcp.tools_router import router as tools_router

configure_logging()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Report missing Todoist configuration at startup."""
    try:
        settings.todoist_credentials()
    except ToolError as e:
        # Every tool call will fail with MissingConfiguration until this is fixed
        logger.error("Configuration error: %s", e.message)
    yield


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Canonical-section task tools for a single Todoist project",
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    lifespan=lifespan,
)


@app.get("/health", tags=["Health"])
async def health_check() -> dict:
    """
    Health check endpoint.

    Returns the service status and version information.
    """
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
    }


@app.get("/", tags=["Root"])
async def root() -> dict:
    """Root endpoint with service information."""
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": "/docs" if settings.DEBUG else "disabled",
    }


app.include_router(tools_router)
