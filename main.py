"""
Color Gamut Tools MCP Server - FastAPI implementation
Provides endpoints for color conversion and gamut management
"""

import logging

from fastapi import FastAPI
import uvicorn
from fastapi_mcp import FastApiMCP

from colorcore import ColorConverter
from config import Settings

# Routers and shared state
from routers import colorTools_router

logger = logging.getLogger(__name__)


def create_app(settings: Settings = None) -> FastAPI:
    settings = settings or Settings.from_env()
    app = FastAPI(
        title="Color Gamut Tools MCP Server",
        description="Convert colors between sRGB, Display P3, OKLCH, OKLAB and linear notations with gamut-aware fallbacks",
        version="1.0.0"
    )
    app.state.settings = settings
    # One converter, and so one gamut cache, per application
    app.state.converter = ColorConverter()

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "healthy"}

    app.include_router(colorTools_router)

    if settings.mcp:
        mcp = FastApiMCP(app, exclude_operations=[])
        mcp.mount_http()
    return app


app = create_app()

if __name__ == "__main__":
    settings = app.state.settings
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Starting color gamut tools on %s:%d", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)
