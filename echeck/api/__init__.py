"""
Electronic Check API Application Factory
"""

from typing import Optional

import uvicorn
from fastapi import FastAPI

from .checks import router as checks_router, stats_router
from .payloads import router as payloads_router
from ..checks import SUDANESE_BANKS
from ..config import get_config
from ..logging_config import setup_logging
from .. import __version__


def create_app() -> FastAPI:
    """Create and configure the FastAPI application"""
    app = FastAPI(
        title="Electronic Check System API",
        description="Issue signed electronic checks and verify them by PIN and QR payload",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc"
    )
    
    # Include routers
    app.include_router(checks_router, prefix="/checks", tags=["Checks"])
    app.include_router(payloads_router, prefix="/payloads", tags=["Payloads"])
    app.include_router(stats_router, prefix="/stats", tags=["Stats"])
    
    @app.get("/banks", tags=["Checks"])
    async def list_banks():
        """Banks a check can be drawn on"""
        return {"banks": list(SUDANESE_BANKS)}
    
    # Health check endpoint
    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "service": "echeck_api",
            "version": __version__
        }
    
    # Root endpoint
    @app.get("/")
    async def get_api_info():
        """Get API information"""
        return {
            "name": "Electronic Check System API",
            "version": __version__,
            "endpoints": {
                "docs": "/docs",
                "health": "/health",
                "banks": "/banks",
                "checks": "/checks",
                "verify": "/checks/verify",
                "stats": "/stats/checks",
                "decode": "/payloads/decode",
            }
        }
    
    return app


def run_server(host: Optional[str] = None, port: Optional[int] = None, debug: bool = False):
    """Run the FastAPI server"""
    config = get_config()
    setup_logging(config.log_level, config.log_format, log_file=config.log_file)
    uvicorn.run(
        "echeck.api:create_app",
        factory=True,
        host=host or config.api_host,
        port=port or config.api_port,
        reload=debug,
        log_level=config.log_level.lower()
    )
