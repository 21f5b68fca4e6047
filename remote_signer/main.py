"""Main FastAPI application."""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from remote_signer.api import signer_router
from remote_signer.config import get_settings
from remote_signer.logging_config import configure_logging
from remote_signer.services.scheduler import SafeRemoteSigner

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    signer: Optional[SafeRemoteSigner] = app.state.signer

    if signer is None:
        settings = get_settings()
        configure_logging(settings.log_level, settings.log_dir)
        signer = SafeRemoteSigner(settings)
        app.state.signer = signer

    logger.info("Starting Safe remote signer...")
    await signer.start()

    yield

    # Shutdown
    logger.info("Shutting down...")
    await signer.close()
    logger.info("Shutdown complete")


def create_app(signer: Optional[SafeRemoteSigner] = None) -> FastAPI:
    """Build the operator API. Settings are loaded in the lifespan, not at import."""
    app = FastAPI(
        title="Safe Remote Signer",
        description="""
## Automated co-signer for Safe multisig accounts

Watches the vault on every enabled chain and adds this operator's
signature to pending transactions and messages that pass the deny list.

### Endpoints
- **Status**: signer state, enabled chains and the last scan summary
- **Scan**: trigger an immediate scan
- **Safes**: vault metadata per chain
- **Rules**: active deny rules
        """,
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.signer = signer

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle uncaught exceptions."""
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "correlation_id": request.headers.get("X-Correlation-ID", "unknown"),
                "error": "Internal server error",
                "error_code": "INTERNAL_ERROR",
            },
        )

    app.include_router(signer_router)

    @app.get("/health")
    async def health_check(request: Request):
        """Health check endpoint."""
        current: Optional[SafeRemoteSigner] = request.app.state.signer
        return {
            "status": "healthy",
            "environment": current.settings.environment if current else None,
            "signer_running": current is not None and current.is_running,
        }

    return app


app = create_app()
