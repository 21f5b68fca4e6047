"""API dependencies for dependency injection."""
from typing import Optional
from uuid import uuid4

from fastapi import Header, HTTPException, Request, status

from remote_signer.services.scheduler import SafeRemoteSigner


def get_correlation_id(
    x_correlation_id: Optional[str] = Header(None, alias="X-Correlation-ID")
) -> str:
    """Get or generate correlation ID for request tracing."""
    return x_correlation_id or str(uuid4())


def get_signer(request: Request) -> SafeRemoteSigner:
    """Signer instance owned by the application lifespan."""
    signer = getattr(request.app.state, "signer", None)
    if signer is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Signer not initialized",
        )
    return signer
