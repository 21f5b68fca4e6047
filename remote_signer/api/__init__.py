"""API routers package."""
from remote_signer.api.signer import router as signer_router

__all__ = [
    "signer_router",
]
