"""
NirmaanTech Portal - API Backend

Start with:
    uvicorn portal.server:app --host 0.0.0.0 --port 8001 --reload
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from portal import __version__, config
from portal.errors import (
    AuthenticationError,
    NotFoundError,
    PortalError,
    TrialExpiredError,
    ValidationError,
)
from portal.store import Store

# Logging configuration
logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger("portal")

# Most specific first
ERROR_STATUS = [
    (AuthenticationError, 401),
    (TrialExpiredError, 403),
    (NotFoundError, 404),
    (ValidationError, 400),
]


def status_for(error: PortalError) -> int:
    for error_class, status in ERROR_STATUS:
        if isinstance(error, error_class):
            return status
    return 400


async def portal_error_handler(request: Request, exc: PortalError):
    status = status_for(exc)
    logger.warning(f"[API] {request.method} {request.url.path} -> {status} {exc.code}: {exc.message}")
    return JSONResponse(status_code=status, content=exc.to_dict())


async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies are rejected like any other ValidationError"""
    errors = exc.errors()
    detail = "; ".join(
        f"{'.'.join(str(p) for p in e.get('loc', ())[1:]) or 'body'}: {e.get('msg')}" for e in errors
    )
    logger.warning(f"[API] {request.method} {request.url.path} -> 400 validation_error: {detail}")
    return JSONResponse(
        status_code=400,
        content={"success": False, "error": "validation_error", "detail": detail}
    )


def create_app(store: Optional[Store] = None) -> FastAPI:
    """Build the app around a store (a freshly seeded one by default)."""
    app = FastAPI(
        title="NirmaanTech Portal",
        description="Lead management and storefront for the NirmaanTech network",
        version=__version__
    )
    app.state.store = store if store is not None else Store.seeded()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(PortalError, portal_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    # ==================== ROUTES ====================

    from portal.routes import auth, cart, leads, notifications, orders, products, scripts, trial, users

    for module in (auth, products, cart, orders, leads, users, scripts, trial, notifications):
        app.include_router(module.router, prefix="/api")

    @app.get("/")
    async def root():
        return {
            "name": "NirmaanTech Portal API",
            "version": __version__,
            "status": "running",
            "docs": "/docs"
        }

    logger.info(f"🚀 NirmaanTech Portal v{__version__} ready")
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8001)
