"""
FastAPI Application

Main application setup and configuration.

Usage:
    uvicorn api.app:app --reload

    # Or run directly
    python -m api.app
"""

from __future__ import annotations

import logging
import os
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.errors import (
    APIError,
    api_error_handler,
    distributor_error_handler,
    generic_error_handler,
)
from api.routes import claims, health, stats, verify
from core.config.runtime import RuntimeConfig
from core.schemas.bundle import ProofBundle
from core.schemas.errors import DistributorException


def _resolve_log_level() -> int:
    """Resolve log level from DISTRIBUTOR_LOG_LEVEL, defaulting to INFO."""
    raw = os.getenv("DISTRIBUTOR_LOG_LEVEL")
    return getattr(logging, (raw or "INFO").upper(), logging.INFO)


logging.basicConfig(
    level=_resolve_log_level(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def create_app(
    bundle: Optional[ProofBundle] = None,
    config: Optional[RuntimeConfig] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        bundle: Serve this bundle instead of reading output.proofs_path
        config: Runtime config (default: file + environment, loaded lazily)
    """
    app = FastAPI(
        title="Merkle Distributor API",
        description="""
Read-only HTTP API over a generated proof bundle.

## Endpoints

- **GET /health** - Health check
- **GET /stats** - Distribution totals and largest claimants
- **GET /claims/{recipient}** - Amount, proof and claim calldata
- **POST /verify** - Verify a (recipient, amount, proof) triple
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.state.bundle = bundle
    app.state.config = config

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register exception handlers
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(DistributorException, distributor_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(stats.router)
    app.include_router(claims.router)
    app.include_router(verify.router)

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
