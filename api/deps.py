"""
API Dependencies

Dependency injection for the API.
Provides the runtime config and the proof bundle routes read from.
"""

from __future__ import annotations

import logging

from fastapi import Request

from api.errors import BundleUnavailableError
from core.config.runtime import RuntimeConfig, load_config
from core.schemas.bundle import ProofBundle
from core.schemas.errors import BundleException
from orchestrator.artifacts.io import load_bundle

logger = logging.getLogger(__name__)


def get_runtime_config(request: Request) -> RuntimeConfig:
    """Config attached at startup, or loaded from file + environment on first use."""
    config = getattr(request.app.state, "config", None)
    if config is None:
        config = load_config()
        request.app.state.config = config
    return config


def get_bundle(request: Request) -> ProofBundle:
    """
    The bundle passed to create_app, or the one at output.proofs_path.

    A bundle read from disk is cached on the app for later requests.

    Raises:
        BundleUnavailableError: If no bundle was given and none can be read
    """
    bundle = getattr(request.app.state, "bundle", None)
    if bundle is not None:
        return bundle

    config = get_runtime_config(request)
    try:
        bundle = load_bundle(config.output.proofs_path)
    except BundleException as e:
        logger.warning(f"Proof bundle unavailable: {e.message}")
        raise BundleUnavailableError(e.message, details=e.details) from e

    logger.info(f"Loaded proof bundle from {config.output.proofs_path}")
    request.app.state.bundle = bundle
    return bundle


def get_unit(request: Request) -> str:
    """Display unit for formatted amounts."""
    return get_runtime_config(request).source.unit
