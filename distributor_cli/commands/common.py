"""
Helpers shared by CLI commands.
"""

from __future__ import annotations

from argparse import Namespace
from pathlib import Path

from core.config.runtime import RuntimeConfig
from core.schemas.bundle import ProofBundle
from orchestrator.artifacts.io import load_bundle


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def get_config(args: Namespace) -> RuntimeConfig:
    """Config attached by main(), or the environment default."""
    config = getattr(args, "cli_config", None)
    return config if config is not None else RuntimeConfig.from_env()


def bundle_path(args: Namespace) -> Path:
    """--bundle if given, otherwise the configured proofs path."""
    explicit = getattr(args, "bundle", None)
    return Path(explicit) if explicit else Path(get_config(args).output.proofs_path)


def read_bundle(args: Namespace) -> ProofBundle:
    """
    Raises:
        BundleException: If the bundle is missing or malformed
    """
    return load_bundle(bundle_path(args))
