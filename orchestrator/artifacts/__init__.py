"""
Artifact persistence for generated proof bundles.
"""

from orchestrator.artifacts.io import load_bundle, save_bundle

__all__ = ["load_bundle", "save_bundle"]
