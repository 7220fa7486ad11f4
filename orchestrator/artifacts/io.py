"""
Proof Bundle IO

Save and load proof bundles to/from disk.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from pydantic import ValidationError

from core.schemas.bundle import ProofBundle
from core.schemas.errors import BundleException


logger = logging.getLogger(__name__)


def save_bundle(bundle: ProofBundle, path: str | Path) -> Path:
    """
    Write bundle as indented JSON, creating parent directories.

    The file is written to a temporary sibling first and renamed into
    place, so readers never see a partial bundle.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(bundle.to_json())
            f.write("\n")
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise

    logger.info(f"Saved proof bundle ({bundle.total_claimants} claims) to {path}")
    return path


def load_bundle(path: str | Path) -> ProofBundle:
    """
    Read a bundle written by save_bundle (or the older merkleRoot layout).

    Raises:
        BundleException: If the file is missing, not JSON or not a valid bundle
    """
    path = Path(path)
    if not path.exists():
        raise BundleException(f"Proof bundle not found: {path}", details={"path": str(path)})

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise BundleException(
            f"Cannot read proof bundle {path}: {e}", details={"path": str(path)}
        ) from e

    try:
        return ProofBundle.model_validate(data)
    except ValidationError as e:
        raise BundleException(
            f"Invalid proof bundle {path}: {e.error_count()} validation error(s)",
            details={"path": str(path), "errors": e.errors(include_url=False, include_context=False, include_input=False)},
        ) from e
