"""Storage root and default identity file resolution.

Identity files live in one per-user directory: ``~/.dotsig`` on POSIX,
``%APPDATA%/dotsig`` on Windows, or ``$DOTSIG_HOME`` when set. The
directory is created owner-only on first use.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from .params import canonical_algorithm, find

log = logging.getLogger(__name__)


def get_storage_path() -> Path:
    """Return the storage root, creating it (mode 0700) if absent."""
    override = os.getenv("DOTSIG_HOME")
    if override:
        root = Path(override)
    elif sys.platform.startswith("win"):
        root = Path(os.getenv("APPDATA") or Path.home()) / "dotsig"
    else:
        root = Path.home() / ".dotsig"

    if not root.exists():
        root.mkdir(mode=0o700, parents=True)
        log.debug("Created storage directory %s", root)
    return root


def get_identity_file(algo: str) -> str:
    """Default private identity file for ``algo`` (canonicalized)."""
    return str(get_storage_path() / find(algo).key_file)


def get_public_identity_file(algo: str) -> str:
    """Default public key file for ``algo`` (canonicalized)."""
    return str(get_storage_path() / find(algo).public_key_file)


def resolve_identity_file(algo: str, *, verify: bool, private_path: str = "", public_path: str = "") -> str:
    """Pick the identity file for the run mode; explicit paths always win.

    Signing uses the private identity (``-i``), verification the public
    key (``-P``).
    """
    algo = canonical_algorithm(algo)
    if verify:
        return public_path or get_public_identity_file(algo)
    return private_path or get_identity_file(algo)
