from __future__ import annotations
"""Shared CLI runner utilities.

Includes adapter bootstrap, the immutable run options, logging setup,
passphrase acquisition and identity provisioning.
"""

import getpass
import importlib
import importlib.util
import logging
import pathlib
import sys

from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple
from dotsig import UsageError, registry
from dotsig.keystore import resolve_identity_file
from dotsig.params import canonical_algorithm

log = logging.getLogger("dotsig.cli")

_HERE = pathlib.Path(__file__).resolve()

try:
    _PROJECT_ROOT = next(p for p in _HERE.parents if (p / "libs").exists())
except StopIteration:
    _PROJECT_ROOT = _HERE.parents[0]

_ADAPTER_PATHS = {
    "dotsig_ecdsa": _PROJECT_ROOT / "libs" / "adapters" / "ecdsa" / "src",
    "dotsig_rsa": _PROJECT_ROOT / "libs" / "adapters" / "rsa" / "src",
    "dotsig_openpgp": _PROJECT_ROOT / "libs" / "adapters" / "openpgp" / "src",
}

PASSWORD_PROMPT = "Enter your password: "
_LOG_FORMAT = "[%(asctime)s] %(levelname)s %(message)s"


@dataclass(frozen=True)
class RunOptions:
    """Parsed command line, built once by the front end."""
    files: Tuple[str, ...] = ()
    verify: bool = False
    algo: str = "ecdsa"
    identity_file: str = ""
    public_key_file: str = ""
    passphrase: str = ""
    debug: bool = False
    quiet: bool = False

    @classmethod
    def build(cls, files=None, *, algo: str = "", **kwargs: Any) -> "RunOptions":
        return cls(files=tuple(files or ()), algo=canonical_algorithm(algo), **kwargs)

    @property
    def mode(self) -> str:
        return "Verification" if self.verify else "Signature"

    def resolve_identity_file(self) -> str:
        return resolve_identity_file(
            self.algo,
            verify=self.verify,
            private_path=self.identity_file,
            public_path=self.public_key_file,
        )


def _load_adapters() -> None:
    """Import every adapter package so the registry is complete before lookups."""
    for mod in _ADAPTER_PATHS:
        spec = importlib.util.find_spec(mod)
        if spec is None:
            candidate = _ADAPTER_PATHS[mod]
            if candidate.exists() and str(candidate) not in sys.path:
                sys.path.append(str(candidate))
        importlib.import_module(mod)


def configure_logging(debug: bool, quiet: bool) -> None:
    """Route dotsig diagnostics to stderr; ``-q`` wins over ``-D``."""
    logger = logging.getLogger("dotsig")
    for handler in list(logger.handlers):
        if getattr(handler, "_dotsig_cli", False):
            logger.removeHandler(handler)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    handler._dotsig_cli = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if debug and not quiet else logging.WARNING)


def acquire_passphrase(value: str, prompt: Optional[Callable[[str], str]] = None) -> str:
    """Use the explicit passphrase, or prompt on the terminal when it is empty or "-".

    An empty answer is refused: private identities are always encrypted.
    """
    if value and value != "-":
        return value
    passphrase = (prompt or getpass.getpass)(PASSWORD_PROMPT)
    if not passphrase:
        raise UsageError("a non-empty passphrase is required")
    return passphrase


def provision_identity(identity: Any, path: str, passphrase: str) -> bool:
    """Import ``path`` when it exists, else generate a keypair and export it there.

    Returns True when a new identity was created.
    """
    if pathlib.Path(path).exists():
        log.debug("Using identity file: %s (load)", path)
        identity.import_file(path, passphrase)
        return False
    log.debug("Using identity file: %s (new)", path)
    identity.generate_random()
    identity.export(path, passphrase)
    return True


def create_identity(algo: str) -> Any:
    _load_adapters()
    return registry.create(algo)
