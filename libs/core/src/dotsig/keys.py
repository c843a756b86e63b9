"""Key material ownership and the key/signature file conventions.

Private keys are kept as unencrypted PKCS#8 DER inside a ``KeyMaterial``
buffer that is zeroed when the owning identity is closed. Provider key
objects are only materialised for the duration of a sign operation.

Files:
  private identity: PKCS#8 DER, encrypted with the passphrase
  public identity:  SubjectPublicKeyInfo PEM, ``<private>.pub``
  signature:        raw signature bytes, ``<document>.sig``
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Tuple, Type

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.utils import (
    decode_dss_signature,
    encode_dss_signature,
)

from .errors import KeyImportError, OverwriteError
from .params import PUBLIC_SUFFIX

log = logging.getLogger(__name__)

_LOAD_ERRORS = (ValueError, TypeError, UnsupportedAlgorithm)


class KeyMaterial:
    """Owns private key bytes and overwrites them with zeros on ``wipe``."""

    __slots__ = ("_buf",)

    def __init__(self, data: bytes | bytearray) -> None:
        self._buf = bytearray(data)

    def __len__(self) -> int:
        return len(self._buf)

    def __repr__(self) -> str:
        return f"KeyMaterial(<{len(self._buf)} bytes>)"

    @property
    def wiped(self) -> bool:
        return not any(self._buf)

    def buffer(self) -> bytearray:
        return self._buf

    def copy(self) -> "KeyMaterial":
        return KeyMaterial(self._buf)

    def wipe(self) -> None:
        # same-length slice assignment overwrites in place
        self._buf[:] = bytes(len(self._buf))

    def __enter__(self) -> "KeyMaterial":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.wipe()

    def __del__(self) -> None:
        self.wipe()


def _password(passphrase: str) -> bytes | None:
    return passphrase.encode("utf-8") if passphrase else None


def dump_private(private_key: Any) -> KeyMaterial:
    return KeyMaterial(
        private_key.private_bytes(
            serialization.Encoding.DER,
            serialization.PrivateFormat.PKCS8,
            serialization.NoEncryption(),
        )
    )


def load_private(material: KeyMaterial) -> Any:
    return serialization.load_der_private_key(material.buffer(), password=None)


def encode_private(material: KeyMaterial, passphrase: str) -> bytes:
    """Encrypted PKCS#8 DER. Private identities are never written in the clear."""
    password = _password(passphrase)
    if password is None:
        raise ValueError("An empty passphrase cannot protect a private identity")
    return load_private(material).private_bytes(
        serialization.Encoding.DER,
        serialization.PrivateFormat.PKCS8,
        serialization.BestAvailableEncryption(password),
    )


def encode_public(public_key: Any) -> bytes:
    return public_key.public_bytes(
        serialization.Encoding.PEM,
        serialization.PublicFormat.SubjectPublicKeyInfo,
    )


def read_identity_file(
    path: str,
    passphrase: str,
    key_types: Tuple[Type[Any], Type[Any]],
) -> Tuple[KeyMaterial | None, Any]:
    """Load a public key (PEM) or, failing that, an encrypted private key (DER).

    Returns ``(material, public_key)``; ``material`` is None for public-only
    files. Raises KeyImportError carrying the private-key attempt's diagnostic.
    """
    private_type, public_type = key_types
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        raise KeyImportError(f"Loading identity file failed ({exc})") from exc

    try:
        public_key = serialization.load_pem_public_key(data)
        if not isinstance(public_key, public_type):
            raise TypeError(f"expected {public_type.__name__}, found {type(public_key).__name__}")
        return None, public_key
    except _LOAD_ERRORS as exc:
        log.debug("%s is not a PEM public key: %s", path, exc)

    try:
        private_key = serialization.load_der_private_key(data, password=_password(passphrase))
        if not isinstance(private_key, private_type):
            raise TypeError(f"expected {private_type.__name__}, found {type(private_key).__name__}")
    except _LOAD_ERRORS as exc:
        raise KeyImportError(f"Loading identity file failed ({exc})") from exc

    return dump_private(private_key), private_key.public_key()


def _write_exclusive(path: Path, data: bytes, *, mode: int) -> None:
    try:
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, mode)
    except FileExistsError as exc:
        raise OverwriteError(f"File overwrite not supported: {path}") from exc
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
    except Exception:
        path.unlink(missing_ok=True)
        raise


def write_identity_files(path: str, passphrase: str, material: KeyMaterial, public_key: Any) -> None:
    """Write ``path`` (private) and ``path.pub`` (public); never overwrites either."""
    private_path = Path(path)
    public_path = Path(path + PUBLIC_SUFFIX)
    for target in (private_path, public_path):
        if target.exists():
            raise OverwriteError(f"File overwrite not supported: {target}")

    _write_exclusive(private_path, encode_private(material, passphrase), mode=0o600)
    try:
        _write_exclusive(public_path, encode_public(public_key), mode=0o644)
    except Exception:
        # no half-exported identity
        private_path.unlink(missing_ok=True)
        raise
    log.debug("Exported identity to %s (public key: %s)", private_path, public_path)


def write_signature(sig_path: str, signature: bytes) -> str:
    """Persist raw signature bytes and return their uppercase hex rendering."""
    Path(sig_path).write_bytes(signature)
    return signature.hex().upper()


def der_to_ieee1363(signature: bytes, size: int) -> bytes:
    r, s = decode_dss_signature(signature)
    return r.to_bytes(size, "big") + s.to_bytes(size, "big")


def ieee1363_to_der(signature: bytes, size: int) -> bytes | None:
    if len(signature) != 2 * size:
        return None
    r = int.from_bytes(signature[:size], "big")
    s = int.from_bytes(signature[size:], "big")
    return encode_dss_signature(r, s)
