"""Keypair lifecycle shared by the signature adapters.

``KeyPairIdentity`` implements the Identity contract around one private key
buffer and one public key object. Variants supply the provider pieces:
``key_types``, ``_generate_private_key``, ``_sign_raw`` and ``_verify_raw``.
"""

from __future__ import annotations

import os
from typing import Any, Optional, Tuple, Type

from cryptography.exceptions import InvalidSignature

from .errors import MissingKeyError
from .keys import (
    KeyMaterial,
    dump_private,
    load_private,
    read_identity_file,
    write_identity_files,
    write_signature,
)


def env_bits(env_var: str, default: int) -> int:
    override = os.getenv(env_var)
    if override:
        try:
            return int(override)
        except ValueError as exc:
            raise ValueError(f"{env_var} must be an integer") from exc
    return default


class KeyPairIdentity:
    name = ""
    emsa = ""
    key_types: Tuple[Type[Any], Type[Any]] = (object, object)

    def __init__(self) -> None:
        self._private: Optional[KeyMaterial] = None
        self.public_key: Any = None

    def __repr__(self) -> str:
        state = "private" if self._private is not None else ("public" if self.public_key is not None else "empty")
        return f"<{type(self).__name__} {self.name} {self.emsa} ({state})>"

    # provider hooks

    def _generate_private_key(self) -> Any:
        raise NotImplementedError

    def _sign_raw(self, private_key: Any, message: bytes) -> bytes:
        raise NotImplementedError

    def _verify_raw(self, signature: bytes, message: bytes) -> None:
        """Raise InvalidSignature when ``signature`` does not match."""
        raise NotImplementedError

    # lifecycle

    def has_private_key(self) -> bool:
        return self._private is not None

    def _discard(self) -> None:
        if self._private is not None:
            self._private.wipe()
        self._private = None
        self.public_key = None

    def generate_random(self) -> None:
        self._discard()
        private_key = self._generate_private_key()
        self._private = dump_private(private_key)
        self.public_key = private_key.public_key()

    def import_file(self, path: str, passphrase: str) -> "KeyPairIdentity":
        material, public_key = read_identity_file(path, passphrase, self.key_types)
        self._discard()
        self._private = material
        self.public_key = public_key
        return self

    def export(self, path: str, passphrase: str) -> None:
        if self._private is None:
            raise MissingKeyError(f"{self.name} identity has no private key to export")
        write_identity_files(path, passphrase, self._private, self.public_key)

    def sign(self, message: bytes, sig_path: str) -> str:
        if self._private is None:
            raise MissingKeyError(f"{self.name} identity has no private key; signing requires one")
        signature = self._sign_raw(load_private(self._private), message)
        return write_signature(sig_path, signature)

    def verify(self, signature: bytes, message: bytes) -> bool:
        if self.public_key is None:
            raise MissingKeyError(f"{self.name} identity is empty; import or generate a key first")
        try:
            self._verify_raw(signature, message)
        except (InvalidSignature, ValueError):
            return False
        return True

    def copy(self) -> "KeyPairIdentity":
        other = type(self)()
        if self._private is not None:
            other._private = self._private.copy()
        other.public_key = self.public_key
        return other

    def __copy__(self) -> "KeyPairIdentity":
        return self.copy()

    def __deepcopy__(self, memo: dict) -> "KeyPairIdentity":
        return self.copy()

    def close(self) -> None:
        self._discard()

    def __enter__(self) -> "KeyPairIdentity":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
