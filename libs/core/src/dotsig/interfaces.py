from __future__ import annotations
from typing import Protocol

"""Identity contract implemented by signature adapters.

Adapters implement this Protocol and register themselves into the global
registry. The CLI interacts only with this interface, never with the
cryptography provider directly.
"""


class Identity(Protocol):
    """A private/public keypair bound to one signature algorithm.

    The hash/padding descriptor (``emsa``) is fixed per variant. An identity
    is created empty and populated exactly once by ``generate_random`` or
    ``import_file``. Identities are context managers: leaving the block wipes
    private key material.
    """
    name: str
    emsa: str
    def generate_random(self) -> None: ...
    def import_file(self, path: str, passphrase: str) -> "Identity": ...
    def export(self, path: str, passphrase: str) -> None: ...
    def sign(self, message: bytes, sig_path: str) -> str: ...
    def verify(self, signature: bytes, message: bytes) -> bool: ...
    def has_private_key(self) -> bool: ...
    def close(self) -> None: ...
    def __enter__(self) -> "Identity": ...
    def __exit__(self, *exc_info: object) -> None: ...
