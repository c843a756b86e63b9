from __future__ import annotations
from typing import Iterator, Mapping

from dotsig import Identity, SignResult
from dotsig.resolver import signature_path


def sign_documents(identity: Identity, documents: Mapping[str, bytes]) -> Iterator[SignResult]:
    """Sign every entry independently, writing ``<name>.sig`` next to it."""
    for name, content in documents.items():
        sig_path = signature_path(name)
        signature_hex = identity.sign(content, sig_path)
        yield SignResult(name=name, signature_path=sig_path, signature_hex=signature_hex)
