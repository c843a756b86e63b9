from __future__ import annotations
from typing import Iterator, Mapping

from dotsig import Identity, VerifyResult
from dotsig.resolver import iter_signature_pairs


def verify_documents(identity: Identity, documents: Mapping[str, bytes]) -> Iterator[VerifyResult]:
    """Verify each ``.sig`` entry against its resolved original message.

    A failed verification is reported and the batch continues; a missing
    original raises once that entry is reached.
    """
    for pair in iter_signature_pairs(documents):
        ok = identity.verify(pair.signature, pair.message)
        yield VerifyResult(name=pair.name, document=pair.document, ok=ok)
