"""Input resolution and document/signature pairing.

Inputs are the file arguments, in order, plus an optional ``stdin`` entry.
In signing mode every entry is a document. In verification mode only
``.sig`` entries are checked; ``X.sig`` pairs with the ``X`` entry, or with
``stdin`` when ``X`` was not given.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, Mapping, Sequence

from .errors import InputFileError, MissingDocumentError, UsageError
from .params import SIGNATURE_SUFFIX

log = logging.getLogger(__name__)

STDIN_ENTRY = "stdin"


@dataclass(frozen=True)
class SignaturePair:
    name: str           # the ".sig" entry
    signature: bytes
    document: str       # entry that supplied the original message
    message: bytes


def wants_stdin(files: Sequence[str]) -> bool:
    """Stdin carries the operand when no file is given, or only a single ``.sig`` file."""
    if not files:
        return True
    return len(files) == 1 and files[0].endswith(SIGNATURE_SUFFIX)


def require_input(files: Sequence[str], stdin_data: bytes | None) -> None:
    if not files and not stdin_data:
        raise UsageError("at least one file or data on stdin is required")


def read_inputs(files: Sequence[str], stdin_data: bytes | None = None) -> Dict[str, bytes]:
    """Read every file in full; append the ``stdin`` entry when data was captured.

    The first occurrence of a name wins, so duplicate arguments (or a file
    literally named ``stdin``) are read once.
    """
    documents: Dict[str, bytes] = {}
    for name in files:
        if name in documents:
            continue
        try:
            documents[name] = Path(name).read_bytes()
        except OSError as exc:
            raise InputFileError(f"Provided document does not exist: {name}") from exc
        log.debug("Read %d bytes from %s", len(documents[name]), name)

    if stdin_data:
        documents.setdefault(STDIN_ENTRY, stdin_data)
    return documents


def document_name(sig_name: str) -> str:
    return sig_name[: -len(SIGNATURE_SUFFIX)] if sig_name.endswith(SIGNATURE_SUFFIX) else sig_name


def signature_path(name: str) -> str:
    return name + SIGNATURE_SUFFIX


def iter_signature_pairs(documents: Mapping[str, bytes]) -> Iterator[SignaturePair]:
    """Yield each ``.sig`` entry with its original message, in input order.

    Raises MissingDocumentError when the entry is reached and neither the
    document nor ``stdin`` is available; earlier pairs have been yielded.
    """
    for name, content in documents.items():
        if not name.endswith(SIGNATURE_SUFFIX):
            continue
        original = document_name(name)
        if original in documents:
            source = original
        elif STDIN_ENTRY in documents:
            source = STDIN_ENTRY
        else:
            raise MissingDocumentError(f"Missing document to verify signature: {name}")
        log.debug("Pairing %s with %s", name, source)
        yield SignaturePair(name=name, signature=content, document=source, message=documents[source])
