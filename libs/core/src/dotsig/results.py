"""Per-entry result records reported by the sign and verify runners."""

from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class SignResult:
    name: str
    signature_path: str
    signature_hex: str


@dataclass(frozen=True)
class VerifyResult:
    name: str        # the ".sig" entry
    document: str    # entry holding the original message
    ok: bool

    @property
    def status(self) -> str:
        return "OK" if self.ok else "NOT OK"
