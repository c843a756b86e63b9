from __future__ import annotations
"""Canonical algorithm ids and their fixed parameters.

This module maps the supported algorithm ids to lightweight records naming
the hash/padding descriptor each variant uses and the
default identity file name under the storage root.
"""
from dataclasses import dataclass
from typing import Dict, Tuple

DEFAULT_ALGORITHM = "ecdsa"
PUBLIC_SUFFIX = ".pub"
SIGNATURE_SUFFIX = ".sig"


@dataclass(frozen=True)
class AlgorithmHint:
    algo: str           # canonical id, e.g. "openpgp:eddsa"
    emsa: str           # e.g. "PKCS1v15(SHA-256)", "SHA-256"
    key_file: str       # default private identity file name

    @property
    def public_key_file(self) -> str:
        return self.key_file + PUBLIC_SUFFIX


_PARAMS: Dict[str, AlgorithmHint] = {}


def _add(alias_list, emsa: str, key_file: str) -> None:
    for alias in alias_list:
        _PARAMS[alias] = AlgorithmHint(algo=alias, emsa=emsa, key_file=key_file)


_add(["ecdsa"], emsa="SHA-256", key_file="id_ecdsa")
_add(["pkcs"], emsa="PKCS1v15(SHA-256)", key_file="id_rsa")
# "openpgp" is an alias for the RSA flavour
_add(["openpgp", "openpgp:rsa"], emsa="PKCS1v15(SHA-256)", key_file="id_openpgp_rsa")
_add(["openpgp:dsa"], emsa="SHA-256", key_file="id_openpgp_dsa")
_add(["openpgp:ecdsa"], emsa="SHA-256", key_file="id_openpgp_ecdsa")
# pure Ed25519, never prehashed
_add(["openpgp:eddsa"], emsa="SHA-512", key_file="id_openpgp_eddsa")

SUPPORTED_ALGORITHMS: Tuple[str, ...] = tuple(_PARAMS)


def canonical_algorithm(name: str | None) -> str:
    """Return the supported id for ``name``; empty or unknown ids fall back to ecdsa."""
    if not name:
        return DEFAULT_ALGORITHM
    lowered = name.lower()
    if lowered in _PARAMS:
        return lowered
    return DEFAULT_ALGORITHM


def find(name: str) -> AlgorithmHint:
    return _PARAMS[canonical_algorithm(name)]


def all_hints() -> Dict[str, AlgorithmHint]:
    return dict(_PARAMS)
