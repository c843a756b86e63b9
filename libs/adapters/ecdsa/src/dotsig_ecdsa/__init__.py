"""ECDSA adapter package; importing it registers the "ecdsa" identity."""

from . import ecdsa_adapter as _ecdsa_adapter  # noqa: F401

__all__: list[str] = []
