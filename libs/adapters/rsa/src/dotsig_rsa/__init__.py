"""PKCS (RSA) adapter package; importing it registers the "pkcs" identity."""

from . import rsa_adapter as _rsa_adapter  # noqa: F401

__all__: list[str] = []
