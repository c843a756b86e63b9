"""Adapter package for the OpenPGP signature schemes.

Importing it registers "openpgp" (RSA), "openpgp:rsa", "openpgp:dsa",
"openpgp:ecdsa" and "openpgp:eddsa". Keys and signatures use the same file
conventions as the other identities; OpenPGP packet framing is not produced.
"""

# Trigger registration side-effects
from . import sig_adapters as _sig_adapters  # noqa: F401

__all__: list[str] = []
