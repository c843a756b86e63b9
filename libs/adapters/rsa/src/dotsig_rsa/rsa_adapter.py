from __future__ import annotations
from dotsig import registry
from dotsig.identity import KeyPairIdentity, env_bits
from dotsig.params import find

from cryptography.hazmat.primitives.asymmetric import rsa, padding
from cryptography.hazmat.primitives import hashes


def _rsa_bits() -> int:
    return env_bits("DOTSIG_RSA_BITS", 2048)


def generate_rsa_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=_rsa_bits())


@registry.register("pkcs")
class PKCSIdentity(KeyPairIdentity):
    """RSA signature identity using cryptography, PKCS#1 v1.5 with SHA-256."""
    name = "pkcs"
    emsa = find("pkcs").emsa
    key_types = (rsa.RSAPrivateKey, rsa.RSAPublicKey)

    def _generate_private_key(self) -> rsa.RSAPrivateKey:
        return generate_rsa_key()

    def _sign_raw(self, private_key: rsa.RSAPrivateKey, message: bytes) -> bytes:
        return private_key.sign(message, padding.PKCS1v15(), hashes.SHA256())

    def _verify_raw(self, signature: bytes, message: bytes) -> None:
        self.public_key.verify(signature, message, padding.PKCS1v15(), hashes.SHA256())
