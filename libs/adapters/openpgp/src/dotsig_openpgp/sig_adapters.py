from __future__ import annotations
from dotsig import registry
from dotsig.identity import KeyPairIdentity, env_bits
from dotsig.keys import der_to_ieee1363, ieee1363_to_der
from dotsig.params import find
from ._util import dsa_subgroup_size

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import dsa, ec, ed25519, padding, rsa


@registry.register("openpgp")
@registry.register("openpgp:rsa")
class OpenPGPRSAIdentity(KeyPairIdentity):
    """OpenPGP RSA signatures, PKCS#1 v1.5 with SHA-256."""
    name = "openpgp:rsa"
    emsa = find("openpgp:rsa").emsa
    key_types = (rsa.RSAPrivateKey, rsa.RSAPublicKey)

    def _generate_private_key(self) -> rsa.RSAPrivateKey:
        bits = env_bits("DOTSIG_RSA_BITS", 2048)
        return rsa.generate_private_key(public_exponent=65537, key_size=bits)

    def _sign_raw(self, private_key: rsa.RSAPrivateKey, message: bytes) -> bytes:
        return private_key.sign(message, padding.PKCS1v15(), hashes.SHA256())

    def _verify_raw(self, signature: bytes, message: bytes) -> None:
        self.public_key.verify(signature, message, padding.PKCS1v15(), hashes.SHA256())


@registry.register("openpgp:dsa")
class OpenPGPDSAIdentity(KeyPairIdentity):
    """OpenPGP DSA signatures with SHA-256 (IEEE 1363 layout)."""
    name = "openpgp:dsa"
    emsa = find("openpgp:dsa").emsa
    key_types = (dsa.DSAPrivateKey, dsa.DSAPublicKey)

    def _generate_private_key(self) -> dsa.DSAPrivateKey:
        return dsa.generate_private_key(key_size=env_bits("DOTSIG_DSA_BITS", 2048))

    def _sign_raw(self, private_key: dsa.DSAPrivateKey, message: bytes) -> bytes:
        return der_to_ieee1363(private_key.sign(message, hashes.SHA256()), dsa_subgroup_size(private_key))

    def _verify_raw(self, signature: bytes, message: bytes) -> None:
        der = ieee1363_to_der(signature, dsa_subgroup_size(self.public_key))
        if der is None:
            raise InvalidSignature("signature length does not match the key")
        self.public_key.verify(der, message, hashes.SHA256())


@registry.register("openpgp:ecdsa")
class OpenPGPECDSAIdentity(KeyPairIdentity):
    """OpenPGP ECDSA signatures over NIST P-256 with SHA-256."""
    name = "openpgp:ecdsa"
    emsa = find("openpgp:ecdsa").emsa
    key_types = (ec.EllipticCurvePrivateKey, ec.EllipticCurvePublicKey)

    def _generate_private_key(self) -> ec.EllipticCurvePrivateKey:
        return ec.generate_private_key(ec.SECP256R1())

    def _sign_raw(self, private_key: ec.EllipticCurvePrivateKey, message: bytes) -> bytes:
        size = (private_key.curve.key_size + 7) // 8
        return der_to_ieee1363(private_key.sign(message, ec.ECDSA(hashes.SHA256())), size)

    def _verify_raw(self, signature: bytes, message: bytes) -> None:
        der = ieee1363_to_der(signature, (self.public_key.curve.key_size + 7) // 8)
        if der is None:
            raise InvalidSignature("signature length does not match the curve")
        self.public_key.verify(der, message, ec.ECDSA(hashes.SHA256()))


@registry.register("openpgp:eddsa")
class OpenPGPEdDSAIdentity(KeyPairIdentity):
    """OpenPGP EdDSA (Ed25519) signatures.

    Ed25519 hashes with SHA-512 internally and signs the message itself;
    the prehashed variant (Ed25519ph) is never used.
    """
    name = "openpgp:eddsa"
    emsa = find("openpgp:eddsa").emsa
    key_types = (ed25519.Ed25519PrivateKey, ed25519.Ed25519PublicKey)

    def _generate_private_key(self) -> ed25519.Ed25519PrivateKey:
        return ed25519.Ed25519PrivateKey.generate()

    def _sign_raw(self, private_key: ed25519.Ed25519PrivateKey, message: bytes) -> bytes:
        return private_key.sign(message)

    def _verify_raw(self, signature: bytes, message: bytes) -> None:
        self.public_key.verify(signature, message)
