from __future__ import annotations
from dotsig import registry
from dotsig.identity import KeyPairIdentity
from dotsig.keys import der_to_ieee1363, ieee1363_to_der
from dotsig.params import find

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec


def scalar_size(curve: ec.EllipticCurve) -> int:
    return (curve.key_size + 7) // 8


@registry.register("ecdsa")
class ECDSAIdentity(KeyPairIdentity):
    """ECDSA over NIST P-256 with SHA-256.

    Signatures are stored in the IEEE 1363 layout (r || s), 64 bytes for P-256.
    """
    name = "ecdsa"
    emsa = find("ecdsa").emsa
    curve = ec.SECP256R1
    key_types = (ec.EllipticCurvePrivateKey, ec.EllipticCurvePublicKey)

    def _generate_private_key(self) -> ec.EllipticCurvePrivateKey:
        return ec.generate_private_key(self.curve())

    def _sign_raw(self, private_key: ec.EllipticCurvePrivateKey, message: bytes) -> bytes:
        der = private_key.sign(message, ec.ECDSA(hashes.SHA256()))
        return der_to_ieee1363(der, scalar_size(private_key.curve))

    def _verify_raw(self, signature: bytes, message: bytes) -> None:
        der = ieee1363_to_der(signature, scalar_size(self.public_key.curve))
        if der is None:
            raise InvalidSignature("signature length does not match the curve")
        self.public_key.verify(der, message, ec.ECDSA(hashes.SHA256()))
