from __future__ import annotations
from cryptography.hazmat.primitives.asymmetric import dsa


def dsa_subgroup_size(key: dsa.DSAPrivateKey | dsa.DSAPublicKey) -> int:
    """Byte length of q, the width of each half of an IEEE 1363 DSA signature."""
    q = key.parameters().parameter_numbers().q
    return (q.bit_length() + 7) // 8
