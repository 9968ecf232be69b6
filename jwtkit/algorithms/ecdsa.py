"""ECDSA family: ES256 (P-256), ES384 (P-384), ES512 (P-521)."""

from __future__ import annotations

from typing import Optional, Union

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.utils import (
    decode_dss_signature,
    encode_dss_signature,
)

from ..errors import InvalidKeyError
from .base import DigestAlgorithm, JWTAlgorithm

ECKey = Union[ec.EllipticCurvePrivateKey, ec.EllipticCurvePublicKey]

CURVES = {
    DigestAlgorithm.SHA256: ec.SECP256R1,
    DigestAlgorithm.SHA384: ec.SECP384R1,
    DigestAlgorithm.SHA512: ec.SECP521R1,
}


class ECDSAAlgorithm(JWTAlgorithm):
    """ECDSA signatures in the fixed-width ``r || s`` form JWS uses."""

    def __init__(self, key: ECKey, digest: DigestAlgorithm = DigestAlgorithm.SHA256) -> None:
        if isinstance(key, ec.EllipticCurvePrivateKey):
            self._private_key: Optional[ec.EllipticCurvePrivateKey] = key
            self._public_key = key.public_key()
        elif isinstance(key, ec.EllipticCurvePublicKey):
            self._private_key = None
            self._public_key = key
        else:
            raise InvalidKeyError(f"ECDSA algorithms need an EC key, not {type(key).__name__}")

        expected = CURVES[digest]
        if not isinstance(self._public_key.curve, expected):
            raise InvalidKeyError(
                f"ES{digest.bits} needs a {expected.name} key, got {self._public_key.curve.name}"
            )
        self.digest = digest
        self._coordinate_size = (self._public_key.curve.key_size + 7) // 8

    @property
    def name(self) -> str:
        return f"ES{self.digest.bits}"

    @property
    def can_sign(self) -> bool:
        return self._private_key is not None

    def sign(self, message: bytes) -> bytes:
        if self._private_key is None:
            raise InvalidKeyError("EC public keys cannot sign")
        der = self._private_key.sign(message, ec.ECDSA(self.digest.hash()))
        r, s = decode_dss_signature(der)
        size = self._coordinate_size
        return r.to_bytes(size, "big") + s.to_bytes(size, "big")

    def verify(self, message: bytes, signature: bytes) -> bool:
        size = self._coordinate_size
        if len(signature) != 2 * size:
            return False
        r = int.from_bytes(signature[:size], "big")
        s = int.from_bytes(signature[size:], "big")
        try:
            self._public_key.verify(
                encode_dss_signature(r, s), message, ec.ECDSA(self.digest.hash())
            )
        except InvalidSignature:
            return False
        return True
