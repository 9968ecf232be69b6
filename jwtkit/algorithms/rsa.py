"""RSASSA-PKCS1-v1_5 family: RS256, RS384, RS512."""

from __future__ import annotations

from typing import Optional, Union

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from ..errors import InvalidKeyError
from .base import DigestAlgorithm, JWTAlgorithm

MIN_KEY_SIZE = 2048

RSAKey = Union[rsa.RSAPrivateKey, rsa.RSAPublicKey]


class RSAAlgorithm(JWTAlgorithm):
    """RSA signatures.

    A private key signs and verifies. A public key only verifies, and
    :meth:`sign` raises :class:`~jwtkit.errors.InvalidKeyError`.
    """

    def __init__(self, key: RSAKey, digest: DigestAlgorithm = DigestAlgorithm.SHA256) -> None:
        if isinstance(key, rsa.RSAPrivateKey):
            self._private_key: Optional[rsa.RSAPrivateKey] = key
            self._public_key = key.public_key()
        elif isinstance(key, rsa.RSAPublicKey):
            self._private_key = None
            self._public_key = key
        else:
            raise InvalidKeyError(f"RSA algorithms need an RSA key, not {type(key).__name__}")
        if self._public_key.key_size < MIN_KEY_SIZE:
            raise InvalidKeyError(
                f"RSA keys must be at least {MIN_KEY_SIZE} bits, got {self._public_key.key_size}"
            )
        self.digest = digest

    @property
    def name(self) -> str:
        return f"RS{self.digest.bits}"

    @property
    def can_sign(self) -> bool:
        return self._private_key is not None

    def sign(self, message: bytes) -> bytes:
        if self._private_key is None:
            raise InvalidKeyError("RSA public keys cannot sign")
        return self._private_key.sign(message, padding.PKCS1v15(), self.digest.hash())

    def verify(self, message: bytes, signature: bytes) -> bool:
        try:
            self._public_key.verify(signature, message, padding.PKCS1v15(), self.digest.hash())
        except InvalidSignature:
            return False
        return True
