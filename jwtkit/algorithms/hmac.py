"""HMAC family: HS256, HS384, HS512."""

from __future__ import annotations

from typing import Union

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hmac

from ..errors import InvalidKeyError
from .base import DigestAlgorithm, JWTAlgorithm

# Asymmetric key material must never double as a shared secret.
_FORBIDDEN_PREFIXES = (b"-----BEGIN", b"ssh-rsa", b"ecdsa-sha2-", b"ssh-ed25519")


class HMACAlgorithm(JWTAlgorithm):
    """Symmetric signatures with a shared secret."""

    def __init__(
        self, key: Union[bytes, str], digest: DigestAlgorithm = DigestAlgorithm.SHA256
    ) -> None:
        if isinstance(key, str):
            key = key.encode("utf-8")
        if not isinstance(key, (bytes, bytearray)):
            raise InvalidKeyError(
                f"HMAC keys must be bytes or str, not {type(key).__name__}"
            )
        if not key:
            raise InvalidKeyError("HMAC key must not be empty")
        if bytes(key).lstrip().startswith(_FORBIDDEN_PREFIXES):
            raise InvalidKeyError("Refusing to use asymmetric key material as an HMAC secret")
        self._key = bytes(key)
        self.digest = digest

    @property
    def name(self) -> str:
        return f"HS{self.digest.bits}"

    def _mac(self) -> hmac.HMAC:
        return hmac.HMAC(self._key, self.digest.hash())

    def sign(self, message: bytes) -> bytes:
        mac = self._mac()
        mac.update(message)
        return mac.finalize()

    def verify(self, message: bytes, signature: bytes) -> bool:
        """Compare against the expected MAC in constant time."""
        mac = self._mac()
        mac.update(message)
        try:
            mac.verify(signature)
        except InvalidSignature:
            return False
        return True
