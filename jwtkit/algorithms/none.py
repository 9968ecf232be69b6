"""The unsigned ``none`` algorithm, for interoperability testing only."""

from __future__ import annotations

from .base import JWTAlgorithm


class NoneAlgorithm(JWTAlgorithm):
    """Produces empty signatures.

    Registries and verification calls reject it unless explicitly opted in.
    """

    is_unsigned = True

    @property
    def name(self) -> str:
        return "none"

    def sign(self, message: bytes) -> bytes:
        return b""

    def verify(self, message: bytes, signature: bytes) -> bool:
        return len(signature) == 0
