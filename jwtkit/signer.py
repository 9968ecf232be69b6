"""Signer: one algorithm instance with its key material."""

from __future__ import annotations

from typing import Optional, Union

from .algorithms import (
    DigestAlgorithm,
    ECDSAAlgorithm,
    HMACAlgorithm,
    JWTAlgorithm,
    NoneAlgorithm,
    RSAAlgorithm,
)
from .algorithms.ecdsa import ECKey
from .algorithms.rsa import RSAKey


class JWTSigner:
    """Signs and verifies the ``header.payload`` signing input of a token.

    The signer never looks at a parsed header's ``alg``: how a token is
    verified depends only on which signer was selected.
    """

    def __init__(self, algorithm: JWTAlgorithm, kid: Optional[str] = None) -> None:
        self.algorithm = algorithm
        self.kid = kid

    @property
    def name(self) -> str:
        return self.algorithm.name

    @property
    def is_unsigned(self) -> bool:
        return self.algorithm.is_unsigned

    @staticmethod
    def signing_input(header: bytes, payload: bytes) -> bytes:
        return header + b"." + payload

    def sign(self, header: bytes, payload: bytes) -> bytes:
        """Sign the base64url ``header`` and ``payload`` segments."""
        return self.algorithm.sign(self.signing_input(header, payload))

    def verify(self, signature: bytes, header: bytes, payload: bytes) -> bool:
        """Check ``signature`` against the base64url segments it covers."""
        return self.algorithm.verify(self.signing_input(header, payload), signature)

    def __repr__(self) -> str:
        return f"JWTSigner(algorithm={self.name!r}, kid={self.kid!r})"

    @classmethod
    def hs256(cls, key: Union[bytes, str], kid: Optional[str] = None) -> "JWTSigner":
        return cls(HMACAlgorithm(key, DigestAlgorithm.SHA256), kid)

    @classmethod
    def hs384(cls, key: Union[bytes, str], kid: Optional[str] = None) -> "JWTSigner":
        return cls(HMACAlgorithm(key, DigestAlgorithm.SHA384), kid)

    @classmethod
    def hs512(cls, key: Union[bytes, str], kid: Optional[str] = None) -> "JWTSigner":
        return cls(HMACAlgorithm(key, DigestAlgorithm.SHA512), kid)

    @classmethod
    def rs256(cls, key: RSAKey, kid: Optional[str] = None) -> "JWTSigner":
        return cls(RSAAlgorithm(key, DigestAlgorithm.SHA256), kid)

    @classmethod
    def rs384(cls, key: RSAKey, kid: Optional[str] = None) -> "JWTSigner":
        return cls(RSAAlgorithm(key, DigestAlgorithm.SHA384), kid)

    @classmethod
    def rs512(cls, key: RSAKey, kid: Optional[str] = None) -> "JWTSigner":
        return cls(RSAAlgorithm(key, DigestAlgorithm.SHA512), kid)

    @classmethod
    def es256(cls, key: ECKey, kid: Optional[str] = None) -> "JWTSigner":
        return cls(ECDSAAlgorithm(key, DigestAlgorithm.SHA256), kid)

    @classmethod
    def es384(cls, key: ECKey, kid: Optional[str] = None) -> "JWTSigner":
        return cls(ECDSAAlgorithm(key, DigestAlgorithm.SHA384), kid)

    @classmethod
    def es512(cls, key: ECKey, kid: Optional[str] = None) -> "JWTSigner":
        return cls(ECDSAAlgorithm(key, DigestAlgorithm.SHA512), kid)

    @classmethod
    def unsigned(cls, kid: Optional[str] = None) -> "JWTSigner":
        """Signer for the ``none`` algorithm. Verification needs an explicit opt-in."""
        return cls(NoneAlgorithm(), kid)
