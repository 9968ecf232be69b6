"""Exception hierarchy for token encoding and verification."""

from __future__ import annotations

from typing import Optional


class JWTError(Exception):
    """Base class for all jwtkit errors.

    Every error carries a stable ``identifier`` that callers can branch on and
    a human readable ``reason``.
    """

    identifier: str = "jwt"

    def __init__(self, reason: str, identifier: Optional[str] = None) -> None:
        self.reason = reason
        if identifier is not None:
            self.identifier = identifier
        super().__init__(reason)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(identifier={self.identifier!r}, reason={self.reason!r})"


class Base64URLDecodeError(JWTError):
    identifier = "base64"


class MalformedTokenError(JWTError):
    identifier = "invalidJWT"


class InvalidHeaderEncodingError(JWTError):
    identifier = "invalidHeader"


class InvalidPayloadEncodingError(JWTError):
    identifier = "invalidPayload"


class MissingKeyIDError(JWTError):
    identifier = "missingKID"


class MissingSignerError(JWTError):
    identifier = "missingSigner"


class InvalidSignatureError(JWTError):
    """Signature check failed. The reason never says why."""

    identifier = "invalidSignature"

    def __init__(self, reason: str = "Invalid JWT signature") -> None:
        super().__init__(reason)


class UnsecuredTokenError(JWTError):
    identifier = "unsecured"


class InvalidKeyError(JWTError):
    identifier = "invalidKey"


class UnsupportedAlgorithmError(JWTError):
    identifier = "unsupportedAlgorithm"


class ClaimError(JWTError):
    """Base class for claim verification failures."""

    identifier = "claim"


class TokenExpiredError(ClaimError):
    identifier = "exp"


class TokenNotYetValidError(ClaimError):
    identifier = "nbf"


class InvalidAudienceError(ClaimError):
    identifier = "aud"


class InvalidIssuerError(ClaimError):
    identifier = "iss"


class InvalidSubjectError(ClaimError):
    identifier = "sub"
