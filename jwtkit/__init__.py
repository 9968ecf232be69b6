"""jwtkit: JSON Web Token signing and verification."""

from .algorithms import (
    DigestAlgorithm,
    ECDSAAlgorithm,
    HMACAlgorithm,
    JWTAlgorithm,
    NoneAlgorithm,
    RSAAlgorithm,
)
from .claims import (
    AudienceClaim,
    ExpirationClaim,
    IDClaim,
    IssuedAtClaim,
    IssuerClaim,
    JWTClaim,
    NotBeforeClaim,
    NumericDate,
    SubjectClaim,
)
from .errors import (
    Base64URLDecodeError,
    ClaimError,
    InvalidAudienceError,
    InvalidHeaderEncodingError,
    InvalidIssuerError,
    InvalidKeyError,
    InvalidPayloadEncodingError,
    InvalidSignatureError,
    InvalidSubjectError,
    JWTError,
    MalformedTokenError,
    MissingKeyIDError,
    MissingSignerError,
    TokenExpiredError,
    TokenNotYetValidError,
    UnsecuredTokenError,
    UnsupportedAlgorithmError,
)
from .header import JWTHeader
from .jwt import JWT, UnverifiedJWT
from .payload import JWTPayload, RegisteredClaims, VerificationContext
from .signer import JWTSigner
from .signers import JWTSigners

__version__ = "0.1.0"
__all__ = [
    "JWT",
    "UnverifiedJWT",
    "JWTHeader",
    "JWTPayload",
    "RegisteredClaims",
    "VerificationContext",
    "JWTSigner",
    "JWTSigners",
    "JWTAlgorithm",
    "DigestAlgorithm",
    "HMACAlgorithm",
    "RSAAlgorithm",
    "ECDSAAlgorithm",
    "NoneAlgorithm",
    "JWTClaim",
    "NumericDate",
    "ExpirationClaim",
    "NotBeforeClaim",
    "IssuedAtClaim",
    "AudienceClaim",
    "IssuerClaim",
    "SubjectClaim",
    "IDClaim",
    "JWTError",
    "Base64URLDecodeError",
    "MalformedTokenError",
    "InvalidHeaderEncodingError",
    "InvalidPayloadEncodingError",
    "MissingKeyIDError",
    "MissingSignerError",
    "InvalidSignatureError",
    "UnsecuredTokenError",
    "InvalidKeyError",
    "UnsupportedAlgorithmError",
    "ClaimError",
    "TokenExpiredError",
    "TokenNotYetValidError",
    "InvalidAudienceError",
    "InvalidIssuerError",
    "InvalidSubjectError",
]
