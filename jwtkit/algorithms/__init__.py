"""Signature algorithms and a name-based factory."""

from __future__ import annotations

from typing import Any, Optional

from ..errors import UnsupportedAlgorithmError
from .base import DigestAlgorithm, JWTAlgorithm
from .ecdsa import ECDSAAlgorithm
from .hmac import HMACAlgorithm
from .none import NoneAlgorithm
from .rsa import RSAAlgorithm

_FAMILIES = {
    "HS": HMACAlgorithm,
    "RS": RSAAlgorithm,
    "ES": ECDSAAlgorithm,
}

ALGORITHM_NAMES = tuple(
    f"{prefix}{digest.bits}" for prefix in _FAMILIES for digest in DigestAlgorithm
) + ("none",)


def algorithm_for(name: str, key: Optional[Any] = None) -> JWTAlgorithm:
    """Build the algorithm called ``name`` around ``key``.

    Used when loading keys from configuration or JWK documents. Token
    verification never calls this with a header's ``alg`` value.
    """

    if name == "none":
        return NoneAlgorithm()
    if name not in ALGORITHM_NAMES:
        raise UnsupportedAlgorithmError(f"Unsupported algorithm: {name}")
    family = _FAMILIES[name[:2]]
    return family(key, DigestAlgorithm(int(name[2:])))


__all__ = [
    "ALGORITHM_NAMES",
    "DigestAlgorithm",
    "ECDSAAlgorithm",
    "HMACAlgorithm",
    "JWTAlgorithm",
    "NoneAlgorithm",
    "RSAAlgorithm",
    "algorithm_for",
]
