"""JSON Web Key (RFC 7517) parsing.

Only turns a JWK Set document into signers; fetching and caching key sets is
left to the application.
"""

from __future__ import annotations

from typing import List, Optional

from cryptography.hazmat.primitives.asymmetric import ec, rsa
from pydantic import BaseModel, ConfigDict, Field

from . import base64url
from .algorithms import algorithm_for
from .errors import Base64URLDecodeError, InvalidKeyError, UnsupportedAlgorithmError
from .signer import JWTSigner

_EC_CURVES = {
    "P-256": (ec.SECP256R1, "ES256"),
    "P-384": (ec.SECP384R1, "ES384"),
    "P-521": (ec.SECP521R1, "ES512"),
}


class JWK(BaseModel):
    """A single JSON Web Key. Unknown members are kept."""

    model_config = ConfigDict(frozen=True, extra="allow")

    kty: str
    kid: Optional[str] = None
    alg: Optional[str] = None
    use: Optional[str] = None

    # RSA
    n: Optional[str] = None
    e: Optional[str] = None
    p: Optional[str] = None
    q: Optional[str] = None
    dp: Optional[str] = None
    dq: Optional[str] = None
    qi: Optional[str] = None

    # EC
    crv: Optional[str] = None
    x: Optional[str] = None
    y: Optional[str] = None

    # RSA and EC private exponent
    d: Optional[str] = None

    # oct
    k: Optional[str] = None


class JWKSet(BaseModel):
    keys: List[JWK] = Field(default_factory=list)


def _require(jwk: JWK, member: str) -> str:
    value = getattr(jwk, member)
    if not value:
        raise InvalidKeyError(f"{jwk.kty} JWK {jwk.kid!r} is missing {member!r}")
    return value


def _to_int(value: str) -> int:
    return int.from_bytes(base64url.decode(value), "big")


def _rsa_key(jwk: JWK):
    n = _to_int(_require(jwk, "n"))
    e = _to_int(_require(jwk, "e"))
    public = rsa.RSAPublicNumbers(e, n)
    if jwk.d is None:
        return public.public_key()

    d = _to_int(jwk.d)
    if all(getattr(jwk, m) for m in ("p", "q", "dp", "dq", "qi")):
        p, q = _to_int(jwk.p), _to_int(jwk.q)
        dmp1, dmq1, iqmp = _to_int(jwk.dp), _to_int(jwk.dq), _to_int(jwk.qi)
    else:
        p, q = rsa.rsa_recover_prime_factors(n, e, d)
        dmp1, dmq1, iqmp = rsa.rsa_crt_dmp1(d, p), rsa.rsa_crt_dmq1(d, q), rsa.rsa_crt_iqmp(p, q)
    return rsa.RSAPrivateNumbers(p, q, d, dmp1, dmq1, iqmp, public).private_key()


def _ec_key(jwk: JWK, curve: type):
    x = _to_int(_require(jwk, "x"))
    y = _to_int(_require(jwk, "y"))
    public = ec.EllipticCurvePublicNumbers(x, y, curve())
    if jwk.d is None:
        return public.public_key()
    return ec.EllipticCurvePrivateNumbers(_to_int(jwk.d), public).private_key()


def signer_from_jwk(jwk: JWK) -> JWTSigner:
    """Build a signer for ``jwk``, keyed by its ``kid``.

    The algorithm comes from the JWK's ``alg``, defaulting to ``RS256`` for
    RSA keys and to the curve's algorithm for EC keys. Symmetric keys must
    name their algorithm.
    """

    if not jwk.kid:
        raise InvalidKeyError("JWK has no kid")
    if jwk.use not in (None, "sig"):
        raise InvalidKeyError(f"JWK {jwk.kid!r} is not a signing key (use={jwk.use!r})")

    try:
        if jwk.kty == "RSA":
            alg = jwk.alg or "RS256"
            if not alg.startswith("RS"):
                raise InvalidKeyError(f"RSA JWK {jwk.kid!r} cannot be used with {alg}")
            key = _rsa_key(jwk)
        elif jwk.kty == "EC":
            crv = _require(jwk, "crv")
            if crv not in _EC_CURVES:
                raise UnsupportedAlgorithmError(f"Unsupported curve {crv!r}")
            curve, curve_alg = _EC_CURVES[crv]
            alg = jwk.alg or curve_alg
            if alg != curve_alg:
                raise InvalidKeyError(f"EC JWK {jwk.kid!r} on {crv} cannot be used with {alg}")
            key = _ec_key(jwk, curve)
        elif jwk.kty == "oct":
            alg = _require(jwk, "alg")
            if not alg.startswith("HS"):
                raise InvalidKeyError(f"oct JWK {jwk.kid!r} cannot be used with {alg}")
            key = base64url.decode(_require(jwk, "k"))
        else:
            raise UnsupportedAlgorithmError(f"Unsupported JWK key type {jwk.kty!r}")
    except (Base64URLDecodeError, ValueError) as exc:
        raise InvalidKeyError(f"JWK {jwk.kid!r} has invalid key material: {exc}") from exc

    return JWTSigner(algorithm_for(alg, key), kid=jwk.kid)
