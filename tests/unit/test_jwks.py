"""Tests for JWK Set parsing."""

import json
from datetime import timedelta

import pytest

from jwtkit import JWT, JWTSigner, JWTSigners, RegisteredClaims, base64url
from jwtkit.errors import InvalidKeyError, InvalidSignatureError, UnsupportedAlgorithmError
from jwtkit.jwks import JWK, signer_from_jwk


def _b64int(value: int) -> str:
    return base64url.encode(value.to_bytes((value.bit_length() + 7) // 8, "big"))


def _rsa_jwk(key, kid="rsa-1", private=False, crt=True, **extra):
    public = key.public_key().public_numbers()
    jwk = {"kty": "RSA", "kid": kid, "n": _b64int(public.n), "e": _b64int(public.e)}
    if private:
        numbers = key.private_numbers()
        jwk["d"] = _b64int(numbers.d)
        if crt:
            jwk.update(
                p=_b64int(numbers.p),
                q=_b64int(numbers.q),
                dp=_b64int(numbers.dmp1),
                dq=_b64int(numbers.dmq1),
                qi=_b64int(numbers.iqmp),
            )
    jwk.update(extra)
    return jwk


def _ec_jwk(key, crv, kid="ec-1", private=False, **extra):
    public = key.public_key().public_numbers()
    jwk = {"kty": "EC", "kid": kid, "crv": crv, "x": _b64int(public.x), "y": _b64int(public.y)}
    if private:
        jwk["d"] = _b64int(key.private_numbers().private_value)
    jwk.update(extra)
    return jwk


@pytest.fixture
def claims(now):
    return RegisteredClaims(sub="user-1", exp=now + timedelta(minutes=5))


def test_rsa_public_jwk_verifies(rsa_key, claims, now):
    token = JWT(claims).sign(JWTSigner.rs256(rsa_key), kid="rsa-1")
    signer = signer_from_jwk(JWK(**_rsa_jwk(rsa_key)))

    assert signer.name == "RS256"
    assert signer.kid == "rsa-1"
    assert JWT.verify(token, RegisteredClaims, signer, now=now).payload == claims


@pytest.mark.parametrize("crt", [True, False])
def test_rsa_private_jwk_signs(rsa_key, claims, now, crt):
    signer = signer_from_jwk(JWK(**_rsa_jwk(rsa_key, private=True, crt=crt, alg="RS512")))
    token = JWT(claims).sign(signer)

    assert signer.name == "RS512"
    JWT.verify(token, RegisteredClaims, JWTSigner.rs512(rsa_key.public_key()), now=now)


@pytest.mark.parametrize("key_fixture, crv, alg", [
    ("p256_key", "P-256", "ES256"),
    ("p384_key", "P-384", "ES384"),
    ("p521_key", "P-521", "ES512"),
])
def test_ec_jwk(request, claims, now, key_fixture, crv, alg):
    key = request.getfixturevalue(key_fixture)
    private = signer_from_jwk(JWK(**_ec_jwk(key, crv, private=True)))
    public = signer_from_jwk(JWK(**_ec_jwk(key, crv)))

    assert private.name == alg
    token = JWT(claims).sign(private)
    JWT.verify(token, RegisteredClaims, public, now=now)


def test_ec_jwk_alg_must_match_curve(p256_key):
    with pytest.raises(InvalidKeyError):
        signer_from_jwk(JWK(**_ec_jwk(p256_key, "P-256", alg="ES384")))


def test_oct_jwk(claims, now):
    jwk = JWK(kty="oct", kid="hmac", alg="HS384", k=base64url.encode(b"shared-secret"))
    signer = signer_from_jwk(jwk)

    assert signer.name == "HS384"
    token = JWT(claims).sign(JWTSigner.hs384(b"shared-secret"))
    JWT.verify(token, RegisteredClaims, signer, now=now)


@pytest.mark.parametrize("jwk", [
    {"kty": "oct", "kid": "hmac", "k": "c2VjcmV0"},
    {"kty": "oct", "kid": "hmac", "alg": "RS256", "k": "c2VjcmV0"},
    {"kty": "oct", "alg": "HS256", "k": "c2VjcmV0"},
    {"kty": "oct", "kid": "hmac", "alg": "HS256", "use": "enc", "k": "c2VjcmV0"},
    {"kty": "oct", "kid": "hmac", "alg": "HS256", "k": "c2VjcmV0=="},
    {"kty": "RSA", "kid": "rsa", "e": "AQAB"},
])
def test_invalid_jwks(jwk):
    with pytest.raises(InvalidKeyError):
        signer_from_jwk(JWK(**jwk))


def test_rsa_jwk_rejects_foreign_algorithm(rsa_key):
    with pytest.raises(InvalidKeyError):
        signer_from_jwk(JWK(**_rsa_jwk(rsa_key, alg="ES256")))


@pytest.mark.parametrize("jwk", [
    {"kty": "OKP", "kid": "ed", "crv": "Ed25519", "x": "AAAA"},
    {"kty": "EC", "kid": "ec", "crv": "secp256k1", "x": "AAAA", "y": "AAAA"},
])
def test_unsupported_jwks(jwk):
    with pytest.raises(UnsupportedAlgorithmError):
        signer_from_jwk(JWK(**jwk))


def test_signers_from_jwks(rsa_key, p256_key, claims, now):
    document = json.dumps({
        "keys": [
            _rsa_jwk(rsa_key, kid="rsa-1"),
            _ec_jwk(p256_key, "P-256", kid="ec-1"),
            {"kty": "oct", "kid": "hmac", "alg": "HS256", "k": base64url.encode(b"secret")},
        ]
    })
    signers = JWTSigners.from_jwks(document)

    assert sorted(signers) == ["ec-1", "hmac", "rsa-1"]
    assert signers.default is None

    token = JWT(claims).sign(JWTSigner.es256(p256_key), kid="ec-1")
    assert JWT.verify_using(token, RegisteredClaims, signers, now=now).header.kid == "ec-1"

    relabelled = JWT(claims).sign(JWTSigner.es256(p256_key), kid="rsa-1")
    with pytest.raises(InvalidSignatureError):
        JWT.verify_using(relabelled, RegisteredClaims, signers, now=now)


def test_signers_from_jwks_mapping(rsa_key):
    signers = JWTSigners.from_jwks({"keys": [_rsa_jwk(rsa_key, kid="a")]})
    assert signers.require_signer("a").name == "RS256"
