"""Tests for claim values and the registered claim set."""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from jwtkit import (
    AudienceClaim,
    ExpirationClaim,
    IDClaim,
    IssuedAtClaim,
    IssuerClaim,
    JWTClaim,
    JWTSigner,
    NotBeforeClaim,
    RegisteredClaims,
    SubjectClaim,
    VerificationContext,
)
from jwtkit.errors import (
    ClaimError,
    InvalidAudienceError,
    InvalidIssuerError,
    InvalidSubjectError,
    TokenExpiredError,
    TokenNotYetValidError,
)


def test_expiration_boundary_is_exclusive(now):
    with pytest.raises(TokenExpiredError):
        ExpirationClaim(now).verify(now)
    ExpirationClaim(now + timedelta(seconds=1)).verify(now)


def test_expiration_in_the_past(now):
    with pytest.raises(TokenExpiredError) as exc_info:
        ExpirationClaim(now - timedelta(minutes=5)).verify(now)
    assert isinstance(exc_info.value, ClaimError)
    assert exc_info.value.identifier == "exp"


def test_not_before(now):
    NotBeforeClaim(now).verify(now)
    NotBeforeClaim(now - timedelta(seconds=1)).verify(now)
    with pytest.raises(TokenNotYetValidError):
        NotBeforeClaim(now + timedelta(seconds=1)).verify(now)


def test_issued_at_is_informational(now):
    IssuedAtClaim(now + timedelta(days=365)).verify(now)


def test_numeric_date_serializes_as_seconds(now):
    claim = ExpirationClaim(now)
    assert claim.model_dump() == 1704110400
    assert claim.model_dump_json() == "1704110400"


def test_numeric_date_decodes_seconds_regardless_of_magnitude():
    claim = ExpirationClaim.model_validate_json("20000000000")
    assert claim.value == datetime.fromtimestamp(20000000000, tz=timezone.utc)
    assert claim.model_dump() == 20000000000


def test_numeric_date_rejects_strings_and_booleans():
    with pytest.raises(ValidationError):
        ExpirationClaim.model_validate_json('"2024-01-01T00:00:00Z"')
    with pytest.raises(ValidationError):
        ExpirationClaim.model_validate_json("true")


@pytest.mark.parametrize("raw", ["1e20", "1e300", "-1e20", "1000000000000000000000000000000"])
def test_numeric_date_out_of_range_is_a_validation_error(raw):
    with pytest.raises(ValidationError, match="NumericDate out of range"):
        ExpirationClaim.model_validate_json(raw)


def test_numeric_date_normalizes_naive_and_fractional_values():
    claim = ExpirationClaim(datetime(2024, 1, 1, 12, 0, 0, 500000))
    assert claim.value == datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

    fractional = ExpirationClaim.model_validate_json("1704110400.75")
    assert fractional.value == datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def test_audience_single_and_multiple():
    single = AudienceClaim("api")
    assert single.value == ("api",)
    assert single.model_dump() == "api"

    multiple = AudienceClaim(["api", "web"])
    assert multiple.value == ("api", "web")
    assert multiple.model_dump() == ["api", "web"]
    assert AudienceClaim.model_validate_json('["api", "web"]') == multiple


def test_audience_verify():
    claim = AudienceClaim(["api", "web"])
    claim.verify("web")
    with pytest.raises(InvalidAudienceError):
        claim.verify("admin")


def test_audience_must_not_be_empty():
    with pytest.raises(ValidationError):
        AudienceClaim([])


def test_issuer_and_subject_verify():
    IssuerClaim("https://issuer.example").verify("https://issuer.example")
    with pytest.raises(InvalidIssuerError):
        IssuerClaim("https://issuer.example").verify("https://other.example")

    SubjectClaim("user-1").verify("user-1")
    with pytest.raises(InvalidSubjectError):
        SubjectClaim("user-1").verify("user-2")


def test_claims_are_immutable(now):
    claim = ExpirationClaim(now)
    with pytest.raises(ValidationError):
        claim.root = now + timedelta(days=1)


@pytest.fixture
def context(now):
    return VerificationContext(signer=JWTSigner.hs256(b"secret"), now=now)


def test_registered_claims_verify_time_window(context, now):
    RegisteredClaims(exp=now + timedelta(minutes=1), nbf=now).verify(context)

    with pytest.raises(TokenExpiredError):
        RegisteredClaims(exp=now).verify(context)
    with pytest.raises(TokenNotYetValidError):
        RegisteredClaims(nbf=now + timedelta(minutes=1)).verify(context)


def test_registered_claims_without_time_claims_pass(context):
    RegisteredClaims(sub="user-1").verify(context)


def test_registered_claims_expected_audience_and_issuer(now):
    signer = JWTSigner.hs256(b"secret")
    claims = RegisteredClaims(aud="api", iss="issuer")

    claims.verify(VerificationContext(signer=signer, now=now, audience="api", issuer="issuer"))
    with pytest.raises(InvalidAudienceError):
        claims.verify(VerificationContext(signer=signer, now=now, audience="web"))
    with pytest.raises(InvalidAudienceError):
        RegisteredClaims().verify(VerificationContext(signer=signer, now=now, audience="api"))
    with pytest.raises(InvalidIssuerError):
        RegisteredClaims().verify(VerificationContext(signer=signer, now=now, issuer="issuer"))


def test_registered_claims_keep_extra_members(now):
    claims = RegisteredClaims(sub="user-1", exp=now, role="admin")
    data = claims.model_dump(exclude_none=True)
    assert data == {"sub": "user-1", "exp": 1704110400, "role": "admin"}


def test_every_claim_satisfies_the_claim_protocol(now):
    claims = [
        ExpirationClaim(now),
        NotBeforeClaim(now),
        IssuedAtClaim(now),
        AudienceClaim("api"),
        IssuerClaim("auth"),
        SubjectClaim("user-1"),
        IDClaim("token-1"),
    ]
    for claim in claims:
        assert isinstance(claim, JWTClaim)


def test_id_claim_is_informational():
    claim = IDClaim("token-1")
    assert claim.value == "token-1"
    assert claim.verify() is None
    assert claim.verify("other") is None
