"""Self-verifying claim values.

Each claim wraps a single value and serializes to the bare JSON value RFC 7519
expects. Point-in-time claims use :data:`NumericDate`: whole seconds since the
Unix epoch, never milliseconds.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated, Any, Optional, Protocol, Tuple, Union, runtime_checkable

from pydantic import AfterValidator, BeforeValidator, ConfigDict, PlainSerializer, RootModel

from .errors import (
    InvalidAudienceError,
    InvalidIssuerError,
    InvalidSubjectError,
    TokenExpiredError,
    TokenNotYetValidError,
)


def _parse_numeric_date(value: Any) -> Any:
    if isinstance(value, datetime):
        return value
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("NumericDate must be a number of seconds since the epoch")
    try:
        return datetime.fromtimestamp(value, tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as exc:
        raise ValueError("NumericDate out of range") from exc


def _normalize_numeric_date(value: datetime) -> datetime:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.replace(microsecond=0)


def _serialize_numeric_date(value: datetime) -> int:
    return int(value.timestamp())


NumericDate = Annotated[
    datetime,
    BeforeValidator(_parse_numeric_date),
    AfterValidator(_normalize_numeric_date),
    PlainSerializer(_serialize_numeric_date, return_type=int),
]


def _parse_audience(value: Any) -> Any:
    if isinstance(value, str):
        return (value,)
    return value


def _check_audience(value: Tuple[str, ...]) -> Tuple[str, ...]:
    if not value:
        raise ValueError("aud must name at least one audience")
    return value


def _serialize_audience(value: Tuple[str, ...]) -> Union[str, list]:
    if len(value) == 1:
        return value[0]
    return list(value)


Audience = Annotated[
    Tuple[str, ...],
    BeforeValidator(_parse_audience),
    AfterValidator(_check_audience),
    PlainSerializer(_serialize_audience),
]


def current_time(now: Optional[datetime] = None) -> datetime:
    """Return ``now`` as an aware datetime, defaulting to the current UTC time."""
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now


@runtime_checkable
class JWTClaim(Protocol):
    """A claim exposes its wrapped value and knows how to verify it.

    Time claims take the verification instant, identity claims take the
    expected value. Informational claims accept either and never fail.
    """

    @property
    def value(self) -> Any: ...

    def verify(self, *args: Any, **kwargs: Any) -> None: ...


class ExpirationClaim(RootModel[NumericDate]):
    """``exp``: the token is rejected at or after this instant."""

    model_config = ConfigDict(frozen=True)

    @property
    def value(self) -> datetime:
        return self.root

    def verify(self, now: Optional[datetime] = None) -> None:
        if self.root <= current_time(now):
            raise TokenExpiredError(f"Token expired at {self.root.isoformat()}")


class NotBeforeClaim(RootModel[NumericDate]):
    """``nbf``: the token is rejected before this instant."""

    model_config = ConfigDict(frozen=True)

    @property
    def value(self) -> datetime:
        return self.root

    def verify(self, now: Optional[datetime] = None) -> None:
        if self.root > current_time(now):
            raise TokenNotYetValidError(f"Token not valid before {self.root.isoformat()}")


class IssuedAtClaim(RootModel[NumericDate]):
    """``iat``: informational, available to custom policies."""

    model_config = ConfigDict(frozen=True)

    @property
    def value(self) -> datetime:
        return self.root

    def verify(self, now: Optional[datetime] = None) -> None:
        return None


class AudienceClaim(RootModel[Audience]):
    """``aud``: one or more intended recipients."""

    model_config = ConfigDict(frozen=True)

    @property
    def value(self) -> Tuple[str, ...]:
        return self.root

    def verify(self, expected: str) -> None:
        if expected not in self.root:
            raise InvalidAudienceError(f"Token is not intended for audience {expected!r}")


class IssuerClaim(RootModel[str]):
    """``iss``"""

    model_config = ConfigDict(frozen=True)

    @property
    def value(self) -> str:
        return self.root

    def verify(self, expected: str) -> None:
        if self.root != expected:
            raise InvalidIssuerError(f"Token was not issued by {expected!r}")


class SubjectClaim(RootModel[str]):
    """``sub``"""

    model_config = ConfigDict(frozen=True)

    @property
    def value(self) -> str:
        return self.root

    def verify(self, expected: str) -> None:
        if self.root != expected:
            raise InvalidSubjectError(f"Token subject is not {expected!r}")


class IDClaim(RootModel[str]):
    """``jti``: informational, replay tracking is left to the caller."""

    model_config = ConfigDict(frozen=True)

    @property
    def value(self) -> str:
        return self.root

    def verify(self, expected: Optional[str] = None) -> None:
        return None
