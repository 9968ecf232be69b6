"""Payload contract and the registered claim set."""

from __future__ import annotations

import abc
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel, ConfigDict, Field

from .claims import (
    AudienceClaim,
    ExpirationClaim,
    IDClaim,
    IssuedAtClaim,
    IssuerClaim,
    NotBeforeClaim,
    SubjectClaim,
    current_time,
)
from .errors import InvalidAudienceError, InvalidIssuerError

if TYPE_CHECKING:
    from .signer import JWTSigner


@dataclass(frozen=True)
class VerificationContext:
    """State handed to a payload once its signature has been verified."""

    signer: "JWTSigner"
    now: datetime = field(default_factory=current_time)
    audience: Optional[str] = None
    issuer: Optional[str] = None


class JWTPayload(BaseModel):
    """Base class for application payloads.

    Subclasses declare their claims as pydantic fields and implement
    :meth:`verify`. It is only called after the token's signature checked out.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @abc.abstractmethod
    def verify(self, context: VerificationContext) -> None:
        """Raise a :class:`~jwtkit.errors.ClaimError` if a claim fails."""
        raise NotImplementedError

    def to_json(self) -> bytes:
        return self.model_dump_json(by_alias=True, exclude_none=True).encode("utf-8")


class RegisteredClaims(JWTPayload):
    """The RFC 7519 registered claims, all optional.

    Unregistered members are kept, so this works as a general purpose
    payload.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    iss: Optional[IssuerClaim] = Field(default=None, description="Issuer")
    sub: Optional[SubjectClaim] = Field(default=None, description="Subject")
    aud: Optional[AudienceClaim] = Field(default=None, description="Audience")
    exp: Optional[ExpirationClaim] = Field(default=None, description="Expiration time")
    nbf: Optional[NotBeforeClaim] = Field(default=None, description="Not before")
    iat: Optional[IssuedAtClaim] = Field(default=None, description="Issued at")
    jti: Optional[IDClaim] = Field(default=None, description="JWT ID")

    def verify(self, context: VerificationContext) -> None:
        if self.exp is not None:
            self.exp.verify(context.now)
        if self.nbf is not None:
            self.nbf.verify(context.now)
        if context.audience is not None:
            if self.aud is None:
                raise InvalidAudienceError("Token has no audience")
            self.aud.verify(context.audience)
        if context.issuer is not None:
            if self.iss is None:
                raise InvalidIssuerError("Token has no issuer")
            self.iss.verify(context.issuer)
