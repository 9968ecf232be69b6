"""Token envelope: encoding, signing and staged verification."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Generic, List, Optional, Type, TypeVar, Union

from pydantic import ValidationError

from . import base64url
from .claims import current_time
from .errors import (
    Base64URLDecodeError,
    InvalidHeaderEncodingError,
    InvalidPayloadEncodingError,
    InvalidSignatureError,
    MalformedTokenError,
    UnsecuredTokenError,
)
from .header import JWTHeader
from .payload import JWTPayload, VerificationContext
from .signer import JWTSigner
from .signers import JWTSigners

logger = logging.getLogger(__name__)

PayloadT = TypeVar("PayloadT", bound=JWTPayload)

Token = Union[str, bytes]


def _split(token: Token) -> List[bytes]:
    if isinstance(token, str):
        try:
            token = token.encode("ascii")
        except UnicodeEncodeError as exc:
            raise MalformedTokenError("Malformed JWT") from exc
    parts = bytes(token).split(b".")
    if len(parts) != 3:
        raise MalformedTokenError("Malformed JWT")
    return parts


def _decode_header(segment: bytes) -> JWTHeader:
    try:
        return JWTHeader.from_json(base64url.decode(segment))
    except Base64URLDecodeError as exc:
        raise InvalidHeaderEncodingError("JWT header is not valid base64-url") from exc
    except ValidationError as exc:
        raise InvalidHeaderEncodingError(f"JWT header is not a valid JOSE header: {exc}") from exc


def _decode_payload(segment: bytes, payload_type: Type[PayloadT]) -> PayloadT:
    try:
        return payload_type.model_validate_json(base64url.decode(segment))
    except Base64URLDecodeError as exc:
        raise InvalidPayloadEncodingError("JWT payload is not valid base64-url") from exc
    except ValidationError as exc:
        raise InvalidPayloadEncodingError(
            f"JWT payload does not match {payload_type.__name__}: {exc}"
        ) from exc


def _reject_unsecured_header(header: JWTHeader, allow_unsigned: bool) -> None:
    if header.alg == "none" and not allow_unsigned:
        raise UnsecuredTokenError("Unsigned tokens are not accepted")


def _reject_unsigned_signer(signer: JWTSigner, allow_unsigned: bool) -> None:
    if signer.is_unsigned and not allow_unsigned:
        raise UnsecuredTokenError("Unsigned tokens are not accepted")


def _verify_signature(signer: JWTSigner, header: JWTHeader, parts: List[bytes]) -> None:
    header_segment, payload_segment, signature_segment = parts
    if header.alg != signer.name:
        logger.debug(f"Token alg {header.alg!r} does not match signer {signer.name!r}")
        raise InvalidSignatureError()
    try:
        signature = base64url.decode(signature_segment)
    except Base64URLDecodeError:
        logger.debug("Token signature segment is not valid base64-url")
        raise InvalidSignatureError() from None
    if not signer.verify(signature, header_segment, payload_segment):
        logger.debug(f"Signature check failed for {signer!r}")
        raise InvalidSignatureError()


@dataclass(frozen=True)
class UnverifiedJWT(Generic[PayloadT]):
    """A decoded token whose signature and claims were NOT checked.

    Use it for introspection only, e.g. reading ``kid`` before the key is
    known. Nothing here is authenticated.
    """

    header: JWTHeader
    payload: PayloadT
    signature: bytes


class JWT(Generic[PayloadT]):
    """A JSON Web Token with a typed payload.

    Build one around a payload and sign it::

        token = JWT(payload).sign(JWTSigner.hs256(secret))

    Parse one with :meth:`verify` or :meth:`verify_using`; both return a
    ``JWT`` only when the signature and every claim check out.
    """

    def __init__(self, payload: PayloadT) -> None:
        self._payload = payload
        self._header: Optional[JWTHeader] = None

    @property
    def payload(self) -> PayloadT:
        return self._payload

    @property
    def header(self) -> Optional[JWTHeader]:
        """The verified header. ``None`` until the token has been parsed."""
        return self._header

    def __repr__(self) -> str:
        return f"JWT(header={self._header!r}, payload={self._payload!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JWT):
            return NotImplemented
        return self._header == other._header and self._payload == other._payload

    __hash__ = None  # type: ignore[assignment]

    def sign(self, signer: JWTSigner, kid: Optional[str] = None, typ: Optional[str] = "JWT") -> str:
        """Serialize and sign the token.

        The header is always built here from ``signer``'s algorithm, so
        ``alg`` cannot disagree with the key that produced the signature.
        ``kid`` defaults to the signer's own key id.
        """
        header = JWTHeader(alg=signer.name, kid=kid if kid is not None else signer.kid, typ=typ)
        header_segment = base64url.encode(header.to_json()).encode("ascii")
        payload_segment = base64url.encode(self._payload.to_json()).encode("ascii")
        signature = signer.sign(header_segment, payload_segment)
        return b".".join(
            [header_segment, payload_segment, base64url.encode(signature).encode("ascii")]
        ).decode("ascii")

    def sign_using(
        self, signers: JWTSigners, kid: Optional[str] = None, typ: Optional[str] = "JWT"
    ) -> str:
        """Sign with the registry's signer for ``kid`` (or its default)."""
        signer = signers.require_signer(kid)
        return self.sign(signer, kid=kid, typ=typ)

    @classmethod
    def _verified(
        cls,
        parts: List[bytes],
        header: JWTHeader,
        signer: JWTSigner,
        payload_type: Type[PayloadT],
        now: Optional[datetime],
        audience: Optional[str],
        issuer: Optional[str],
    ) -> "JWT[PayloadT]":
        _verify_signature(signer, header, parts)
        payload = _decode_payload(parts[1], payload_type)
        context = VerificationContext(
            signer=signer, now=current_time(now), audience=audience, issuer=issuer
        )
        payload.verify(context)

        token = cls(payload)
        token._header = header
        return token

    @classmethod
    def verify(
        cls,
        token: Token,
        payload_type: Type[PayloadT],
        signer: JWTSigner,
        *,
        now: Optional[datetime] = None,
        audience: Optional[str] = None,
        issuer: Optional[str] = None,
        allow_unsigned: bool = False,
    ) -> "JWT[PayloadT]":
        """Parse ``token`` and verify it with a single ``signer``.

        Stages run in order and the first failure aborts: split, header
        decode, signature check over the raw segments, payload decode, and
        finally ``payload.verify``.
        """
        parts = _split(token)
        header = _decode_header(parts[0])
        _reject_unsecured_header(header, allow_unsigned)
        _reject_unsigned_signer(signer, allow_unsigned)
        return cls._verified(parts, header, signer, payload_type, now, audience, issuer)

    @classmethod
    def verify_using(
        cls,
        token: Token,
        payload_type: Type[PayloadT],
        signers: JWTSigners,
        *,
        now: Optional[datetime] = None,
        audience: Optional[str] = None,
        issuer: Optional[str] = None,
        allow_unsigned: bool = False,
    ) -> "JWT[PayloadT]":
        """Parse ``token`` and verify it with the signer its ``kid`` names.

        Tokens without ``kid`` use the registry's default signer, and fail
        with :class:`~jwtkit.errors.MissingKeyIDError` when there is none.
        """
        allow_unsigned = allow_unsigned or signers.allow_unsigned
        parts = _split(token)
        header = _decode_header(parts[0])
        _reject_unsecured_header(header, allow_unsigned)
        signer = signers.require_signer(header.kid)
        _reject_unsigned_signer(signer, allow_unsigned)
        return cls._verified(parts, header, signer, payload_type, now, audience, issuer)

    @staticmethod
    def decode_unverified(token: Token, payload_type: Type[PayloadT]) -> UnverifiedJWT[PayloadT]:
        """Decode ``token`` WITHOUT checking its signature or claims."""
        parts = _split(token)
        header = _decode_header(parts[0])
        payload = _decode_payload(parts[1], payload_type)
        try:
            signature = base64url.decode(parts[2])
        except Base64URLDecodeError as exc:
            raise MalformedTokenError("JWT signature is not valid base64-url") from exc
        return UnverifiedJWT(header=header, payload=payload, signature=signature)

    @staticmethod
    def peek_header(token: Token) -> JWTHeader:
        """Decode only the unauthenticated header, e.g. to read ``kid``."""
        return _decode_header(_split(token)[0])
