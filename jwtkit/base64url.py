"""Unpadded URL-safe base64 used for every token segment."""

from __future__ import annotations

import base64
import binascii
import re
from typing import Union

from .errors import Base64URLDecodeError

_ALPHABET = re.compile(rb"[A-Za-z0-9_-]*")


def encode(data: bytes) -> str:
    """Encode ``data`` without trailing ``=`` padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def decode(data: Union[str, bytes]) -> bytes:
    """Decode an unpadded base64url string.

    Raises:
        Base64URLDecodeError: On characters outside the URL-safe alphabet,
            lengths no padding can fix, or non-canonical trailing bits.
    """
    if isinstance(data, str):
        try:
            raw = data.encode("ascii")
        except UnicodeEncodeError as exc:
            raise Base64URLDecodeError("Input is not ASCII") from exc
    else:
        raw = bytes(data)

    if not _ALPHABET.fullmatch(raw):
        raise Base64URLDecodeError("Input contains characters outside the base64url alphabet")
    if len(raw) % 4 == 1:
        raise Base64URLDecodeError("Input length is not valid for base64url")

    padded = raw + b"=" * ((4 - len(raw) % 4) % 4)
    try:
        decoded = base64.urlsafe_b64decode(padded)
    except (binascii.Error, ValueError) as exc:
        raise Base64URLDecodeError(f"Invalid base64url input: {exc}") from exc

    # Unused trailing bits must be zero so each byte string has one encoding.
    if encode(decoded).encode("ascii") != raw:
        raise Base64URLDecodeError("Input is not canonically encoded")
    return decoded
