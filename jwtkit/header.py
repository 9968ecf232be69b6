"""JOSE header model."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict


class JWTHeader(BaseModel):
    """Identifies the algorithm and key that produced a token's signature.

    Headers are only built by the signing path, which stamps ``alg`` from the
    signer doing the work. Unknown members are dropped on decode.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    alg: str
    kid: Optional[str] = None
    typ: Optional[str] = None
    cty: Optional[str] = None

    def to_json(self) -> bytes:
        """Serialize compactly, omitting absent members."""
        return self.model_dump_json(exclude_none=True).encode("utf-8")

    @classmethod
    def from_json(cls, data: bytes) -> "JWTHeader":
        return cls.model_validate_json(data)
