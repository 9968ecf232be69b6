"""Base algorithm interface for token signatures."""

from __future__ import annotations

import abc
import enum

from cryptography.hazmat.primitives import hashes


class DigestAlgorithm(enum.Enum):
    """Hash width used by a signature algorithm."""

    SHA256 = 256
    SHA384 = 384
    SHA512 = 512

    @property
    def bits(self) -> int:
        return self.value

    def hash(self) -> hashes.HashAlgorithm:
        """Return a fresh ``cryptography`` hash instance for this width."""
        if self is DigestAlgorithm.SHA256:
            return hashes.SHA256()
        if self is DigestAlgorithm.SHA384:
            return hashes.SHA384()
        return hashes.SHA512()


class JWTAlgorithm(metaclass=abc.ABCMeta):
    """A signature scheme bound to its key material.

    Instances are created explicitly by the application. Verification never
    picks an algorithm from a token's header.
    """

    is_unsigned: bool = False

    @property
    @abc.abstractmethod
    def name(self) -> str:
        """JWS ``alg`` value, e.g. ``HS256``."""
        raise NotImplementedError

    @abc.abstractmethod
    def sign(self, message: bytes) -> bytes:
        """Return the signature over ``message``."""
        raise NotImplementedError

    @abc.abstractmethod
    def verify(self, message: bytes, signature: bytes) -> bool:
        """Return ``True`` if ``signature`` is valid for ``message``."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name})"
