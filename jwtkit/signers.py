"""Registry of signers keyed by ``kid``."""

from __future__ import annotations

import logging
import threading
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Dict, Iterator, Mapping, Optional, Tuple, Union

from .errors import InvalidKeyError, MissingKeyIDError, MissingSignerError, UnsecuredTokenError
from .signer import JWTSigner

if TYPE_CHECKING:
    from .jwks import JWKSet

logger = logging.getLogger(__name__)


class JWTSigners:
    """Maps key identifiers to signers, with an optional default.

    Lookups read an immutable snapshot without locking. Writers serialize on a
    lock and publish a new snapshot, so a lookup sees a registration either
    completely or not at all.
    """

    def __init__(self, allow_unsigned: bool = False) -> None:
        self.allow_unsigned = allow_unsigned
        self._lock = threading.Lock()
        self._snapshot: Tuple[Mapping[str, JWTSigner], Optional[JWTSigner]] = (
            MappingProxyType({}),
            None,
        )

    def _check_unsigned(self, signer: JWTSigner) -> None:
        if signer.is_unsigned and not self.allow_unsigned:
            raise UnsecuredTokenError(
                "Unsigned signers can only be registered with allow_unsigned=True"
            )

    def register(self, kid: str, signer: JWTSigner) -> None:
        """Register ``signer`` under ``kid``, replacing any previous signer."""
        if not kid:
            raise InvalidKeyError("kid must be a non-empty string")
        self._check_unsigned(signer)
        with self._lock:
            signers, default = self._snapshot
            updated: Dict[str, JWTSigner] = dict(signers)
            replaced = kid in updated
            updated[kid] = signer
            self._snapshot = (MappingProxyType(updated), default)
        if replaced:
            logger.info(f"Rotated signer for kid={kid} ({signer.name})")
        else:
            logger.info(f"Registered signer for kid={kid} ({signer.name})")

    def unregister(self, kid: str) -> None:
        """Remove the signer for ``kid``."""
        with self._lock:
            signers, default = self._snapshot
            if kid not in signers:
                raise MissingSignerError(f"No signer registered for kid {kid!r}")
            updated = {k: v for k, v in signers.items() if k != kid}
            self._snapshot = (MappingProxyType(updated), default)
        logger.info(f"Unregistered signer for kid={kid}")

    def set_default(self, signer: Optional[JWTSigner]) -> None:
        """Use ``signer`` for tokens without a ``kid``. ``None`` clears it."""
        if signer is not None:
            self._check_unsigned(signer)
        with self._lock:
            signers, _ = self._snapshot
            self._snapshot = (signers, signer)
        logger.info(f"Default signer set to {signer!r}")

    @property
    def default(self) -> Optional[JWTSigner]:
        return self._snapshot[1]

    @property
    def kids(self) -> Tuple[str, ...]:
        return tuple(self._snapshot[0])

    def get(self, kid: str) -> Optional[JWTSigner]:
        return self._snapshot[0].get(kid)

    def require_signer(self, kid: Optional[str] = None) -> JWTSigner:
        """Return the signer for ``kid``, or the default when ``kid`` is absent.

        Raises:
            MissingSignerError: ``kid`` is not registered.
            MissingKeyIDError: no ``kid`` was given and there is no default.
        """
        signers, default = self._snapshot
        if kid is not None:
            signer = signers.get(kid)
            if signer is None:
                raise MissingSignerError(f"No signer registered for kid {kid!r}")
            return signer
        if default is None:
            raise MissingKeyIDError("`kid` header property required to identify signer")
        return default

    def __contains__(self, kid: object) -> bool:
        return kid in self._snapshot[0]

    def __len__(self) -> int:
        return len(self._snapshot[0])

    def __iter__(self) -> Iterator[str]:
        return iter(self.kids)

    @classmethod
    def from_jwks(
        cls, document: Union["JWKSet", Mapping[str, Any], str, bytes], allow_unsigned: bool = False
    ) -> "JWTSigners":
        """Build a registry from a JWK Set document."""
        from .jwks import JWKSet, signer_from_jwk

        if isinstance(document, (str, bytes)):
            jwks = JWKSet.model_validate_json(document)
        elif isinstance(document, JWKSet):
            jwks = document
        else:
            jwks = JWKSet.model_validate(document)

        signers = cls(allow_unsigned=allow_unsigned)
        for jwk in jwks.keys:
            signer = signer_from_jwk(jwk)
            signers.register(signer.kid, signer)
        return signers
