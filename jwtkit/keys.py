"""Key loading helpers for asymmetric signers."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Union

from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization

from .errors import InvalidKeyError


def load_pem_key(data: Union[str, bytes], password: Optional[Union[str, bytes]] = None) -> Any:
    """Load a PEM private key, public key or certificate's public key."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    if isinstance(password, str):
        password = password.encode("utf-8")

    try:
        if b"-----BEGIN CERTIFICATE-----" in data:
            return x509.load_pem_x509_certificate(data).public_key()
        if b"PRIVATE KEY-----" in data:
            return serialization.load_pem_private_key(data, password=password)
        return serialization.load_pem_public_key(data)
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise InvalidKeyError(f"Could not load PEM key: {exc}") from exc


def load_key_file(path: Union[str, Path], password: Optional[Union[str, bytes]] = None) -> Any:
    """Read ``path`` and load the PEM key it holds."""
    return load_pem_key(Path(path).expanduser().read_bytes(), password=password)
