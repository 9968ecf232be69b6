from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from .algorithms import ALGORITHM_NAMES, algorithm_for
from .errors import InvalidKeyError, MissingSignerError
from .keys import load_key_file
from .signer import JWTSigner
from .signers import JWTSigners

logger = logging.getLogger(__name__)

_TRUTHY = {"1", "true", "yes", "on"}


class SignerConfig(BaseModel):
    """One signing key."""

    kid: str
    algorithm: str = "HS256"
    secret: Optional[str] = None
    secret_env: Optional[str] = None
    key_file: Optional[str] = None
    password_env: Optional[str] = None

    @field_validator("kid")
    @classmethod
    def _ensure_kid(cls, v: str) -> str:
        if not v:
            raise ValueError("kid must be a non-empty string")
        return v

    @field_validator("algorithm")
    @classmethod
    def _ensure_algorithm(cls, v: str) -> str:
        if v not in ALGORITHM_NAMES:
            raise ValueError(f"Unsupported algorithm: {v}")
        return v


class JWTKitConfig(BaseModel):
    """Top-level configuration model."""

    signers: List[SignerConfig] = Field(default_factory=list)
    default_kid: Optional[str] = None
    allow_unsigned: bool = False
    jwks_file: Optional[str] = None


def load_config(path: Optional[str] = None) -> JWTKitConfig:
    """Load configuration from YAML file.

    Args:
        path: Optional path to config file. Falls back to JWTKIT_CONFIG env
            variable or 'jwtkit.yaml' in the current directory.
    """

    config_path = path or os.getenv("JWTKIT_CONFIG", "jwtkit.yaml")
    if os.path.exists(config_path):
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
        config = JWTKitConfig(**data)
    else:
        config = JWTKitConfig()

    env_allow_unsigned = os.getenv("JWTKIT_ALLOW_UNSIGNED")
    if env_allow_unsigned is not None:
        config.allow_unsigned = env_allow_unsigned.strip().lower() in _TRUTHY
    return config


def _secret(entry: SignerConfig) -> str:
    if entry.secret:
        return entry.secret
    if entry.secret_env:
        value = os.getenv(entry.secret_env)
        if value:
            return value
        raise InvalidKeyError(f"Environment variable {entry.secret_env} for kid {entry.kid} is not set")
    raise InvalidKeyError(f"Signer {entry.kid} needs a secret or secret_env")


def signer_from_config(entry: SignerConfig) -> JWTSigner:
    """Build the signer described by ``entry``."""
    if entry.algorithm == "none":
        return JWTSigner(algorithm_for("none"), kid=entry.kid)
    if entry.algorithm.startswith("HS"):
        key = _secret(entry)
    else:
        if not entry.key_file:
            raise InvalidKeyError(f"Signer {entry.kid} needs a key_file for {entry.algorithm}")
        password = os.getenv(entry.password_env) if entry.password_env else None
        key = load_key_file(entry.key_file, password=password)
    return JWTSigner(algorithm_for(entry.algorithm, key), kid=entry.kid)


def build_signers(config: Optional[JWTKitConfig] = None) -> JWTSigners:
    """Build the process-wide signer registry from configuration."""

    config = config or load_config()
    signers = JWTSigners(allow_unsigned=config.allow_unsigned)

    if config.jwks_file:
        document = Path(config.jwks_file).expanduser().read_text()
        from_jwks = JWTSigners.from_jwks(document, allow_unsigned=config.allow_unsigned)
        for kid in from_jwks:
            signers.register(kid, from_jwks.require_signer(kid))

    for entry in config.signers:
        signers.register(entry.kid, signer_from_config(entry))

    if config.default_kid:
        default = signers.get(config.default_kid)
        if default is None:
            raise MissingSignerError(f"default_kid {config.default_kid} is not a configured signer")
        signers.set_default(default)

    logger.info(f"Loaded {len(signers)} signer(s): {', '.join(signers.kids)}")
    return signers
