"""
Configuration Management for crossauth
======================================

A single focused configuration object controls the credential wire format:
how long issued credentials live by default, which hash backs the HMAC, and
how the password digest is rendered.

The defaults reproduce the legacy scheme byte-for-byte (HMAC-SHA1, line
wrapped base64 with a trailing newline). Anything else is a deliberate,
logged break in wire compatibility.
"""

import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Union

from .error_handling import ConfigurationError, with_error_handling
from .json_utils import dumps as json_dumps, loads as json_loads

logger = logging.getLogger(__name__)

DAY_IN_SECONDS = 86_400

SUPPORTED_ALGORITHMS = ("sha1", "sha256", "sha512")
PASSWORD_ENCODINGS = ("legacy", "strict")

LEGACY_ALGORITHM = "sha1"
LEGACY_ENCODING = "legacy"


@dataclass(frozen=True)
class AuthConfig:
    """Configuration for credential issuance and verification."""

    default_ttl_seconds: int = DAY_IN_SECONDS
    algorithm: str = LEGACY_ALGORITHM
    password_encoding: str = LEGACY_ENCODING

    def __post_init__(self):
        """Validate credential configuration."""
        validate_ttl(self.default_ttl_seconds)

        if self.algorithm not in SUPPORTED_ALGORITHMS:
            raise ConfigurationError(
                f"Invalid algorithm: {self.algorithm}",
                {"supported": ", ".join(SUPPORTED_ALGORITHMS)},
            )

        if self.password_encoding not in PASSWORD_ENCODINGS:
            raise ConfigurationError(
                f"Invalid password_encoding: {self.password_encoding}",
                {"supported": ", ".join(PASSWORD_ENCODINGS)},
            )

        if not self.is_legacy_compatible:
            logger.warning(
                f"Credential wire format changed (algorithm={self.algorithm}, "
                f"encoding={self.password_encoding}); legacy verifiers will reject these credentials"
            )

        logger.debug(
            f"Auth configured: ttl={self.default_ttl_seconds}s, "
            f"algorithm={self.algorithm}, encoding={self.password_encoding}"
        )

    @property
    def is_legacy_compatible(self) -> bool:
        return (
            self.algorithm == LEGACY_ALGORITHM
            and self.password_encoding == LEGACY_ENCODING
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def create_legacy_compatible(cls) -> "AuthConfig":
        """Create a configuration interoperable with already deployed verifiers."""
        return cls()

    @classmethod
    def create_strict(cls) -> "AuthConfig":
        """Create a configuration for fresh deployments (HMAC-SHA256, single-line base64)."""
        return cls(algorithm="sha256", password_encoding="strict")


def validate_ttl(ttl: Any) -> int:
    """
    Check that a TTL is an integer number of seconds.

    Negative values are allowed and produce credentials that are already expired.

    Raises:
        ConfigurationError: If ttl is not an int
    """
    # bool is an int subclass but never a meaningful duration
    if isinstance(ttl, bool) or not isinstance(ttl, int):
        raise ConfigurationError(
            f"ttl must be an integer number of seconds, got {type(ttl).__name__}",
            {"ttl": repr(ttl)},
        )
    return ttl


def load_config_from_dict(data: Dict[str, Any]) -> AuthConfig:
    """
    Build an AuthConfig from a plain dictionary.

    Unknown keys are ignored with a warning.
    """
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Configuration must be a mapping, got {type(data).__name__}"
        )

    known = {f.name for f in fields(AuthConfig)}
    for key in data:
        if key not in known:
            logger.warning(f"Unknown configuration parameter ignored: {key}")

    return AuthConfig(**{k: v for k, v in data.items() if k in known})


@with_error_handling(ConfigurationError)
def load_config_from_json(path: Union[str, Path]) -> AuthConfig:
    """
    Load an AuthConfig from a JSON file.

    Raises:
        ConfigurationError: If the file cannot be read, parsed or validated
    """
    raw = Path(path).read_bytes()
    config = load_config_from_dict(json_loads(raw))
    logger.debug(f"Loaded auth configuration from {path}")
    return config


@with_error_handling(ConfigurationError)
def save_config_to_json(config: AuthConfig, path: Union[str, Path]) -> Path:
    """Write an AuthConfig to a JSON file, creating parent directories."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json_dumps(config.to_dict(), sort_keys=True, indent=True), encoding="utf-8")
    logger.debug(f"Saved auth configuration to {target}")
    return target
