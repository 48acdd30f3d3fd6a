"""
Credential Signing
==================

Deterministic, secret-keyed digests of credential usernames.

The password half of a credential pair is ``base64(HMAC(secret, username))``.
Two renderings of the base64 text are supported:

- ``legacy``: padded base64 broken into 60-character lines, each ending in a
  newline. This is what deployed verifiers expect, so a SHA1 password is 28
  characters plus a trailing ``"\\n"``.
- ``strict``: padded base64 on a single line with no newline.

HMAC-SHA1 with the legacy rendering is the default wire format. Choosing a
different algorithm or rendering breaks interoperability with existing
deployments and must be configured explicitly.
"""

import base64
import hashlib
import hmac
import logging
from typing import Union

from .config import LEGACY_ALGORITHM, LEGACY_ENCODING, PASSWORD_ENCODINGS, SUPPORTED_ALGORITHMS
from .error_handling import ConfigurationError, require_secret

logger = logging.getLogger(__name__)

LEGACY_LINE_LENGTH = 60

Secret = Union[str, bytes]


def encode_base64(raw: bytes, encoding: str = LEGACY_ENCODING) -> str:
    """
    Render raw digest bytes as base64 text.

    Args:
        raw: Bytes to encode
        encoding: ``"legacy"`` (line wrapped, trailing newline) or ``"strict"``

    Returns:
        Base64 text
    """
    text = base64.b64encode(raw).decode("ascii")
    if encoding == "strict":
        return text
    if encoding != "legacy":
        raise ConfigurationError(
            f"Invalid password_encoding: {encoding}",
            {"supported": ", ".join(PASSWORD_ENCODINGS)},
        )
    return "".join(
        text[i:i + LEGACY_LINE_LENGTH] + "\n"
        for i in range(0, len(text), LEGACY_LINE_LENGTH)
    )


def digest(secret: Secret, message: str, algorithm: str = LEGACY_ALGORITHM) -> bytes:
    """
    Compute the raw HMAC digest of a message.

    Args:
        secret: Shared secret used as the HMAC key
        message: Message to authenticate (UTF-8 encoded before hashing)
        algorithm: Hash function name, one of sha1, sha256, sha512

    Returns:
        Raw digest bytes (20 bytes for sha1)
    """
    if algorithm not in SUPPORTED_ALGORITHMS:
        raise ConfigurationError(
            f"Invalid algorithm: {algorithm}",
            {"supported": ", ".join(SUPPORTED_ALGORITHMS)},
        )
    key = require_secret(secret, "sign")
    return hmac.new(key, message.encode("utf-8"), getattr(hashlib, algorithm)).digest()


def sign(
    secret: Secret,
    message: str,
    algorithm: str = LEGACY_ALGORITHM,
    encoding: str = LEGACY_ENCODING,
) -> str:
    """
    Sign a message with the shared secret.

    Args:
        secret: Shared secret used as the HMAC key
        message: Message to sign, normally a credential username
        algorithm: Hash function name
        encoding: Base64 rendering of the digest

    Returns:
        Base64 encoded HMAC of the message
    """
    return encode_base64(digest(secret, message, algorithm), encoding)


def constant_time_equals(expected: str, presented: str) -> bool:
    """
    Compare two signatures without leaking where they first differ.

    Non-string input, or text that cannot be UTF-8 encoded, never matches.
    """
    if not isinstance(expected, str) or not isinstance(presented, str):
        return False
    try:
        expected_bytes = expected.encode("utf-8")
        presented_bytes = presented.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return hmac.compare_digest(expected_bytes, presented_bytes)
