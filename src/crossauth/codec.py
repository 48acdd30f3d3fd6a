"""
Username encoding.

A credential username is ``"<expiry>:<identity>"``, where expiry is a decimal
unix timestamp and identity may be empty. The username is the signed message,
not a secret.
"""

import logging
import re
from typing import Optional, Tuple

from .error_handling import CredentialFormatError

logger = logging.getLogger(__name__)

DELIMITER = ":"

# Expiry that can never be in the future; used for anything undecodable
INVALID_EXPIRY = 0

# 19 digits covers every 64-bit timestamp and keeps int() inside its digit limit
_EXPIRY_PATTERN = re.compile(r"-?[0-9]{1,19}")


def encode_username(expiry: int, identity: Optional[str] = None) -> str:
    """
    Pack an expiry timestamp and an optional identity into a username.

    The delimiter is always present, so an anonymous credential renders as
    ``"<expiry>:"``.

    Raises:
        CredentialFormatError: If identity is not a string or contains the delimiter
    """
    if identity is None:
        identity = ""
    if not isinstance(identity, str):
        raise CredentialFormatError(
            f"Identity must be a string, got {type(identity).__name__}"
        )
    if DELIMITER in identity:
        raise CredentialFormatError(
            f"Identity must not contain '{DELIMITER}'",
            {"identity": identity},
        )
    return f"{int(expiry)}{DELIMITER}{identity}"


def decode_username(username: str) -> Tuple[int, Optional[str]]:
    """
    Unpack a username into ``(expiry, identity)``.

    Splits on the first delimiter. A missing delimiter or a prefix that is not
    a decimal integer decodes to an expiry of 0, which every verifier treats as
    expired. An empty identity decodes to None. Never raises for str input.
    """
    prefix, delimiter, identity = username.partition(DELIMITER)
    if not delimiter or not _EXPIRY_PATTERN.fullmatch(prefix):
        logger.debug("Username has no usable expiry segment")
        return INVALID_EXPIRY, identity or None
    return int(prefix), identity or None


def is_utf8_encodable(text: str) -> bool:
    """False for strings carrying lone surrogates (e.g. from surrogateescape decoding)."""
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True
