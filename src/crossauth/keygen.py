"""Shared secret generation."""

import hashlib
import logging
import secrets

from .signing import encode_base64

logger = logging.getLogger(__name__)

ENTROPY_BYTES = 512


def create_secret() -> str:
    """
    Create a new random shared secret.

    512 bytes from the OS entropy source are reduced with SHA-512 and rendered
    as legacy base64 (88 characters over two lines, trailing newline), the
    same shape secrets have always had in this scheme.
    """
    secret = encode_base64(hashlib.sha512(secrets.token_bytes(ENTROPY_BYTES)).digest())
    logger.debug("Generated new shared secret")
    return secret
