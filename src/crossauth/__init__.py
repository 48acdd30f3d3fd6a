"""
crossauth - HMAC based cross-application credentials.

Two applications sharing a secret can authenticate to each other without a
central authority or a network round-trip. The issuer hands out a
``(username, password)`` pair; the username carries an expiry and an optional
identity, the password is an HMAC of the username keyed with the shared
secret. Any holder of the secret can verify the pair offline until it expires.

Key Features:
- Wire compatible with existing deployments (HMAC-SHA1, legacy base64)
- Opt-in stronger wire format (HMAC-SHA256, single-line base64)
- Tagged verification results: Rejected, AcceptedAnonymous, AcceptedWithIdentity
- Constant-time signature comparison
- Stateless and thread-safe

Quick Start:
    >>> from crossauth import create_secret, issue, verify
    >>>
    >>> secret = create_secret()
    >>> credentials = issue("billing-service", secret=secret, ttl=3600)
    >>>
    >>> result = verify(credentials, secret=secret)
    >>> if result:
    ...     print(result.identity)
    billing-service
"""

from .codec import decode_username, encode_username
from .config import AuthConfig, load_config_from_dict, load_config_from_json, save_config_to_json
from .credentials import (
    AcceptedAnonymous,
    AcceptedWithIdentity,
    CredentialAuthority,
    CredentialPair,
    Rejected,
    VerificationResult,
    issue,
    verify,
)
from .error_handling import ConfigurationError, CredentialError, CredentialFormatError
from .keygen import create_secret
from .signing import constant_time_equals, sign

__version__ = "0.1.0"

__all__ = [
    # Issue / verify
    "issue",
    "verify",
    "CredentialAuthority",
    "CredentialPair",
    # Results
    "VerificationResult",
    "Rejected",
    "AcceptedAnonymous",
    "AcceptedWithIdentity",
    # Primitives
    "sign",
    "constant_time_equals",
    "encode_username",
    "decode_username",
    "create_secret",
    # Configuration
    "AuthConfig",
    "load_config_from_dict",
    "load_config_from_json",
    "save_config_to_json",
    # Errors
    "CredentialError",
    "ConfigurationError",
    "CredentialFormatError",
    # Version info
    "__version__",
]
