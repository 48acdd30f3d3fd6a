"""
Credential Issuance and Verification
====================================

Issue and verify stateless ``(username, password)`` credential pairs signed
with a pre-shared secret.

Issuing:
    The username carries the expiry timestamp and an optional identity; the
    password is the HMAC of the username keyed with the shared secret.

Verifying:
    The verifier decodes the expiry, rejects expired credentials before
    looking at the signature, then recomputes the password and compares it in
    constant time. The result is one of three variants:

    - ``Rejected``: malformed, expired or wrongly signed (the reason is not
      exposed, only logged at DEBUG)
    - ``AcceptedAnonymous``: valid, no identity asserted
    - ``AcceptedWithIdentity(identity)``: valid, identity asserted

    Accepted results are truthy and ``Rejected`` is falsy, so
    ``if verify(...):`` reads naturally while the identity stays out of the
    boolean channel.

Usage:
    >>> from crossauth import issue, verify
    >>> pair = issue("svc-a", secret="topsecret", ttl=3600)
    >>> result = verify(pair, secret="topsecret")
    >>> result.identity
    'svc-a'
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Dict, Mapping, Optional, Union

from . import signing
from .codec import decode_username, encode_username, is_utf8_encodable
from .config import AuthConfig, validate_ttl
from .error_handling import ConfigurationError, require_secret
from .json_utils import JSONDecodeError, dumps as json_dumps, loads as json_loads

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


@dataclass(frozen=True)
class CredentialPair:
    """An issued credential: the signed username and its password."""

    username: str
    password: str

    def to_dict(self) -> Dict[str, str]:
        return {"username": self.username, "password": self.password}

    def to_json(self) -> str:
        return json_dumps(self.to_dict())

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CredentialPair":
        """
        Build a pair from a mapping with ``username`` and ``password`` keys.

        Raises:
            ConfigurationError: If a key is missing or not a string
        """
        try:
            username, password = data["username"], data["password"]
        except (KeyError, TypeError) as e:
            raise ConfigurationError(
                "Credentials must contain 'username' and 'password'"
            ) from e
        if not isinstance(username, str) or not isinstance(password, str):
            raise ConfigurationError("Credential username and password must be strings")
        return cls(username=username, password=password)

    @classmethod
    def from_json(cls, text: Union[str, bytes]) -> "CredentialPair":
        try:
            data = json_loads(text)
        except JSONDecodeError as e:
            raise ConfigurationError(f"Credentials are not valid JSON: {e}") from e
        return cls.from_dict(data)


@dataclass(frozen=True)
class Rejected:
    """Credentials are not valid. Deliberately carries no reason."""

    accepted: ClassVar[bool] = False
    identity: ClassVar[Optional[str]] = None

    def __bool__(self) -> bool:
        return False


@dataclass(frozen=True)
class AcceptedAnonymous:
    """Credentials are valid and assert no identity."""

    accepted: ClassVar[bool] = True
    identity: ClassVar[Optional[str]] = None

    def __bool__(self) -> bool:
        return True


@dataclass(frozen=True)
class AcceptedWithIdentity:
    """Credentials are valid and assert ``identity``."""

    identity: str
    accepted: ClassVar[bool] = True

    def __bool__(self) -> bool:
        return True


VerificationResult = Union[Rejected, AcceptedAnonymous, AcceptedWithIdentity]

REJECTED = Rejected()
ACCEPTED_ANONYMOUS = AcceptedAnonymous()


class CredentialAuthority:
    """
    Issues and verifies credentials for one shared secret.

    Holds only immutable state (the key, the configuration and the clock), so a
    single instance can be shared freely between threads.
    """

    def __init__(
        self,
        secret: signing.Secret,
        config: Optional[AuthConfig] = None,
        clock: Optional[Clock] = None,
    ):
        """
        Initialize the authority.

        Args:
            secret: Shared secret (str or bytes), required
            config: Wire format and default TTL; legacy-compatible defaults if None
            clock: Callable returning the current unix time; ``time.time`` if None
        """
        self._key = require_secret(secret, "CredentialAuthority")
        self.config = config or AuthConfig()
        self.clock = clock or time.time

    def __repr__(self) -> str:
        return f"CredentialAuthority(config={self.config!r})"

    def now(self) -> int:
        return int(self.clock())

    def sign(self, username: str) -> str:
        """Compute the password for a username."""
        return signing.sign(
            self._key,
            username,
            algorithm=self.config.algorithm,
            encoding=self.config.password_encoding,
        )

    def issue(self, identity: Optional[str] = None, ttl: Optional[int] = None) -> CredentialPair:
        """
        Issue a credential pair valid for ``ttl`` seconds from now.

        Args:
            identity: Identity to assert, or None for an anonymous credential
            ttl: Lifetime in seconds; config default (one day) if None.
                Negative values issue an already expired credential.

        Returns:
            The signed CredentialPair

        Raises:
            ConfigurationError: If ttl is not an integer
            CredentialFormatError: If identity cannot be encoded
        """
        if ttl is None:
            ttl = self.config.default_ttl_seconds
        validate_ttl(ttl)

        expiry = self.now() + ttl
        username = encode_username(expiry, identity)
        logger.debug(f"Issued credentials expiring at {expiry} for {identity or 'anonymous'}")
        return CredentialPair(username=username, password=self.sign(username))

    def verify(self, credentials: Union[CredentialPair, Mapping[str, Any]]) -> VerificationResult:
        """
        Check a credential pair against this authority's secret.

        Never raises for bad credentials; every failure is ``Rejected``.
        """
        pair = _coerce_pair(credentials)
        if pair is None:
            logger.debug("Rejected credentials: missing username or password")
            return REJECTED

        expiry, identity = decode_username(pair.username)
        if expiry < self.now():
            logger.debug(f"Rejected credentials: expired at {expiry}")
            return REJECTED

        if not is_utf8_encodable(pair.username):
            logger.debug("Rejected credentials: username is not valid UTF-8 text")
            return REJECTED

        if not signing.constant_time_equals(self.sign(pair.username), pair.password):
            logger.debug("Rejected credentials: signature mismatch")
            return REJECTED

        logger.debug(f"Accepted credentials for {identity or 'anonymous'}")
        if identity is None:
            return ACCEPTED_ANONYMOUS
        return AcceptedWithIdentity(identity)


def _coerce_pair(credentials: Any) -> Optional[CredentialPair]:
    """Accept a CredentialPair or a username/password mapping; None if unusable."""
    if isinstance(credentials, CredentialPair):
        username, password = credentials.username, credentials.password
    elif isinstance(credentials, Mapping):
        username = credentials.get("username")
        password = credentials.get("password")
    else:
        return None
    # CredentialPair does not type-check its fields, so both branches need this
    if not isinstance(username, str) or not isinstance(password, str):
        return None
    if isinstance(credentials, CredentialPair):
        return credentials
    return CredentialPair(username=username, password=password)


def issue(
    identity: Optional[str] = None,
    *,
    secret: signing.Secret,
    ttl: Optional[int] = None,
    config: Optional[AuthConfig] = None,
    clock: Optional[Clock] = None,
) -> CredentialPair:
    """
    Issue a credential pair.

    Args:
        identity: Identity to assert in the credentials, or None
        secret: Shared secret with which to sign the credentials
        ttl: Lifetime in seconds (defaults to one day)
        config: Optional wire format configuration
        clock: Optional time source, mainly for tests

    Returns:
        Signed CredentialPair
    """
    return CredentialAuthority(secret, config, clock).issue(identity, ttl)


def verify(
    credentials: Union[CredentialPair, Mapping[str, Any]],
    *,
    secret: signing.Secret,
    config: Optional[AuthConfig] = None,
    clock: Optional[Clock] = None,
) -> VerificationResult:
    """
    Verify a credential pair against a shared secret.

    Args:
        credentials: CredentialPair, or a mapping with username and password
        secret: Shared secret the credentials should have been signed with
        config: Optional wire format configuration (must match the issuer's)
        clock: Optional time source, mainly for tests

    Returns:
        Rejected, AcceptedAnonymous or AcceptedWithIdentity
    """
    return CredentialAuthority(secret, config, clock).verify(credentials)
