"""
Standardized Error Handling for crossauth
=========================================

This module provides the exception hierarchy and the error conversion helper
used across credential operations.

Verification failures are never raised: a bad, expired or tampered credential
is an ordinary ``Rejected`` result. Exceptions are reserved for programmer and
configuration errors, which should fail fast.
"""

import functools
import logging
from typing import Any, Callable, Dict, Optional, Type

logger = logging.getLogger(__name__)


class CredentialError(Exception):
    """Base exception for all crossauth errors."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        self.context = context or {}
        super().__init__(message)

        # Log error with context for debugging
        context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
        logger.error(
            f"Credential error: {message}" + (f" ({context_str})" if context_str else "")
        )


class ConfigurationError(CredentialError, ValueError):
    """Raised when a required parameter is missing or configuration is invalid."""

    pass


class CredentialFormatError(CredentialError, ValueError):
    """Raised when an identity cannot be encoded into a username."""

    pass


def with_error_handling(
    error_type: Type[CredentialError] = CredentialError,
    context: Optional[Dict[str, Any]] = None,
):
    """
    Decorator converting unexpected exceptions into crossauth errors.

    Args:
        error_type: Type of CredentialError to raise
        context: Additional context to include in error
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except CredentialError:
                # Re-raise our own errors as-is
                raise
            except Exception as e:
                error_context = (context or {}).copy()
                error_context.update(
                    {
                        "function": func.__name__,
                        "original_error": str(e),
                        "original_error_type": type(e).__name__,
                    }
                )
                raise error_type(f"Error in {func.__name__}: {e}", error_context) from e

        return wrapper

    return decorator


def require_secret(secret: Any, operation: str) -> bytes:
    """
    Validate a shared secret and return it as key bytes.

    Args:
        secret: Secret supplied by the caller (str or bytes)
        operation: Name of the calling operation, used in the error message

    Returns:
        The secret encoded as bytes (str secrets are UTF-8 encoded)

    Raises:
        ConfigurationError: If the secret is missing, empty or of the wrong type
    """
    if secret is None or (isinstance(secret, (str, bytes, bytearray)) and len(secret) == 0):
        raise ConfigurationError(
            f"A shared secret is required when calling '{operation}'",
            {"operation": operation},
        )
    if isinstance(secret, str):
        return secret.encode("utf-8")
    if isinstance(secret, (bytes, bytearray)):
        return bytes(secret)
    raise ConfigurationError(
        f"Secret must be str or bytes, got {type(secret).__name__}",
        {"operation": operation},
    )
