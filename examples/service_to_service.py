#!/usr/bin/env python3
"""
Service-to-Service Credentials Example
======================================

Two services share a secret. The caller issues short-lived credentials and
sends them as HTTP basic auth; the receiver verifies them offline.

Usage:
    python service_to_service.py
"""

import logging

from crossauth import AuthConfig, CredentialAuthority, create_secret


def main():
    """Issue credentials on one side and verify them on the other."""
    logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    print("=== Service-to-Service Credentials Demo ===\n")

    shared_secret = create_secret()

    # Calling service
    billing = CredentialAuthority(shared_secret)
    credentials = billing.issue("billing-service", ttl=300)
    print(f"🔑 username: {credentials.username}")
    print(f"🔑 password: {credentials.password!r}")

    # Receiving service
    ledger = CredentialAuthority(shared_secret)
    result = ledger.verify(credentials)
    if result:
        print(f"✅ Accepted caller: {result.identity or 'anonymous'}")

    # Expired credentials are rejected even though the signature is correct
    stale = billing.issue("billing-service", ttl=-1)
    print(f"❌ Expired credentials accepted? {bool(ledger.verify(stale))}")

    # A fresh deployment can opt into the stronger wire format on both sides
    strict = CredentialAuthority(shared_secret, AuthConfig.create_strict())
    print(f"✅ Strict format round-trip: {strict.verify(strict.issue('billing-service')).identity}")


if __name__ == "__main__":
    main()
