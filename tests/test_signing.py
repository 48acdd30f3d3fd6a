"""
Tests for the HMAC signer and password rendering.
"""

import pytest

from crossauth.error_handling import ConfigurationError
from crossauth.signing import constant_time_equals, digest, encode_base64, sign


USERNAME = "1700003600:svc-a"


class TestKnownAnswers:
    """Pin the wire format against digests computed independently."""

    def test_sha1_legacy(self):
        assert sign("topsecret", USERNAME) == "T49OuckGP/g974aphMLJHvFRjs8=\n"

    def test_sha1_legacy_anonymous(self):
        assert sign("topsecret", "1700003600:") == "QffRyzz77IguFH7XyyahGPB+YGI=\n"

    def test_sha1_strict(self):
        assert sign("topsecret", USERNAME, encoding="strict") == "T49OuckGP/g974aphMLJHvFRjs8="

    def test_sha256_strict(self):
        assert (
            sign("topsecret", USERNAME, algorithm="sha256", encoding="strict")
            == "zDV/xLRkzKheVyFY3mJU+W/Bsuu14cdvK1piBPVmmC0="
        )

    def test_sha512_legacy_wraps_at_60_columns(self):
        strict = (
            "UN0wOE5fgU7pjwRyiSlsoQ1hXyAIjrS/pRByKjSRfoeG6WJZYu8mLDfGgfcN9mzX"
            "wnF/1nwIWh4OgPdOyTOObg=="
        )
        legacy = sign("topsecret", USERNAME, algorithm="sha512")

        assert sign("topsecret", USERNAME, algorithm="sha512", encoding="strict") == strict
        assert legacy == strict[:60] + "\n" + strict[60:] + "\n"

    def test_bytes_and_str_secret_agree(self):
        assert sign(b"topsecret", USERNAME) == sign("topsecret", USERNAME)

    def test_sha1_digest_is_20_bytes(self):
        assert len(digest("topsecret", USERNAME)) == 20


class TestEncodeBase64:
    def test_empty_input(self):
        assert encode_base64(b"") == ""
        assert encode_base64(b"", "strict") == ""

    def test_exact_line_boundary(self):
        # 45 bytes encode to exactly 60 characters
        text = encode_base64(b"\x00" * 45)
        assert text == "A" * 60 + "\n"

    def test_unknown_encoding(self):
        with pytest.raises(ConfigurationError):
            encode_base64(b"abc", "urlsafe")


class TestSignErrors:
    def test_unknown_algorithm(self):
        with pytest.raises(ConfigurationError):
            sign("topsecret", USERNAME, algorithm="md5")

    @pytest.mark.parametrize("secret", [None, "", b""])
    def test_missing_secret(self, secret):
        with pytest.raises(ConfigurationError):
            sign(secret, USERNAME)

    def test_wrong_secret_type(self):
        with pytest.raises(ConfigurationError):
            sign(12345, USERNAME)


class TestConstantTimeEquals:
    def test_equal(self):
        assert constant_time_equals("abc=\n", "abc=\n")

    def test_different(self):
        assert not constant_time_equals("abc=\n", "abd=\n")

    def test_missing_trailing_newline_does_not_match(self):
        assert not constant_time_equals("abc=\n", "abc=")

    def test_non_string_never_matches(self):
        assert not constant_time_equals("abc", None)
        assert not constant_time_equals("abc", b"abc")

    def test_non_ascii(self):
        assert constant_time_equals("héllo", "héllo")

    def test_lone_surrogate_never_matches(self):
        assert not constant_time_equals("abc=\n", "\udcff")
        assert not constant_time_equals("\udcff", "\udcff")
