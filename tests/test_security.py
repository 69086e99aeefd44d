"""Unit tests for essential_times.core.security: bcrypt hashing and JWT claims."""

import unittest
from datetime import UTC, datetime, timedelta

import jwt

from essential_times.core.config import get_settings
from essential_times.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


class TestPasswordHashing(unittest.TestCase):
    def test_hash_is_not_plaintext_and_verifies(self) -> None:
        hashed = hash_password("abcd1234")
        self.assertNotEqual(hashed, "abcd1234")
        self.assertTrue(hashed.startswith("$2"))
        self.assertTrue(verify_password("abcd1234", hashed))

    def test_wrong_password(self) -> None:
        self.assertFalse(verify_password("wrong-pass", hash_password("abcd1234")))

    def test_malformed_hash_is_false(self) -> None:
        self.assertFalse(verify_password("abcd1234", "not-a-bcrypt-hash"))


class TestAccessToken(unittest.TestCase):
    def test_claims_and_24h_lifetime(self) -> None:
        token = create_access_token(7, "kim@example.com", "reporter", "김기자")
        payload = decode_access_token(token)
        self.assertEqual(payload["sub"], "7")
        self.assertEqual(payload["id"], 7)
        self.assertEqual(payload["email"], "kim@example.com")
        self.assertEqual(payload["role"], "reporter")
        self.assertEqual(payload["name"], "김기자")
        self.assertEqual(payload["exp"] - payload["iat"], 24 * 60 * 60)

    def test_expired_token_rejected(self) -> None:
        settings = get_settings()
        past = datetime.now(UTC) - timedelta(hours=25)
        token = jwt.encode(
            {"sub": "1", "role": "admin", "iat": past, "exp": past + timedelta(hours=24)},
            settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
        )
        with self.assertRaises(jwt.ExpiredSignatureError):
            decode_access_token(token)

    def test_foreign_signature_rejected(self) -> None:
        token = jwt.encode(
            {"sub": "1", "exp": datetime.now(UTC) + timedelta(hours=1)},
            "some-other-secret",
            algorithm="HS256",
        )
        with self.assertRaises(jwt.InvalidSignatureError):
            decode_access_token(token)


if __name__ == "__main__":
    unittest.main()
