"""
Unit Tests - JWTHandler and PasswordHasher

Module: tests.test_authentication
Date: 2026-10-18
Version: 0.1.0
"""

import unittest
from datetime import datetime, timedelta, timezone

import jwt

from credcore.security.authentication import (
    JWTClaimError,
    JWTConfigurationError,
    JWTExpiredError,
    JWTHandler,
    JWTInvalidError,
    PasswordHasher,
)

SECRET = "test-secret-key-at-least-32-characters-long!!!!"
OTHER_SECRET = "another-secret-key-also-32-characters-long!!!!"


def _two_hours_ago():
    return datetime.now(timezone.utc) - timedelta(hours=2)


class TestJWTHandler(unittest.TestCase):
    """Test suite for JWTHandler"""

    def setUp(self):
        """Setup before each test"""
        self.handler = JWTHandler(SECRET)

    def test_initialization(self):
        """Test handler defaults"""
        self.assertEqual(self.handler.algorithm, "HS256")
        self.assertEqual(self.handler.token_expire, timedelta(minutes=60))

    def test_missing_secret_raises(self):
        """Test absent secret is a configuration error"""
        for secret in (None, ""):
            with self.subTest(secret=secret):
                with self.assertRaises(JWTConfigurationError):
                    JWTHandler(secret)

    def test_short_secret_key_raises(self):
        """Test short secret key rejected"""
        with self.assertRaises(JWTConfigurationError):
            JWTHandler("short")

    def test_generate_token(self):
        """Test token carries exactly userId, username, iat, exp"""
        issued = self.handler.generate_token("user-123", "alice")

        payload = jwt.decode(issued.token, SECRET, algorithms=["HS256"])
        self.assertEqual(set(payload), {"userId", "username", "iat", "exp"})
        self.assertEqual(payload["userId"], "user-123")
        self.assertEqual(payload["username"], "alice")
        self.assertEqual(payload["exp"] - payload["iat"], 3600)
        self.assertEqual(issued.token_type, "Bearer")
        self.assertEqual(issued.expires_in, 3600)

    def test_generate_token_requires_identity(self):
        """Test empty identity is refused"""
        with self.assertRaises(ValueError):
            self.handler.generate_token("", "alice")

    def test_verify_valid_token(self):
        """Test valid token verification"""
        issued = self.handler.generate_token("user-123", "bob")
        claims = self.handler.verify(issued.token)

        self.assertEqual(claims.user_id, "user-123")
        self.assertEqual(claims.username, "bob")
        self.assertGreater(claims.exp, claims.iat)

    def test_verify_expired_token(self):
        """Test token issued two hours ago is expired"""
        past = JWTHandler(SECRET, clock=_two_hours_ago)
        issued = past.generate_token("user-123", "bob")

        with self.assertRaises(JWTExpiredError):
            self.handler.verify(issued.token)

    def test_verify_other_secret(self):
        """Test token signed with a different secret is invalid"""
        issued = JWTHandler(OTHER_SECRET).generate_token("user-123", "bob")

        with self.assertRaises(JWTInvalidError):
            self.handler.verify(issued.token)

    def test_verify_tampered_token(self):
        """Test tampered signature rejected"""
        issued = self.handler.generate_token("user-123", "alice")
        bad_token = issued.token[:-10] + "TAMPERED!!"

        with self.assertRaises(JWTInvalidError):
            self.handler.verify(bad_token)

    def test_verify_garbage(self):
        """Test non-JWT strings rejected"""
        for token in ("not-a-token", "a.b.c", "", None):
            with self.subTest(token=token):
                with self.assertRaises(JWTInvalidError):
                    self.handler.verify(token)

    def test_verify_unsigned_token(self):
        """Test alg=none tokens are refused"""
        now = int(datetime.now(timezone.utc).timestamp())
        token = jwt.encode(
            {"userId": "u", "username": "mallory", "iat": now, "exp": now + 60},
            None,
            algorithm="none",
        )
        with self.assertRaises(JWTInvalidError):
            self.handler.verify(token)

    def test_verify_missing_claims(self):
        """Test missing required claims rejected"""
        now = int(datetime.now(timezone.utc).timestamp())
        payloads = [
            {"userId": "u", "iat": now, "exp": now + 60},
            {"username": "bob", "iat": now, "exp": now + 60},
            {"userId": "u", "username": "bob", "iat": now},
            {"userId": "u", "username": "bob", "exp": now + 60},
        ]
        for payload in payloads:
            with self.subTest(payload=payload):
                token = jwt.encode(payload, SECRET, algorithm="HS256")
                with self.assertRaises(JWTClaimError):
                    self.handler.verify(token)

    def test_verify_non_string_claims(self):
        """Test identity claims must be strings"""
        now = int(datetime.now(timezone.utc).timestamp())
        token = jwt.encode(
            {"userId": 42, "username": "bob", "iat": now, "exp": now + 60},
            SECRET,
            algorithm="HS256",
        )
        with self.assertRaises(JWTClaimError):
            self.handler.verify(token)

    def test_custom_lifetime(self):
        """Test configurable expiration"""
        handler = JWTHandler(SECRET, token_expire_minutes=5)
        issued = handler.generate_token("user-123", "bob")
        self.assertEqual(issued.expires_in, 300)


class TestPasswordHasher(unittest.TestCase):
    """Test suite for PasswordHasher"""

    def setUp(self):
        self.hasher = PasswordHasher(rounds=4)

    def test_hash_is_bcrypt(self):
        """Test hash format embeds algorithm, cost and salt"""
        password_hash = self.hasher.hash("secret123")
        self.assertTrue(password_hash.startswith(("$2a$04$", "$2b$04$", "$2y$04$")))
        self.assertNotIn("secret123", password_hash)

    def test_salt_per_password(self):
        """Test two hashes of one password differ"""
        self.assertNotEqual(self.hasher.hash("secret123"), self.hasher.hash("secret123"))

    def test_verify(self):
        """Test matching and non-matching passwords"""
        password_hash = self.hasher.hash("secret123")
        self.assertTrue(self.hasher.verify("secret123", password_hash))
        self.assertFalse(self.hasher.verify("secret124", password_hash))

    def test_verify_with_other_instance(self):
        """Test verification needs only the stored hash"""
        password_hash = PasswordHasher(rounds=5).hash("secret123")
        self.assertTrue(self.hasher.verify("secret123", password_hash))

    def test_verify_malformed_hash(self):
        """Test a corrupt stored hash never matches"""
        self.assertFalse(self.hasher.verify("secret123", "not-a-bcrypt-hash"))

    def test_long_password(self):
        """Test passwords beyond 72 bytes hash and verify"""
        password = "p" * 100
        password_hash = self.hasher.hash(password)
        self.assertTrue(self.hasher.verify(password, password_hash))

    def test_dummy_verify(self):
        """Test dummy verification always fails"""
        self.assertFalse(self.hasher.dummy_verify("anything"))
        self.assertFalse(self.hasher.dummy_verify("anything"))


if __name__ == "__main__":
    unittest.main()
