"""Tests for password based encryption."""

import unittest

from materialnotes.encryption import decrypt, encrypt
from materialnotes.exceptions import DecryptionError


class EncryptionTest(unittest.TestCase):
    def test_round_trip(self):
        token = encrypt("hunter2", "Dear diary ✅")
        self.assertNotIn("diary", token)
        self.assertEqual(decrypt("hunter2", token), "Dear diary ✅")

    def test_random_salt(self):
        self.assertNotEqual(encrypt("pw", "same"), encrypt("pw", "same"))

    def test_wrong_password(self):
        token = encrypt("pw", "text")
        with self.assertRaises(DecryptionError):
            decrypt("not-pw", token)

    def test_corrupt_ciphertext(self):
        for value in ("", "no-separator", "!!!.token", "c2FsdA==.not-a-token"):
            with self.subTest(value=value):
                with self.assertRaises(DecryptionError):
                    decrypt("pw", value)

    def test_empty_password_rejected(self):
        with self.assertRaises(ValueError):
            encrypt("", "text")


if __name__ == "__main__":
    unittest.main()
