"""Tests for :mod:`review.services.passwords`."""

from unittest import TestCase

from .. import passwords


class TestPasswords(TestCase):
    """Passwords are hashed and checked with passlib."""

    def test_hash_and_check(self):
        encrypted = passwords.hash_password('secret1')
        self.assertNotIn('secret1', encrypted)
        self.assertTrue(passwords.check_password('secret1', encrypted))
        self.assertFalse(passwords.check_password('secret2', encrypted))

    def test_hashes_are_salted(self):
        """The same password does not hash the same way twice."""
        self.assertNotEqual(passwords.hash_password('secret1'),
                            passwords.hash_password('secret1'))

    def test_unrecognized_hash(self):
        """A stored value that is not a hash never matches."""
        self.assertFalse(passwords.check_password('secret1', 'secret1'))
