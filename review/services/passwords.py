"""Password hashing."""

import logging

from passlib.context import CryptContext

logger = logging.getLogger(__name__)

_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

_DUMMY_HASH = _context.hash('not-a-real-password')
"""Verified against when there is no user, so that a miss costs a hash."""


def hash_password(password: str) -> str:
    """Generate a salted, one-way hash of a password."""
    return _context.hash(password)


def check_password(password: str, encrypted: str) -> bool:
    """
    Check a password against a stored hash.

    The comparison is constant-time. Returns ``False`` rather than raising
    for hashes that passlib does not recognize.
    """
    try:
        return bool(_context.verify(password, encrypted))
    except (ValueError, TypeError) as e:
        logger.error('Could not verify password hash: %s', e)
        return False


def burn_hash(password: str) -> None:
    """Spend the same effort as :func:`check_password`, then fail."""
    _context.verify(password, _DUMMY_HASH)
