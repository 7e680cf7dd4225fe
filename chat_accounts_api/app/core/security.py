"""
Password hashing helpers.

Passwords are stored as PBKDF2-HMAC-SHA256 digests with a random
16-byte salt, encoded as ``"<salt hex>$<hash hex>"``.  Verification
recomputes the digest with the stored salt and compares it in
constant time.
"""

import hashlib
import hmac
import os
from typing import Optional

from .config import settings


def hash_password(password: str, iterations: Optional[int] = None) -> str:
    """Hash a password using PBKDF2-HMAC with SHA-256.

    Parameters
    ----------
    password : str
        The plain text password to hash.
    iterations : Optional[int]
        PBKDF2 round count.  Defaults to
        ``settings.password_hash_iterations``.

    Returns
    -------
    str
        Salt and hash concatenated with ``$``.
    """
    rounds = iterations or settings.password_hash_iterations
    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac("sha256", str(password).encode("utf-8"), salt, rounds)
    return f"{salt.hex()}${dk.hex()}"


def verify_password(plain_password: str, hashed_password: Optional[str], iterations: Optional[int] = None) -> bool:
    """Check ``plain_password`` against a stored ``salt$hash`` string.

    Returns ``False`` rather than raising when the stored value is
    missing or not in the expected format.
    """
    if not hashed_password or "$" not in hashed_password:
        return False
    rounds = iterations or settings.password_hash_iterations
    try:
        salt_hex, hash_hex = hashed_password.split("$", 1)
        salt = bytes.fromhex(salt_hex)
        expected = bytes.fromhex(hash_hex)
    except ValueError:
        return False
    dk = hashlib.pbkdf2_hmac("sha256", str(plain_password).encode("utf-8"), salt, rounds)
    return hmac.compare_digest(dk, expected)
