"""Module: security."""

import hashlib
import hmac
import os

# Shared password hashing format/version marker.
PASSWORD_SCHEME = "pbkdf2_sha256"
PASSWORD_ITERATIONS = 390000
SALT_BYTES = 16


def hash_password(password: str, iterations: int = PASSWORD_ITERATIONS) -> str:
    """
    Create a PBKDF2-SHA256 password hash string.

    Stored format:
      pbkdf2_sha256$<iterations>$<salt_hex>$<hash_hex>
    """
    salt = os.urandom(SALT_BYTES)
    digest = hashlib.pbkdf2_hmac(
        "sha256",
        password.encode("utf-8"),
        salt,
        iterations,
    )
    return f"{PASSWORD_SCHEME}${iterations}${salt.hex()}${digest.hex()}"


def verify_password(password: str, stored: str) -> bool:
    """
    Verify a password against a stored PBKDF2 hash.

    Anything that is not in the hashed format (including legacy plaintext
    values) is rejected.
    """
    if not stored or not stored.startswith(f"{PASSWORD_SCHEME}$"):
        return False

    try:
        _, iterations_raw, salt_hex, hash_hex = stored.split("$", 3)
        iterations = int(iterations_raw)
        salt = bytes.fromhex(salt_hex)
        expected = bytes.fromhex(hash_hex)
    except ValueError:
        return False

    computed = hashlib.pbkdf2_hmac(
        "sha256",
        password.encode("utf-8"),
        salt,
        iterations,
    )
    return hmac.compare_digest(computed, expected)
