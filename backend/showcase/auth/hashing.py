"""
Hashing utilities.

Two very different inputs, two very different hashes:
  • Passwords — low entropy, so bcrypt with a per-hash salt.
  • Client addresses — hashed with SHA-256 so the rating table can
    deduplicate per address without ever holding the raw value. The
    digest must be deterministic, so no salt.
"""

import hashlib

import bcrypt


def hash_password(raw_password: str) -> str:
    """Return a bcrypt hash (utf-8 string) for storage."""
    return bcrypt.hashpw(raw_password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(raw_password: str, password_hash: str) -> bool:
    """Constant-time check of a password against its stored bcrypt hash."""
    try:
        return bcrypt.checkpw(raw_password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def hash_client_address(address: str) -> str:
    """SHA-256 hex digest of a client address string."""
    return hashlib.sha256(address.encode("utf-8")).hexdigest()
