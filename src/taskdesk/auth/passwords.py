# src/taskdesk/auth/passwords.py

"""
Password hashing.

Two formats can sit in users.password:
- legacy: 64-char lowercase hex SHA-256 of the password (unsalted, one round)
- bcrypt: "$2b$..." string, computed over the SHA-256 hex digest of the password

Pre-digesting keeps bcrypt's 72-byte input limit out of the picture (the hex
digest is always 64 bytes) and lets a legacy row be upgraded in place once the
user proves they know the password.
"""

from __future__ import annotations

import hashlib
import hmac
import re
from functools import lru_cache

import bcrypt

_LEGACY_DIGEST_RE = re.compile(r"[0-9a-f]{64}")


def hash_password(password: str) -> str:
    """SHA-256 of the UTF-8 password, as lowercase hex. Deterministic."""
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


def is_legacy_digest(stored: str) -> bool:
    return bool(stored) and _LEGACY_DIGEST_RE.fullmatch(stored) is not None


def make_password_hash(password: str, *, scheme: str = "bcrypt", rounds: int = 12) -> str:
    digest = hash_password(password)
    if scheme == "sha256":
        return digest
    if scheme != "bcrypt":
        raise ValueError(f"unknown password scheme: {scheme!r}")
    return bcrypt.hashpw(digest.encode("ascii"), bcrypt.gensalt(rounds=rounds)).decode("ascii")


def verify_password(password: str, stored: str | None) -> bool:
    if not stored:
        return False
    digest = hash_password(password)
    if is_legacy_digest(stored):
        return hmac.compare_digest(digest, stored)
    try:
        return bcrypt.checkpw(digest.encode("ascii"), stored.encode("ascii"))
    except ValueError:
        # Not a bcrypt string either (corrupt row).
        return False


def needs_rehash(stored: str, *, scheme: str) -> bool:
    """True when a stored hash should be replaced by one in `scheme`."""
    return scheme == "bcrypt" and is_legacy_digest(stored)


@lru_cache(maxsize=4)
def _dummy_hash(rounds: int) -> str:
    return make_password_hash("taskdesk-dummy-password", scheme="bcrypt", rounds=rounds)


def burn_verify_time(password: str, *, rounds: int = 12) -> None:
    """Run one bcrypt check against a throwaway hash and ignore the answer."""
    verify_password(password, _dummy_hash(rounds))


def verify_login(password: str, stored: str | None, *, rounds: int = 12) -> bool:
    """
    Verify a login attempt at the cost of exactly one bcrypt check.

    `stored` is None when the username does not exist. A bcrypt row pays for
    its own check. A legacy digest or a missing row would answer in
    microseconds, so those pay for a check against a dummy hash first. The
    cost is the same under either password scheme and for every outcome,
    which keeps login timing from telling which usernames exist.
    """
    if stored and stored.startswith("$2"):
        return verify_password(password, stored)
    burn_verify_time(password, rounds=rounds)
    return verify_password(password, stored)
