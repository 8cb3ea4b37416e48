"""Password hashing.

Accounts created by the earlier system store ``base64(sha256(password))``:
unsalted and single pass. Those hashes are still accepted on login and are
upgraded to a salted werkzeug hash on the next successful login.
"""
import base64
import hashlib
import hmac

from werkzeug.security import generate_password_hash, check_password_hash

_WERKZEUG_PREFIXES = ("pbkdf2:", "scrypt:")


def hash_password_legacy(password: str) -> str:
    """Unsalted SHA-256 digest, base64-encoded. Weak; compatibility only."""
    digest = hashlib.sha256(password.encode("utf-8")).digest()
    return base64.b64encode(digest).decode("ascii")


def is_legacy_hash(hashed: str) -> bool:
    return bool(hashed) and not hashed.startswith(_WERKZEUG_PREFIXES)


def generate_hash(password: str, legacy: bool = False) -> str:
    if legacy:
        return hash_password_legacy(password)
    return generate_password_hash(password)


def check_hash(password: str, hashed: str) -> bool:
    if not hashed:
        return False
    if is_legacy_hash(hashed):
        return hmac.compare_digest(hash_password_legacy(password), hashed)
    try:
        return check_password_hash(hashed, password)
    except ValueError:
        return False


def needs_rehash(hashed: str, legacy_mode: bool = False) -> bool:
    """True when a stored hash should be replaced after a successful login."""
    return is_legacy_hash(hashed) and not legacy_mode
