"""Salted password credentials keyed by normalized email."""

import hashlib
import hmac
import secrets
from dataclasses import dataclass, field

DEFAULT_SALT_BYTES = 16


def normalize_email(email: str | None) -> str:
    """Trim and lowercase an email address."""
    return (email or "").strip().lower()


def hash_password(salt: str, password: str) -> str:
    """Hex SHA-256 of the salt concatenated with the password."""
    return hashlib.sha256((salt + password).encode("utf-8")).hexdigest()


@dataclass
class CredentialStore:
    """Salt and hash tables, kept apart from user profiles."""

    salts: dict[str, str] = field(default_factory=dict)
    hashes: dict[str, str] = field(default_factory=dict)
    salt_bytes: int = DEFAULT_SALT_BYTES

    def __contains__(self, email: str) -> bool:
        return normalize_email(email) in self.hashes

    def set_password(self, email: str, password: str) -> None:
        """Store a fresh salt and hash for the account."""
        key = normalize_email(email)
        salt = secrets.token_hex(self.salt_bytes)
        self.salts[key] = salt
        self.hashes[key] = hash_password(salt, password)

    def verify(self, email: str, password: str | None) -> bool:
        """Recompute the hash from the stored salt and compare."""
        key = normalize_email(email)
        expected = self.hashes.get(key, "")
        actual = hash_password(self.salts.get(key, ""), password or "")
        return bool(expected) and hmac.compare_digest(expected, actual)

    def rename(self, old_email: str, new_email: str) -> None:
        """Move the credential pair to a new email key."""
        old_key = normalize_email(old_email)
        new_key = normalize_email(new_email)
        if old_key in self.salts:
            self.salts[new_key] = self.salts.pop(old_key)
        if old_key in self.hashes:
            self.hashes[new_key] = self.hashes.pop(old_key)
