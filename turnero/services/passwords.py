from __future__ import annotations

from passlib.context import CryptContext

# pbkdf2_sha256 es el esquema por defecto; bcrypt queda para hashes importados.
_pwd_context = CryptContext(schemes=["pbkdf2_sha256", "bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return _pwd_context.hash(password)


def password_looks_hashed(password: str) -> bool:
    return _pwd_context.identify(password) is not None


def verify_password(password: str, password_hash: str | None) -> bool:
    if not password_hash:
        return False
    try:
        return _pwd_context.verify(password, password_hash)
    except (ValueError, TypeError):
        return False
