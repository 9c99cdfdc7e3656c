"""
Password hashing with passlib.

Hashes use bcrypt. Logging in with a hash made under older settings
re-hashes the password (see ``needs_rehash``).
"""

from passlib.context import CryptContext

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """False for a wrong password or an unrecognised hash."""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        return False


def needs_rehash(hashed_password: str) -> bool:
    """Whether a stored hash was made with outdated bcrypt settings."""
    return pwd_context.needs_update(hashed_password)
