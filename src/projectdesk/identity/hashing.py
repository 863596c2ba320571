"""Password hashing backed by passlib."""

from passlib.context import CryptContext

from ..config import settings


def build_crypt_context(schemes: list[str] | None = None) -> CryptContext:
    """Create a CryptContext; hashes in older schemes are flagged for rehash."""
    return CryptContext(schemes=schemes or settings.password_hash_schemes, deprecated="auto")


pwd_context = build_crypt_context()


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Constant-time check of a password against a stored hash."""
    return pwd_context.verify(plain_password, hashed_password)
