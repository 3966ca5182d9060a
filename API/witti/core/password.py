"""Password hashing for member accounts.

Hashes are salted per record and deliberately slow (pbkdf2_sha256 through
passlib). The stored value is passlib's self-describing string, so the scheme
or its rounds can change later without a schema migration.
"""
from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(plain: str) -> str:
    return pwd_context.hash(plain or "")


def verify_password(plain: str, hashed: str) -> bool:
    if not hashed:
        return False
    try:
        return pwd_context.verify(plain or "", hashed)
    except ValueError:
        # Stored value is not a hash this context recognises.
        return False


def dummy_verify() -> None:
    """Spend the same time as a real verify when there is no stored hash to check."""
    pwd_context.dummy_verify()
