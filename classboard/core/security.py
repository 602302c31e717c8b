# /classboard-backend/classboard/core/security.py

"""Password hashing for self-service student accounts."""

from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    # A malformed stored hash counts as a failed verification, not a crash.
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        return False
