# utils/hashing.py
from passlib.context import CryptContext

from config import settings

# bcrypt with a configurable work factor (never below 10 outside of tests)
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    # passlib compares digests in constant time
    try:
        return pwd_context.verify(plain, hashed)
    except ValueError:
        # malformed stored hash
        return False
