import secrets
import uuid
from argon2 import PasswordHasher
from argon2.exceptions import VerificationError

ph = PasswordHasher(time_cost=2, memory_cost=19456, parallelism=1)


def hash_password(password: str) -> str:
    return ph.hash(password)


def verify_password(stored_hash: str, password: str) -> bool:
    try:
        return ph.verify(stored_hash, password)
    except VerificationError:
        return False


def generate_uid() -> str:
    return uuid.uuid4().hex[:28]


def generate_token() -> str:
    return secrets.token_hex(32)
