import asyncio
import base64
import hashlib

import bcrypt

DEFAULT_ROUNDS = 10


def prepare_password(password: str) -> bytes:
    """Reduce a password of any length to 44 bytes that bcrypt accepts.

    bcrypt only looks at the first 72 bytes (and newer releases refuse longer
    input), so every password goes through base64(SHA-256) first.
    """
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


class PasswordHasher:
    """bcrypt hashing with a fresh salt per hash.

    Hashing is CPU-bound, so both operations run in a worker thread to keep
    the event loop free for other requests.
    """

    def __init__(self, rounds: int = DEFAULT_ROUNDS) -> None:
        self.rounds = rounds

    def hash_sync(self, password: str) -> str:
        return bcrypt.hashpw(prepare_password(password), bcrypt.gensalt(rounds=self.rounds)).decode("utf-8")

    def verify_sync(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(prepare_password(password), password_hash.encode("utf-8"))
        except ValueError:
            # Malformed stored hash counts as a mismatch
            return False

    async def hash(self, password: str) -> str:
        return await asyncio.to_thread(self.hash_sync, password)

    async def verify(self, password: str, password_hash: str) -> bool:
        return await asyncio.to_thread(self.verify_sync, password, password_hash)
