"""
VerseNotes Backend — Password Hashing
=======================================

What:  Salted, deliberately slow one-way hashing of passwords with bcrypt.
Why:   Stored hashes must resist brute force if the users table leaks.
How:   bcrypt.hashpw with a per-hash random salt at a configurable cost;
       verification re-derives with the salt embedded in the stored hash.
Who:   Used by UserService for signup (hash) and login (verify).

Event loop note:
    A cost-10 hash takes tens of milliseconds of pure CPU. Both operations run
    in Starlette's threadpool so other requests keep being served meanwhile.

72-byte limit:
    bcrypt only uses the first 72 bytes of its input and recent releases
    reject longer input outright. Passwords are truncated to 72 UTF-8 bytes
    before hashing AND verifying, so long passwords still round-trip.
"""

import bcrypt
from starlette.concurrency import run_in_threadpool

MAX_PASSWORD_BYTES = 72


class PasswordHasher:
    """
    bcrypt wrapper with a fixed work factor.

    Args:
        rounds: bcrypt cost (log2 of iterations), 4-31. Default 10.
    """

    def __init__(self, rounds: int = 10):
        self.rounds = rounds

    @staticmethod
    def _encode(password: str) -> bytes:
        return password.encode("utf-8")[:MAX_PASSWORD_BYTES]

    def hash_sync(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(self._encode(password), salt).decode("utf-8")

    def verify_sync(self, password: str, hashed: str) -> bool:
        return bcrypt.checkpw(self._encode(password), hashed.encode("utf-8"))

    async def hash(self, password: str) -> str:
        """Returns a "$2b$<rounds>$..." hash string suitable for storage."""
        return await run_in_threadpool(self.hash_sync, password)

    async def verify(self, password: str, hashed: str) -> bool:
        """
        Checks a plaintext password against a stored hash.

        Raises:
            ValueError: The stored value is not a bcrypt hash.
        """
        return await run_in_threadpool(self.verify_sync, password, hashed)
