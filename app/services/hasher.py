"""bcrypt hashing and verification of user passwords."""

import asyncio
import logging

import bcrypt

from app.config import settings
from app.utils.exceptions import HashingError

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of the password.
BCRYPT_MAX_BYTES = 72


def _encode(plaintext: str) -> bytes:
    return plaintext.encode("utf-8")[:BCRYPT_MAX_BYTES]


class CredentialHasher:
    """Turns plaintext passwords into salted digests and checks them.

    bcrypt is CPU bound, so both operations run in a worker thread to keep the
    event loop free while a request is hashing.
    """

    def __init__(self, rounds: int = 10):
        self.rounds = rounds

    def _hash_sync(self, plaintext: str) -> str:
        return bcrypt.hashpw(_encode(plaintext), bcrypt.gensalt(rounds=self.rounds)).decode("utf-8")

    async def hash(self, plaintext: str) -> str:
        """Return a new salted digest; raises HashingError instead of ever returning plaintext."""
        if not isinstance(plaintext, str):
            raise HashingError()
        try:
            return await asyncio.to_thread(self._hash_sync, plaintext)
        except (ValueError, TypeError) as exc:
            logger.error("Password hashing failed: %s", exc)
            raise HashingError() from exc

    async def verify(self, plaintext: str, digest: str) -> bool:
        try:
            return await asyncio.to_thread(bcrypt.checkpw, _encode(plaintext), digest.encode("utf-8"))
        except (ValueError, TypeError, AttributeError):
            return False


hasher = CredentialHasher(rounds=settings.bcrypt_rounds)
