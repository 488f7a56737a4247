"""Password hashing with bcrypt."""

from __future__ import annotations

import bcrypt

from ..utils.exceptions import PasswordHashingError
from ..utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_ROUNDS = 12


class PasswordHasher:
    """
    Salted one-way hashing with a configurable work factor.

    ``rounds`` is the bcrypt cost: every increment doubles the time an
    attacker spends per guess.
    """

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        self.rounds = rounds
        self._dummy_hash: bytes | None = None

    def hash(self, password: str) -> str:
        """Hash a password with bcrypt."""
        try:
            salt = bcrypt.gensalt(rounds=self.rounds)
            return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")
        except (ValueError, MemoryError) as e:
            logger.error("Password hashing failed", error=str(e))
            raise PasswordHashingError("Server error while hashing password.") from e

    def verify(self, password: str, password_hash: str) -> bool:
        """Verify a password against its hash."""
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except ValueError:
            # Malformed stored hash
            return False

    def dummy_verify(self, password: str) -> None:
        """Spend one verification's worth of work when there is no account."""
        if self._dummy_hash is None:
            self._dummy_hash = bcrypt.hashpw(b"storefront-dummy", bcrypt.gensalt(rounds=self.rounds))
        bcrypt.checkpw(password.encode("utf-8"), self._dummy_hash)
