"""
Credential store.

Accounts live behind a UserRepository so a persistent backend can replace
the in-memory one without touching the token or order layers. Every
read-modify-write sequence (check-email-then-insert, check-id-then-delete)
runs under the store lock.
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from .models import UserPublic, UserRecord
from .passwords import PasswordHasher
from ..utils.exceptions import DuplicateEmailError, NotFoundError, ValidationError
from ..utils.logger import get_logger

logger = get_logger(__name__)


class UserRepository(ABC):
    """Storage backend for UserRecords."""

    @abstractmethod
    def get(self, user_id: int) -> Optional[UserRecord]: ...

    @abstractmethod
    def find_by_email(self, email: str) -> Optional[UserRecord]: ...

    @abstractmethod
    def next_id(self) -> int: ...

    @abstractmethod
    def insert(self, user: UserRecord) -> None: ...

    @abstractmethod
    def delete(self, user_id: int) -> bool: ...

    @abstractmethod
    def list(self) -> List[UserRecord]: ...

    def count(self) -> int:
        return len(self.list())


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._users: Dict[int, UserRecord] = {}
        self._next_id = 0
        self._lock = threading.Lock()

    def get(self, user_id: int) -> Optional[UserRecord]:
        with self._lock:
            return self._users.get(user_id)

    def find_by_email(self, email: str) -> Optional[UserRecord]:
        # Exact, case-sensitive match
        with self._lock:
            return next((u for u in self._users.values() if u.email == email), None)

    def next_id(self) -> int:
        with self._lock:
            user_id = self._next_id
            self._next_id += 1
        return user_id

    def insert(self, user: UserRecord) -> None:
        with self._lock:
            self._users[user.id] = user

    def delete(self, user_id: int) -> bool:
        with self._lock:
            return self._users.pop(user_id, None) is not None

    def list(self) -> List[UserRecord]:
        with self._lock:
            users = list(self._users.values())
        return sorted(users, key=lambda u: u.id)

    def count(self) -> int:
        with self._lock:
            return len(self._users)


class CredentialStore:
    """Registration, lookup, authentication and deletion of accounts."""

    def __init__(
        self,
        repository: UserRepository,
        hasher: PasswordHasher,
        first_user_is_admin: bool = True,
    ):
        self.repository = repository
        self.hasher = hasher
        self.first_user_is_admin = first_user_is_admin
        self._lock = threading.Lock()

    def register(self, email: str, password: str, is_admin: Optional[bool] = None) -> UserRecord:
        """
        Create a new account.

        - Email must be unique (case-sensitive exact match).
        - Password is stored only as a bcrypt hash.
        - Without an explicit ``is_admin``, the first account in an empty
          store becomes admin when ``first_user_is_admin`` is on.
        """
        if not email or not password:
            raise ValidationError("Email and password are required.")

        # Hash outside the lock; bcrypt is the slow part
        password_hash = self.hasher.hash(password)

        with self._lock:
            if self.repository.find_by_email(email) is not None:
                raise DuplicateEmailError(email)
            if is_admin is None:
                is_admin = self.first_user_is_admin and self.repository.count() == 0
            user = UserRecord(
                id=self.repository.next_id(),
                email=email,
                password_hash=password_hash,
                is_admin=is_admin,
            )
            self.repository.insert(user)

        logger.info("User registered", user_id=user.id, is_admin=user.is_admin)
        return user

    def seed_admin(self, email: str, password: str) -> Optional[UserRecord]:
        """Create a bootstrap admin if the store is still empty."""
        if self.repository.count() > 0:
            return None
        user = self.register(email, password, is_admin=True)
        logger.info("Seeded admin account", user_id=user.id)
        return user

    def authenticate(self, email: str, password: str) -> Optional[UserRecord]:
        """Return the user if credentials are valid, else None."""
        user = self.repository.find_by_email(email)
        if user is None:
            self.hasher.dummy_verify(password)
            return None
        if not self.hasher.verify(password, user.password_hash):
            return None
        return user

    def find_by_email(self, email: str) -> Optional[UserRecord]:
        return self.repository.find_by_email(email)

    def find_by_id(self, user_id: int) -> Optional[UserRecord]:
        return self.repository.get(user_id)

    def delete(self, user_id: int) -> bool:
        with self._lock:
            return self.repository.delete(user_id)

    def delete_as(self, actor_id: int, target_id: int) -> None:
        """Admin deletion. An admin can never delete their own account."""
        if actor_id == target_id:
            raise ValidationError("Admins cannot delete their own account.")
        if not self.delete(target_id):
            raise NotFoundError("User not found.")
        logger.info("User deleted", user_id=target_id, deleted_by=actor_id)

    def list_all(self) -> List[UserPublic]:
        return [UserPublic.from_record(u) for u in self.repository.list()]
