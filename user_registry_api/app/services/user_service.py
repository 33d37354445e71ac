"""
Business logic for users.

``UserStore`` describes the operations the HTTP layer relies on and
``InMemoryUserStore`` implements them over a process-local dictionary
keyed by user id.  Nothing is persisted; the data lives as long as the
process.  Every operation holds a single lock so uniqueness checks and
the following write happen atomically.
"""

import logging
import threading
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional

from ..schemas.user import User

logger = logging.getLogger(__name__)


class UserStoreError(ValueError):
    """Base class for errors raised by a user store."""

    message = "user store error"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.message)


class UserExistsError(UserStoreError):
    message = "user already exists"


class UserNameExistsError(UserStoreError):
    message = "user with this name already exists"


class FieldRequiredError(UserStoreError):
    message = "user fields cannot be empty"


class UserNotFoundError(UserStoreError):
    message = "user not found"


def seed_users() -> List[User]:
    """Return the fixture users loaded at application start."""
    return [
        User(id="1", name="Mario", age=38),
        User(id="2", name="Luigi", age=35),
        User(id="3", name="Peach", age=37),
        User(id="4", name="Toad", age=73),
    ]


class UserStore(ABC):
    """Operations over a keyed collection of user records."""

    @abstractmethod
    def list_users(self) -> List[User]:
        """Return all users, in no particular order."""

    @abstractmethod
    def get_user_by_id(self, user_id: str) -> Optional[User]:
        """Return the user stored under ``user_id`` or ``None``."""

    @abstractmethod
    def create_user(self, user: User) -> User:
        """Insert a new user and return it as stored."""

    @abstractmethod
    def upsert_user(self, user: Optional[User]) -> User:
        """Insert or replace the user stored under ``user.id``."""

    @abstractmethod
    def delete_user_by_id(self, user_id: str) -> None:
        """Remove the user stored under ``user_id``."""


class InMemoryUserStore(UserStore):
    """Dictionary-backed ``UserStore``.

    Records are copied on the way in and on the way out, so callers can
    never mutate stored state through a returned object.
    """

    def __init__(self, users: Optional[Iterable[User]] = None) -> None:
        self._lock = threading.Lock()
        self._users: Dict[str, User] = {}
        for user in users or ():
            self._users[user.id] = user.model_copy()

    def list_users(self) -> List[User]:
        with self._lock:
            return [user.model_copy() for user in self._users.values()]

    def get_user_by_id(self, user_id: str) -> Optional[User]:
        with self._lock:
            user = self._users.get(user_id)
            return user.model_copy() if user is not None else None

    def create_user(self, user: User) -> User:
        """Insert ``user`` if neither its name nor its id are taken.

        The name check runs first: a user colliding on both name and id
        raises ``UserNameExistsError``.  A user without an id gets the
        next free numeric id.
        """
        if not user.name:
            raise FieldRequiredError()
        with self._lock:
            if self._name_taken(user.name):
                raise UserNameExistsError()
            if user.id and user.id in self._users:
                raise UserExistsError()
            stored = user.model_copy()
            if not stored.id:
                stored.id = self._next_id()
            self._users[stored.id] = stored
        logger.info("Created user %s (%s)", stored.id, stored.name)
        return stored.model_copy()

    def upsert_user(self, user: Optional[User]) -> User:
        """Create or replace the user keyed by ``user.id``.

        Name uniqueness is only enforced when the id is new.  Updating an
        existing id may take a name already used by another user.
        """
        if user is None or not user.id or not user.name:
            raise FieldRequiredError()
        with self._lock:
            exists = user.id in self._users
            if not exists and self._name_taken(user.name, exclude_id=user.id):
                raise UserNameExistsError()
            stored = user.model_copy()
            self._users[stored.id] = stored
        logger.info("%s user %s (%s)", "Updated" if exists else "Created", stored.id, stored.name)
        return stored.model_copy()

    def delete_user_by_id(self, user_id: str) -> None:
        with self._lock:
            if user_id not in self._users:
                raise UserNotFoundError()
            del self._users[user_id]
        logger.info("Deleted user %s", user_id)

    # Callers must hold ``self._lock``.

    def _name_taken(self, name: str, exclude_id: Optional[str] = None) -> bool:
        return any(
            existing.name == name
            for user_id, existing in self._users.items()
            if user_id != exclude_id
        )

    def _next_id(self) -> str:
        numeric = [int(user_id) for user_id in self._users if user_id.isdecimal()]
        return str(max(numeric, default=0) + 1)
