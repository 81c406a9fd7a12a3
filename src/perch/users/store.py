"""In-memory user storage (thread-safe for free-threading)."""

import threading
from collections.abc import Iterable
from dataclasses import dataclass, replace
from datetime import UTC, datetime


@dataclass(frozen=True, slots=True)
class User:
    id: str
    name: str
    email: str
    last_login: datetime | None = None

    def to_dict(self) -> dict[str, str | None]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "last_login": self.last_login.isoformat() if self.last_login else None,
        }


class UserStore:
    """Users keyed by id. Records are frozen; updates swap the record."""

    __slots__ = ("_lock", "_users")

    def __init__(self, users: Iterable[User] = ()) -> None:
        self._lock = threading.Lock()
        self._users: dict[str, User] = {user.id: user for user in users}

    def get(self, user_id: str) -> User | None:
        with self._lock:
            return self._users.get(user_id)

    def put(self, user: User) -> None:
        with self._lock:
            self._users[user.id] = user

    def update(self, user_id: str, **fields: str) -> User | None:
        """Replace the given fields of a user. Returns ``None`` if unknown."""
        with self._lock:
            user = self._users.get(user_id)
            if user is None:
                return None
            updated = replace(user, **fields)
            self._users[user_id] = updated
            return updated

    def record_login(self, user_id: str) -> User | None:
        """Stamp ``last_login`` with the current UTC time."""
        with self._lock:
            user = self._users.get(user_id)
            if user is None:
                return None
            updated = replace(user, last_login=datetime.now(UTC))
            self._users[user_id] = updated
            return updated

    def __len__(self) -> int:
        with self._lock:
            return len(self._users)
