from __future__ import annotations

import threading
from typing import Dict, Optional

from .contracts import NewUser, User, UserStorePort
from .errors import EmailAlreadyExistsError


class InMemoryUserStore(UserStorePort):
    """
    Process-local user table keyed by email, ids assigned from 1 upward.
    Check-and-insert happens under one lock, which is what keeps emails unique.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._users_by_email: Dict[str, User] = {}
        self._next_id = 1

    def find_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            return self._users_by_email.get(email)

    def create(self, fields: NewUser) -> User:
        with self._lock:
            if fields.email in self._users_by_email:
                raise EmailAlreadyExistsError(fields.email)
            user = User(id=self._next_id, **fields.model_dump())
            self._users_by_email[user.email] = user
            self._next_id += 1
            return user

    def __len__(self) -> int:
        with self._lock:
            return len(self._users_by_email)
