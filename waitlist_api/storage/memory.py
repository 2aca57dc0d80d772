import threading
from typing import Dict, Optional

from waitlist_api.core.config import settings
from waitlist_api.core.exceptions import DuplicateEmailError, DuplicateUsernameError
from waitlist_api.core.types import utcnow
from waitlist_api.schemas.user import UserCreate, UserRead
from waitlist_api.schemas.waitlist import WaitlistEntryCreate, WaitlistEntryRead
from waitlist_api.storage.base import WaitlistStore


class InMemoryWaitlistStore(WaitlistStore):
    """Process-local store. State is lost when the process exits."""

    def __init__(self, default_source: str = settings.DEFAULT_SOURCE):
        self.default_source = default_source
        # One lock covers the entry map, the email index and both id counters
        self._lock = threading.Lock()
        self._entries: Dict[int, WaitlistEntryRead] = {}
        self._email_index: Dict[str, int] = {}
        self._users: Dict[int, UserRead] = {}
        self._next_entry_id = 1
        self._next_user_id = 1

    def create_entry(self, entry: WaitlistEntryCreate) -> WaitlistEntryRead:
        with self._lock:
            if entry.email in self._email_index:
                raise DuplicateEmailError(entry.email)

            record = WaitlistEntryRead(
                id=self._next_entry_id,
                email=entry.email,
                name=entry.name,
                message=entry.message or None,
                source=entry.source or self.default_source,
                created_at=utcnow(),
            )
            self._next_entry_id += 1
            self._entries[record.id] = record
            self._email_index[record.email] = record.id
            return record

    def get_entry_by_email(self, email: str) -> Optional[WaitlistEntryRead]:
        with self._lock:
            entry_id = self._email_index.get(email)
            return self._entries.get(entry_id) if entry_id is not None else None

    def count_entries(self) -> int:
        with self._lock:
            return len(self._entries)

    def get_user(self, user_id: int) -> Optional[UserRead]:
        with self._lock:
            return self._users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[UserRead]:
        with self._lock:
            return next((u for u in self._users.values() if u.username == username), None)

    def create_user(self, user: UserCreate) -> UserRead:
        with self._lock:
            if any(u.username == user.username for u in self._users.values()):
                raise DuplicateUsernameError(user.username)
            record = UserRead(id=self._next_user_id, username=user.username, password=user.password)
            self._next_user_id += 1
            self._users[record.id] = record
            return record
