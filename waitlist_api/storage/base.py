from abc import ABC, abstractmethod
from typing import Optional

from waitlist_api.schemas.user import UserCreate, UserRead
from waitlist_api.schemas.waitlist import WaitlistEntryCreate, WaitlistEntryRead


class WaitlistStore(ABC):
    """Owns waitlist entries and users.

    Implementations guarantee that checking an email and inserting it happen
    as one atomic step, so concurrent signups with the same address yield a
    single entry. Misses are returned as ``None``; a taken email raises
    :class:`~waitlist_api.core.exceptions.DuplicateEmailError` and any other
    storage failure raises
    :class:`~waitlist_api.core.exceptions.DatabaseError`.
    """

    def init_schema(self) -> None:
        """Prepare the backend for use. Safe to call more than once."""

    @abstractmethod
    def create_entry(self, entry: WaitlistEntryCreate) -> WaitlistEntryRead:
        ...

    @abstractmethod
    def get_entry_by_email(self, email: str) -> Optional[WaitlistEntryRead]:
        ...

    @abstractmethod
    def count_entries(self) -> int:
        ...

    @abstractmethod
    def get_user(self, user_id: int) -> Optional[UserRead]:
        ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[UserRead]:
        ...

    @abstractmethod
    def create_user(self, user: UserCreate) -> UserRead:
        ...
