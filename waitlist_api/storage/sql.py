import logging
import threading
from contextlib import contextmanager, nullcontext
from typing import Iterator, Optional

from sqlalchemy import func
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from waitlist_api.core.config import settings
from waitlist_api.core.database import Base, create_session_factory
from waitlist_api.core.exceptions import DatabaseError, DuplicateEmailError, DuplicateUsernameError
from waitlist_api.models.user import User
from waitlist_api.models.waitlist_entry import WaitlistEntry
from waitlist_api.schemas.user import UserCreate, UserRead
from waitlist_api.schemas.waitlist import WaitlistEntryCreate, WaitlistEntryRead
from waitlist_api.storage.base import WaitlistStore

logger = logging.getLogger(__name__)


def _is_unique_violation(error: IntegrityError, constraint: str, column: str) -> bool:
    """True when ``error`` was raised by the named unique constraint.

    PostgreSQL reports the constraint name; SQLite only reports the column,
    as ``UNIQUE constraint failed: table.column``.
    """
    detail = str(error.orig)
    return constraint in detail or f"UNIQUE constraint failed: {column}" in detail


class SQLWaitlistStore(WaitlistStore):
    """SQLAlchemy-backed store.

    Email uniqueness is enforced by the ``uq_waitlist_email`` constraint rather
    than by a lookup, so two writers racing on the same address cannot both
    succeed: the loser's commit fails with an ``IntegrityError`` which is
    reported as :class:`DuplicateEmailError`.
    """

    def __init__(self, engine: Engine, default_source: str = settings.DEFAULT_SOURCE):
        self.engine = engine
        self.default_source = default_source
        self.SessionLocal = create_session_factory(engine)
        # A StaticPool hands every thread the same DBAPI connection, so sessions
        # must not overlap or their transactions interleave
        self._lock = threading.Lock() if isinstance(engine.pool, StaticPool) else nullcontext()

    @contextmanager
    def _session(self) -> Iterator[Session]:
        with self._lock:
            db = self.SessionLocal()
            try:
                yield db
            except SQLAlchemyError as e:
                db.rollback()
                raise DatabaseError("Database operation failed", details=str(e)) from e
            finally:
                db.close()

    def init_schema(self) -> None:
        Base.metadata.create_all(bind=self.engine)
        logger.info("Database tables ready on %s", self.engine.url.render_as_string(hide_password=True))

    def create_entry(self, entry: WaitlistEntryCreate) -> WaitlistEntryRead:
        with self._session() as db:
            row = WaitlistEntry(
                email=entry.email,
                name=entry.name,
                message=entry.message or None,
                source=entry.source or self.default_source,
            )
            db.add(row)
            try:
                db.commit()
            except IntegrityError as e:
                db.rollback()
                if _is_unique_violation(e, "uq_waitlist_email", "waitlist_entries.email"):
                    raise DuplicateEmailError(entry.email) from e
                raise DatabaseError("Could not store waitlist entry", details=str(e)) from e
            db.refresh(row)
            return WaitlistEntryRead.model_validate(row)

    def get_entry_by_email(self, email: str) -> Optional[WaitlistEntryRead]:
        with self._session() as db:
            row = db.query(WaitlistEntry).filter(WaitlistEntry.email == email).first()
            return WaitlistEntryRead.model_validate(row) if row else None

    def count_entries(self) -> int:
        with self._session() as db:
            return db.query(func.count(WaitlistEntry.id)).scalar() or 0

    def get_user(self, user_id: int) -> Optional[UserRead]:
        with self._session() as db:
            row = db.get(User, user_id)
            return UserRead.model_validate(row) if row else None

    def get_user_by_username(self, username: str) -> Optional[UserRead]:
        with self._session() as db:
            row = db.query(User).filter(User.username == username).first()
            return UserRead.model_validate(row) if row else None

    def create_user(self, user: UserCreate) -> UserRead:
        with self._session() as db:
            row = User(username=user.username, password=user.password)
            db.add(row)
            try:
                db.commit()
            except IntegrityError as e:
                db.rollback()
                if _is_unique_violation(e, "uq_users_username", "users.username"):
                    raise DuplicateUsernameError(user.username) from e
                raise DatabaseError("Could not store user", details=str(e)) from e
            db.refresh(row)
            return UserRead.model_validate(row)
