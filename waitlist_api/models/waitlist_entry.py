from sqlalchemy import Column, Integer, String, Text, UniqueConstraint
from sqlalchemy.sql import func
from waitlist_api.core.database import Base
from waitlist_api.core.types import UTCDateTime, utcnow


class WaitlistEntry(Base):
    __tablename__ = "waitlist_entries"
    id = Column(Integer, primary_key=True)
    email = Column(String, nullable=False, index=True)
    name = Column(String, nullable=True)
    message = Column(Text, nullable=True)
    source = Column(String, nullable=False, default="landing")
    created_at = Column(UTCDateTime(), nullable=False, default=utcnow, server_default=func.now())

    __table_args__ = (
        UniqueConstraint('email', name='uq_waitlist_email'),
        # Ids are never handed out twice, even if rows are removed by hand
        {"sqlite_autoincrement": True},
    )
