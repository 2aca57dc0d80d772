from sqlalchemy import Column, Integer, String, UniqueConstraint

from waitlist_api.core.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    username = Column(String, nullable=False, index=True)
    # Opaque credential, stored as provided
    password = Column(String, nullable=False)

    __table_args__ = (
        UniqueConstraint('username', name='uq_users_username'),
        {"sqlite_autoincrement": True},
    )
