from waitlist_api.core.config import Settings
from waitlist_api.core.database import create_db_engine
from waitlist_api.storage.base import WaitlistStore
from waitlist_api.storage.memory import InMemoryWaitlistStore
from waitlist_api.storage.sql import SQLWaitlistStore


def create_store(config: Settings) -> WaitlistStore:
    """Build the store selected by ``STORE_BACKEND``."""
    backend = config.STORE_BACKEND.lower()
    if backend == "memory":
        return InMemoryWaitlistStore(default_source=config.DEFAULT_SOURCE)
    if backend == "sql":
        engine = create_db_engine(config.DATABASE_URL)
        return SQLWaitlistStore(engine, default_source=config.DEFAULT_SOURCE)
    raise ValueError(f"Unknown STORE_BACKEND: {config.STORE_BACKEND!r}")


__all__ = [
    "WaitlistStore",
    "InMemoryWaitlistStore",
    "SQLWaitlistStore",
    "create_store",
]
