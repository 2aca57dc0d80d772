import pytest

from waitlist_api.core.database import create_db_engine
from waitlist_api.core.exceptions import DatabaseError
from waitlist_api.main import create_app
from waitlist_api.storage import InMemoryWaitlistStore, SQLWaitlistStore


class BrokenStore(InMemoryWaitlistStore):
    """Store whose every waitlist operation fails like an unreachable database."""

    def create_entry(self, entry):
        raise DatabaseError("Database operation failed", details="connection refused")

    def get_entry_by_email(self, email):
        raise DatabaseError("Database operation failed", details="connection refused")

    def count_entries(self):
        raise DatabaseError("Database operation failed", details="connection refused")


@pytest.fixture
def memory_store():
    return InMemoryWaitlistStore()


@pytest.fixture
def sql_store():
    engine = create_db_engine("sqlite://")
    store = SQLWaitlistStore(engine)
    store.init_schema()
    yield store
    engine.dispose()


@pytest.fixture
def file_sql_store(tmp_path):
    engine = create_db_engine(f"sqlite:///{(tmp_path / 'waitlist.db').as_posix()}")
    store = SQLWaitlistStore(engine)
    store.init_schema()
    yield store
    engine.dispose()


@pytest.fixture(params=["memory", "sql"])
def store(request):
    return request.getfixturevalue(f"{request.param}_store")


@pytest.fixture
def app(store):
    return create_app(store=store)


@pytest.fixture
def broken_store():
    return BrokenStore()


@pytest.fixture
def broken_app(broken_store):
    return create_app(store=broken_store)
