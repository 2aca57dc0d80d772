import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from waitlist_api.core.exceptions import ValidationError
from waitlist_api.services.registration_service import (
    ALREADY_REGISTERED_MESSAGE,
    INVALID_EMAIL_MESSAGE,
    JOINED_MESSAGE,
    SIGNUP_FAILED_MESSAGE,
    STATS_FAILED_MESSAGE,
    RegistrationService,
)
from waitlist_api.storage import InMemoryWaitlistStore


@pytest.fixture
def service(store):
    return RegistrationService(store)


def test_register_returns_position_and_founders_spots(service):
    result = service.register({"email": "a@example.com"})
    assert result.status_code == 201
    assert result.body == {"message": JOINED_MESSAGE, "position": 1, "foundersSpotRemaining": 999}

    result = service.register({"email": "b@example.com", "name": "Bea", "source": "footer"})
    assert result.status_code == 201
    assert result.body["position"] == 2
    assert result.body["foundersSpotRemaining"] == 998


def test_register_duplicate_is_conflict_without_state_change(service, store):
    service.register({"email": "a@example.com"})
    result = service.register({"email": "a@example.com", "message": "me again"})
    assert result.status_code == 409
    assert result.body == {"message": ALREADY_REGISTERED_MESSAGE}
    assert store.count_entries() == 1
    assert store.get_entry_by_email("a@example.com").message is None


@pytest.mark.parametrize("payload", [
    {"email": "not-an-email"},
    {"email": ""},
    {"email": None},
    {"email": 42},
    {"email": " a@example.com "},
    {"email": "a@example.com "},
    {"email": "Alice <a@example.com>"},
    {"email": '"Bob" <a@example.com>'},
    {"name": "No Email"},
    {},
    None,
    ["a@example.com"],
    "a@example.com",
])
def test_register_rejects_bad_input(service, store, payload):
    result = service.register(payload)
    assert result.status_code == 400
    assert result.body == {"message": INVALID_EMAIL_MESSAGE}
    assert store.count_entries() == 0


def test_parse_request_raises_app_validation_error(service):
    with pytest.raises(ValidationError) as exc:
        service.parse_request({"email": "not-an-email"})
    assert exc.value.error_code == "invalid_email"


def test_register_keeps_email_as_submitted(service, store):
    assert service.register({"email": "Ada@Example.com"}).status_code == 201
    assert store.get_entry_by_email("Ada@Example.com") is not None
    # Different case is a different address
    assert service.register({"email": "ada@example.com"}).status_code == 201


def test_name_is_optional(service):
    assert service.register({"email": "a@example.com"}).status_code == 201
    assert service.register({"email": "b@example.com", "name": ""}).status_code == 201


def test_lost_race_maps_to_conflict():
    class StaleLookupStore(InMemoryWaitlistStore):
        def get_entry_by_email(self, email):
            # Lookup ran before a concurrent insert landed
            return None

    store = StaleLookupStore()
    service = RegistrationService(store)
    assert service.register({"email": "a@example.com"}).status_code == 201

    result = service.register({"email": "a@example.com"})
    assert result.status_code == 409
    assert result.body == {"message": ALREADY_REGISTERED_MESSAGE}
    assert store.count_entries() == 1


def test_store_failure_is_generic_internal_error(broken_store, caplog):
    service = RegistrationService(broken_store)
    with caplog.at_level("ERROR"):
        result = service.register({"email": "a@example.com"})
    assert result.status_code == 500
    assert result.body == {"message": SIGNUP_FAILED_MESSAGE}
    assert "connection refused" not in str(result.body)
    assert "Waitlist signup error" in caplog.text


def test_stats_reflect_count(service):
    assert service.get_stats().body == {"totalSignups": 0, "foundersSpotRemaining": 1000}
    service.register({"email": "a@example.com"})
    service.register({"email": "a@example.com"})
    service.register({"email": "b@example.com"})
    result = service.get_stats()
    assert result.status_code == 200
    assert result.body == {"totalSignups": 2, "foundersSpotRemaining": 998}


def test_founders_spots_floor_at_zero(memory_store):
    service = RegistrationService(memory_store, founders_spots=2)
    positions = [service.register({"email": f"user{i}@example.com"}).body for i in range(3)]
    assert [p["foundersSpotRemaining"] for p in positions] == [1, 0, 0]
    assert service.get_stats().body == {"totalSignups": 3, "foundersSpotRemaining": 0}


def test_stats_failure_is_internal_error(broken_store):
    result = RegistrationService(broken_store).get_stats()
    assert result.status_code == 500
    assert result.body == {"message": STATS_FAILED_MESSAGE}


def test_concurrent_same_email_yields_one_created(memory_store):
    service = RegistrationService(memory_store)
    workers = 8
    barrier = threading.Barrier(workers)

    def attempt():
        barrier.wait()
        return service.register({"email": "race@example.com"}).status_code

    with ThreadPoolExecutor(max_workers=workers) as pool:
        codes = list(pool.map(lambda _: attempt(), range(workers)))
    codes.append(service.register({"email": "race@example.com"}).status_code)

    assert codes.count(201) == 1
    assert codes.count(409) == len(codes) - 1
    assert memory_store.count_entries() == 1


def test_concurrent_registrations_against_sqlite_file(file_sql_store):
    service = RegistrationService(file_sql_store)
    barrier = threading.Barrier(2)

    def attempt():
        barrier.wait()
        return service.register({"email": "race@example.com"}).status_code

    with ThreadPoolExecutor(max_workers=2) as pool:
        codes = sorted(pool.map(lambda _: attempt(), range(2)))

    assert codes == [201, 409]
    assert file_sql_store.count_entries() == 1


def test_one_mailbox_cannot_join_under_wrapped_forms(service, store):
    assert service.register({"email": "a@example.com"}).status_code == 201
    for wrapped in (" a@example.com ", "Alice <a@example.com>", '"Bob" <a@example.com>'):
        assert service.register({"email": wrapped}).status_code == 400
    assert store.count_entries() == 1
