import logging
from dataclasses import dataclass, field
from typing import Any, Dict

from pydantic import ValidationError as PydanticValidationError

from waitlist_api.core.config import settings
from waitlist_api.core.exceptions import DuplicateEmailError, ValidationError
from waitlist_api.schemas.waitlist import (
    MessageResponse,
    WaitlistJoinRequest,
    WaitlistJoinResponse,
    WaitlistStatsResponse,
)
from waitlist_api.storage.base import WaitlistStore
from waitlist_api.utils.audit import audit

logger = logging.getLogger(__name__)

JOINED_MESSAGE = "Successfully joined the waitlist!"
INVALID_EMAIL_MESSAGE = "Invalid email address. Please enter a valid email."
ALREADY_REGISTERED_MESSAGE = "You're already on our waitlist! We'll be in touch soon."
SIGNUP_FAILED_MESSAGE = "Something went wrong. Please try again later."
STATS_FAILED_MESSAGE = "Failed to fetch stats"


@dataclass
class ServiceResult:
    status_code: int
    body: Dict[str, Any] = field(default_factory=dict)


def _message(status_code: int, message: str) -> ServiceResult:
    return ServiceResult(status_code, MessageResponse(message=message).model_dump(by_alias=True))


class RegistrationService:
    """Maps waitlist requests onto the store and store outcomes onto responses.

    This is the only place where store errors become status/message pairs.
    Holds no per-request state, so one instance can serve concurrent callers.
    """

    def __init__(self, store: WaitlistStore, founders_spots: int = settings.FOUNDERS_SPOTS):
        self.store = store
        self.founders_spots = founders_spots

    def founders_spot_remaining(self, total: int) -> int:
        return max(0, self.founders_spots - total)

    def parse_request(self, raw_input: Any) -> WaitlistJoinRequest:
        try:
            return WaitlistJoinRequest.model_validate(raw_input)
        except PydanticValidationError as e:
            raise ValidationError(INVALID_EMAIL_MESSAGE, details=str(e), error_code="invalid_email") from e

    def register(self, raw_input: Any) -> ServiceResult:
        try:
            data = self.parse_request(raw_input)
        except ValidationError as e:
            logger.debug("Rejected waitlist signup: %s", e.details)
            return _message(400, e.message)

        try:
            if self.store.get_entry_by_email(data.email) is not None:
                audit("WAITLIST_DUPLICATE", email=data.email)
                return _message(409, ALREADY_REGISTERED_MESSAGE)

            entry = self.store.create_entry(data)
            position = self.store.count_entries()
        except DuplicateEmailError:
            # Lost a race with a concurrent signup for the same address
            audit("WAITLIST_DUPLICATE", email=data.email, race=True)
            return _message(409, ALREADY_REGISTERED_MESSAGE)
        except Exception:
            logger.exception("Waitlist signup error")
            return _message(500, SIGNUP_FAILED_MESSAGE)

        audit("WAITLIST_JOINED", email=data.email, entry_id=entry.id, position=position, source=entry.source)
        body = WaitlistJoinResponse(
            message=JOINED_MESSAGE,
            position=position,
            founders_spot_remaining=self.founders_spot_remaining(position),
        )
        return ServiceResult(201, body.model_dump(by_alias=True))

    def get_stats(self) -> ServiceResult:
        try:
            total = self.store.count_entries()
        except Exception:
            logger.exception("Waitlist stats error")
            return _message(500, STATS_FAILED_MESSAGE)

        body = WaitlistStatsResponse(
            total_signups=total,
            founders_spot_remaining=self.founders_spot_remaining(total),
        )
        return ServiceResult(200, body.model_dump(by_alias=True))
