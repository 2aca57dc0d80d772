from fastapi import Depends, Request

from waitlist_api.services.registration_service import RegistrationService
from waitlist_api.storage.base import WaitlistStore


def get_store(request: Request) -> WaitlistStore:
    """Store owned by the running application (see ``create_app``)."""
    return request.app.state.store


def get_registration_service(store: WaitlistStore = Depends(get_store)) -> RegistrationService:
    return RegistrationService(store)
