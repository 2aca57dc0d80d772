from fastapi import APIRouter
from waitlist_api.api.endpoints import waitlist

api_router = APIRouter()

api_router.include_router(waitlist.router)
