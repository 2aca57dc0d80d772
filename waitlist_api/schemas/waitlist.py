from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, validator
from pydantic.alias_generators import to_camel
from typing import Optional
from datetime import datetime


class WaitlistEntryCreate(BaseModel):
    email: str
    name: Optional[str] = None
    message: Optional[str] = None
    source: Optional[str] = None


class WaitlistJoinRequest(WaitlistEntryCreate):
    """Public signup payload.

    The address is checked for syntax only and kept exactly as submitted, so
    lookups stay case-sensitive. Surrounding whitespace and display-name forms
    such as ``Name <addr>`` are rejected rather than unwrapped.
    """

    @validator('email')
    def email_must_be_valid(cls, v):
        try:
            validate_email(v, check_deliverability=False)
        except EmailNotValidError as e:
            raise ValueError(str(e)) from e
        return v


class WaitlistEntryRead(BaseModel):
    id: int
    email: str
    name: Optional[str] = None
    message: Optional[str] = None
    source: str
    created_at: datetime

    class Config:
        from_attributes = True


class _CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True


class MessageResponse(_CamelModel):
    message: str


class WaitlistJoinResponse(_CamelModel):
    message: str
    position: int
    founders_spot_remaining: int


class WaitlistStatsResponse(_CamelModel):
    total_signups: int
    founders_spot_remaining: int
