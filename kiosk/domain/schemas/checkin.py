"""Pydantic schemas for the CheckIn domain."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class Profile(str, Enum):
    CASAL = "CASAL"
    SOLTEIRO = "SOLTEIRO"


class CheckInCreate(BaseModel):
    # Presence is checked by the service so a missing field is a 400, not a 422
    name: Optional[str] = None
    whatsapp: Optional[str] = None
    profile: Optional[str] = None


class CheckInRead(BaseModel):
    id: int
    name: str
    whatsapp: str
    profile: str
    created_at: str

    model_config = {"from_attributes": True}


class CheckInCreated(BaseModel):
    success: bool = True
    id: int
    created_at: str


class ClearResult(BaseModel):
    success: bool = True
    count: int
