"""Pydantic schemas for admin auth."""

from pydantic import BaseModel


class AdminLoginRequest(BaseModel):
    pin: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
