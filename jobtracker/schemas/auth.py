"""
Auth-related Pydantic schemas.
"""

from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, examples=["Jane Doe"])
    email: EmailStr = Field(..., examples=["jane@example.com"])
    password: str = Field(..., min_length=6, examples=["password123"])


class UserOut(BaseModel):
    id: str
    name: str
    email: str


class RegisterResponse(BaseModel):
    user: UserOut
    token: str


class LoginRequest(BaseModel):
    email: EmailStr = Field(..., examples=["jane@example.com"])
    password: str = Field(..., examples=["password123"])


class LoginResponse(BaseModel):
    token: str
    refreshToken: str


class ForgotPasswordRequest(BaseModel):
    email: EmailStr = Field(..., examples=["jane@example.com"])


class ForgotPasswordResponse(BaseModel):
    message: str
    resetToken: Optional[str] = None


class ResetPasswordRequest(BaseModel):
    token: str
    newPassword: str = Field(..., min_length=6)


class MessageResponse(BaseModel):
    message: str


__all__ = [
    "RegisterRequest",
    "UserOut",
    "RegisterResponse",
    "LoginRequest",
    "LoginResponse",
    "ForgotPasswordRequest",
    "ForgotPasswordResponse",
    "ResetPasswordRequest",
    "MessageResponse",
]
