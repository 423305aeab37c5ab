"""Pydantic schemas for users and auth.

Learn: UserRecord is the persisted shape (one entry in users.json).
The request/response models below it are the HTTP contract; the
password hash never appears in a response model.
"""

from typing import Optional, Union

from pydantic import BaseModel, Field, field_validator


# Goals keep the JSON type they were written with: 170 stays 170, 165.5 stays 165.5.
Number = Union[int, float]


class UserRecord(BaseModel):
    name: str
    email: str
    password_hash: str
    goal: Optional[Number] = None


def normalize_email(email: str) -> str:
    return email.strip().lower()


class SignupRequest(BaseModel):
    name: str = Field(min_length=1)
    email: str = Field(min_length=3)
    password: str = Field(min_length=1)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v

    @field_validator("email")
    @classmethod
    def email_shape(cls, v: str) -> str:
        v = normalize_email(v)
        if "@" not in v:
            raise ValueError("email must contain '@'")
        return v


class LoginRequest(BaseModel):
    email: str
    password: str


class TokenResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    expires_in: int


class UserRead(BaseModel):
    name: str
    email: str


class SignupResponse(BaseModel):
    message: str = "User registered successfully."
    user: UserRead


class ProfileRead(BaseModel):
    name: str
    email: str
    goal: Number
