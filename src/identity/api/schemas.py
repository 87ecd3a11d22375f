"""Pydantic request/response schemas for the Identity API."""

from pydantic import BaseModel, Field


class RegisterUserRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "username": "jdoe",
                    "password": "correct horse battery staple",
                    "name": "Jane Doe",
                    "email": "jane@example.com",
                }
            ]
        }
    }

    username: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=1)
    name: str | None = Field(None, max_length=100)
    email: str | None = Field(None, max_length=254)
    address: str | None = Field(None, max_length=255)
    city: str | None = Field(None, max_length=100)
    state: str | None = Field(None, max_length=100)
    zip_code: str | None = Field(None, max_length=20)


class LoginRequest(BaseModel):
    username: str
    password: str


class UpdateProfileRequest(BaseModel):
    model_config = {
        "extra": "forbid",
        "json_schema_extra": {
            "examples": [
                {
                    "address": "456 Oak Avenue",
                    "city": "Springfield",
                    "state": "IL",
                    "zip_code": "62702",
                }
            ]
        },
    }

    name: str | None = Field(None, max_length=100)
    email: str | None = Field(None, max_length=254)
    address: str | None = Field(None, max_length=255)
    city: str | None = Field(None, max_length=100)
    state: str | None = Field(None, max_length=100)
    zip_code: str | None = Field(None, max_length=20)


# --- Response Schemas ---


class UserResponse(BaseModel):
    """A user as seen from outside: credential fields are never part of it."""

    id: int
    username: str
    name: str | None = None
    email: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
