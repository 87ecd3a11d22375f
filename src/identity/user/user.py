"""User record."""

from pydantic import BaseModel, ConfigDict, Field

PROFILE_FIELDS = ("name", "email", "address", "city", "state", "zip_code")
CREDENTIAL_FIELDS = ("password_hash",)


class User(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    username: str = Field(min_length=1, max_length=50)
    password_hash: str = Field(min_length=1)
    name: str | None = None
    email: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
