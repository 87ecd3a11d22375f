"""Category record: the display and filter key for products."""

from pydantic import BaseModel, ConfigDict, Field


class Category(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str = Field(min_length=1)
    image: str
