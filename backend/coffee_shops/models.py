from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, StrictBool, field_validator
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    """Serializes snake_case attributes as camelCase JSON keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _split_list(value: object) -> object:
    """Accept either a JSON array or a comma-separated string."""
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    return value


# ── Stored records ───────────────────────────────────────────────────────


class User(BaseModel):
    id: int
    username: str
    password_hash: str


class Review(_CamelModel):
    id: int
    coffee_shop_id: int
    author_name: str
    rating: float
    comment: str
    date: datetime


class Favorite(_CamelModel):
    id: int
    user_id: int
    coffee_shop_id: int


class CoffeeShop(_CamelModel):
    id: int
    name: str
    address: str
    latitude: float | None = None
    longitude: float | None = None
    image_url: str
    rating: float = 0.0
    review_count: int = 0
    is_open: bool = False
    opening_time: str = ""
    closing_time: str = ""
    weekday_hours: str = ""
    weekend_hours: str = ""
    phone: str | None = None
    website: str | None = None
    has_wifi: bool = False
    description: str = ""
    tags: list[str] = Field(default_factory=list)
    popular_items: list[str] | None = None
    distance: float = 0.0


class EnrichedCoffeeShop(CoffeeShop):
    reviews: list[Review] = Field(default_factory=list)
    is_favorite: bool = False


# ── Request bodies ───────────────────────────────────────────────────────


class CoffeeShopCreate(_CamelModel):
    name: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)
    latitude: float | None = Field(default=None, ge=-90.0, le=90.0)
    longitude: float | None = Field(default=None, ge=-180.0, le=180.0)
    image_url: str | None = None
    is_open: bool = False
    opening_time: str = ""
    closing_time: str = ""
    weekday_hours: str = ""
    weekend_hours: str = ""
    phone: str | None = None
    website: str | None = None
    has_wifi: bool = False
    description: str = ""
    tags: list[str] = Field(default_factory=list)
    popular_items: list[str] | None = None

    @field_validator("tags", "popular_items", mode="before")
    @classmethod
    def _comma_separated(cls, value: object) -> object:
        return _split_list(value)


class ReviewCreate(_CamelModel):
    author_name: str
    rating: float = Field(..., allow_inf_nan=False)
    comment: str


class FavoriteToggle(_CamelModel):
    is_favorite: StrictBool


# ── Search ───────────────────────────────────────────────────────────────


class SearchParams(BaseModel):
    query: str = ""
    filter: str = ""
    distance: float = 5.0
    rating: float = 0.0
    types: list[str] = Field(default_factory=list)
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1)


class SearchResponse(_CamelModel):
    shops: list[EnrichedCoffeeShop]
    has_more: bool


class FavoriteToggleResponse(BaseModel):
    success: bool = True


class MapsKeyResponse(BaseModel):
    key: str
