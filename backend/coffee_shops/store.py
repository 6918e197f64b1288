from __future__ import annotations

import itertools
import logging
import random
import threading
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from ..auth.passwords import hash_password
from .config import DEFAULT_STORE_CONFIG, StoreConfig
from .models import (
    CoffeeShop,
    CoffeeShopCreate,
    EnrichedCoffeeShop,
    Favorite,
    Review,
    ReviewCreate,
    User,
)
from .seed import (
    COFFEE_SHOP_IMAGES,
    SAMPLE_FAVORITES,
    SAMPLE_REVIEWS,
    SAMPLE_SHOPS,
    SAMPLE_USER,
)

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Base class for record store failures."""


class ShopNotFoundError(StoreError):
    def __init__(self, shop_id: int) -> None:
        super().__init__(f"Coffee shop {shop_id} not found")
        self.shop_id = shop_id


class DuplicateUsernameError(StoreError):
    def __init__(self, username: str) -> None:
        super().__init__(f"Username {username!r} is already taken")
        self.username = username


def round_one_decimal(value: float) -> float:
    """Round half away from zero to one decimal place."""
    return float(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def compute_rating(reviews: Iterable[Review]) -> tuple[float, int]:
    """Return ``(rating, review_count)`` for a shop's reviews."""
    ratings = [r.rating for r in reviews]
    if not ratings:
        return 0.0, 0
    return round_one_decimal(sum(ratings) / len(ratings)), len(ratings)


class CoffeeShopStore:
    """
    In-memory record store for users, coffee shops, reviews and favorites.

    Each entity type has its own id sequence starting at 1; ids are never
    reused. All access goes through one re-entrant lock, so a review insert
    and the recompute of its shop's aggregate rating are a single step.
    """

    def __init__(self, config: StoreConfig = DEFAULT_STORE_CONFIG) -> None:
        self.config = config
        self._lock = threading.RLock()
        self._random = random.Random(config.random_seed)

        self._users: dict[int, User] = {}
        self._shops: dict[int, CoffeeShop] = {}
        self._reviews: dict[int, Review] = {}
        self._favorites: dict[tuple[int, int], Favorite] = {}

        self._user_ids = itertools.count(1)
        self._shop_ids = itertools.count(1)
        self._review_ids = itertools.count(1)
        self._favorite_ids = itertools.count(1)

        if config.seed_sample_data:
            self._seed()

    # ── Users ────────────────────────────────────────────────────────────

    def get_user(self, user_id: int) -> User | None:
        with self._lock:
            return self._users.get(user_id)

    def get_user_by_username(self, username: str) -> User | None:
        with self._lock:
            return next(
                (u for u in self._users.values() if u.username == username),
                None,
            )

    def create_user(self, username: str, password: str) -> User:
        password_hash = hash_password(password, rounds=self.config.password_rounds)
        with self._lock:
            if self.get_user_by_username(username) is not None:
                raise DuplicateUsernameError(username)
            user = User(id=next(self._user_ids), username=username, password_hash=password_hash)
            self._users[user.id] = user
        logger.info("Created user %d (%s)", user.id, username)
        return user

    # ── Coffee shops ─────────────────────────────────────────────────────

    def get_coffee_shop(self, shop_id: int) -> CoffeeShop | None:
        with self._lock:
            return self._shops.get(shop_id)

    def list_coffee_shops(self) -> list[CoffeeShop]:
        with self._lock:
            return list(self._shops.values())

    def add_coffee_shop(self, payload: CoffeeShopCreate) -> CoffeeShop:
        data = payload.model_dump()
        with self._lock:
            if data["latitude"] is None or data["longitude"] is None:
                data["latitude"], data["longitude"] = self._random_coordinates()
            if not data["image_url"]:
                data["image_url"] = self._random.choice(COFFEE_SHOP_IMAGES)
            shop = CoffeeShop(
                **data,
                id=next(self._shop_ids),
                rating=0.0,
                review_count=0,
                distance=self._random_distance(),
            )
            self._shops[shop.id] = shop
        logger.info("Added coffee shop %d (%s)", shop.id, shop.name)
        return shop

    # ── Reviews ──────────────────────────────────────────────────────────

    def get_review(self, review_id: int) -> Review | None:
        with self._lock:
            return self._reviews.get(review_id)

    def get_reviews_for_shop(self, shop_id: int) -> list[Review]:
        with self._lock:
            return [r for r in self._reviews.values() if r.coffee_shop_id == shop_id]

    def add_review(self, shop_id: int, payload: ReviewCreate) -> Review:
        """Store a review and refresh the shop's rating and review count."""
        with self._lock:
            shop = self._shops.get(shop_id)
            if shop is None:
                raise ShopNotFoundError(shop_id)

            review = Review(
                id=next(self._review_ids),
                coffee_shop_id=shop_id,
                author_name=payload.author_name,
                rating=payload.rating,
                comment=payload.comment,
                date=datetime.now(timezone.utc),
            )
            self._reviews[review.id] = review

            rating, count = compute_rating(self.get_reviews_for_shop(shop_id))
            self._shops[shop_id] = shop.model_copy(
                update={"rating": rating, "review_count": count}
            )
        logger.info(
            "Added review %d for coffee shop %d (rating now %.1f over %d reviews)",
            review.id, shop_id, rating, count,
        )
        return review

    # ── Favorites ────────────────────────────────────────────────────────

    def add_favorite(self, user_id: int, shop_id: int) -> Favorite:
        key = (user_id, shop_id)
        with self._lock:
            favorite = self._favorites.get(key)
            if favorite is None:
                favorite = Favorite(
                    id=next(self._favorite_ids), user_id=user_id, coffee_shop_id=shop_id,
                )
                self._favorites[key] = favorite
                logger.info("User %d favorited coffee shop %d", user_id, shop_id)
            return favorite

    def remove_favorite(self, user_id: int, shop_id: int) -> None:
        with self._lock:
            if self._favorites.pop((user_id, shop_id), None) is not None:
                logger.info("User %d unfavorited coffee shop %d", user_id, shop_id)

    def is_favorite(self, user_id: int, shop_id: int) -> bool:
        with self._lock:
            return (user_id, shop_id) in self._favorites

    def get_favorite_coffee_shops(self, user_id: int) -> list[EnrichedCoffeeShop]:
        with self._lock:
            shops = [
                self._shops[fav.coffee_shop_id]
                for (uid, _), fav in self._favorites.items()
                if uid == user_id and fav.coffee_shop_id in self._shops
            ]
            return [self.enrich(shop, user_id) for shop in shops]

    # ── Enrichment ───────────────────────────────────────────────────────

    def enrich(self, shop: CoffeeShop, user_id: int) -> EnrichedCoffeeShop:
        """Attach the shop's reviews and the user's favorite flag."""
        with self._lock:
            return EnrichedCoffeeShop(
                **shop.model_dump(),
                reviews=self.get_reviews_for_shop(shop.id),
                is_favorite=self.is_favorite(user_id, shop.id),
            )

    # ── Internals ────────────────────────────────────────────────────────

    def _random_distance(self) -> float:
        return round_one_decimal(self._random.random() * 3 + 0.5)

    def _random_coordinates(self) -> tuple[float, float]:
        lat, lng = self.config.map_center
        return (
            round(lat + self._random.uniform(-0.05, 0.05), 6),
            round(lng + self._random.uniform(-0.05, 0.05), 6),
        )

    def _seed(self) -> None:
        """Load the sample user, shops, reviews and favorites."""
        self.create_user(SAMPLE_USER["username"], SAMPLE_USER["password"])

        for shop_data in SAMPLE_SHOPS:
            shop = CoffeeShop(
                **shop_data,
                id=next(self._shop_ids),
                distance=self._random_distance(),
            )
            self._shops[shop.id] = shop

        for review_data in SAMPLE_REVIEWS:
            self.add_review(
                review_data["coffee_shop_id"],
                ReviewCreate(
                    author_name=review_data["author_name"],
                    rating=review_data["rating"],
                    comment=review_data["comment"],
                ),
            )

        for user_id, shop_id in SAMPLE_FAVORITES:
            self.add_favorite(user_id, shop_id)

        logger.info(
            "Seeded store with %d users, %d shops, %d reviews, %d favorites",
            len(self._users), len(self._shops), len(self._reviews), len(self._favorites),
        )
