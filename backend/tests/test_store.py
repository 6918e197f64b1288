from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone

import bcrypt
import pytest

from backend.coffee_shops.config import StoreConfig
from backend.coffee_shops.models import CoffeeShopCreate, Review, ReviewCreate
from backend.coffee_shops.seed import COFFEE_SHOP_IMAGES
from backend.coffee_shops.store import (
    CoffeeShopStore,
    DuplicateUsernameError,
    ShopNotFoundError,
    compute_rating,
    round_one_decimal,
)

TEST_CONFIG = StoreConfig(password_rounds=4, random_seed=42)


def _store() -> CoffeeShopStore:
    return CoffeeShopStore(TEST_CONFIG)


def _review(rating: float, shop_id: int = 1) -> Review:
    return Review(
        id=1,
        coffee_shop_id=shop_id,
        author_name="Tester",
        rating=rating,
        comment="ok",
        date=datetime.now(timezone.utc),
    )


# ── Seed data ────────────────────────────────────────────────────────────


def test_seed_loads_four_shops_in_id_order():
    shops = _store().list_coffee_shops()
    assert [s.id for s in shops] == [1, 2, 3, 4]
    assert [s.name for s in shops] == [
        "The Daily Grind", "Brew Haven", "Urban Beans", "Roast & Relax",
    ]


def test_seed_ratings_follow_seeded_reviews():
    store = _store()
    summary = {s.name: (s.rating, s.review_count) for s in store.list_coffee_shops()}
    assert summary == {
        "The Daily Grind": (4.5, 2),
        "Brew Haven": (5.0, 1),
        "Urban Beans": (3.0, 1),
        "Roast & Relax": (4.0, 1),
    }


def test_seed_distances_are_within_range():
    for shop in _store().list_coffee_shops():
        assert 0.5 <= shop.distance <= 3.5
        assert shop.distance == round(shop.distance, 1)


def test_unseeded_store_is_empty():
    store = CoffeeShopStore(StoreConfig(password_rounds=4, seed_sample_data=False))
    assert store.list_coffee_shops() == []
    assert store.get_user(1) is None


# ── Users ────────────────────────────────────────────────────────────────


def test_mock_user_password_is_hashed():
    user = _store().get_user(1)
    assert user is not None
    assert user.username == "user"
    assert user.password_hash != "password"
    assert bcrypt.checkpw(b"password", user.password_hash.encode())


def test_create_user_assigns_next_id():
    store = _store()
    user = store.create_user("barista", "latte-art")
    assert user.id == 2
    assert store.get_user_by_username("barista") == user


def test_create_user_rejects_duplicate_username():
    store = _store()
    with pytest.raises(DuplicateUsernameError):
        store.create_user("user", "another")


# ── Ratings ──────────────────────────────────────────────────────────────


def test_compute_rating_empty():
    assert compute_rating([]) == (0.0, 0)


def test_compute_rating_rounds_half_up():
    assert compute_rating([_review(4.0), _review(4.5)]) == (4.3, 2)


def test_round_one_decimal():
    assert round_one_decimal(4.25) == 4.3
    assert round_one_decimal(3.333333) == 3.3
    assert round_one_decimal(5.0) == 5.0


def test_add_review_updates_rating_and_count():
    store = _store()
    store.add_review(4, ReviewCreate(author_name="Ann", rating=5.0, comment="Great"))
    shop = store.get_coffee_shop(4)
    assert (shop.rating, shop.review_count) == (4.5, 2)

    store.add_review(4, ReviewCreate(author_name="Bob", rating=3.0, comment="Fine"))
    shop = store.get_coffee_shop(4)
    assert (shop.rating, shop.review_count) == (4.0, 3)


def test_rating_matches_reviews_after_many_inserts():
    store = _store()
    for i, rating in enumerate([1.0, 2.5, 4.0, 5.0, 3.5]):
        store.add_review((i % 4) + 1, ReviewCreate(author_name="X", rating=rating, comment=""))
    for shop in store.list_coffee_shops():
        reviews = store.get_reviews_for_shop(shop.id)
        assert shop.review_count == len(reviews)
        assert shop.rating == round_one_decimal(sum(r.rating for r in reviews) / len(reviews))


def test_add_review_assigns_id_and_timestamp():
    store = _store()
    review = store.add_review(2, ReviewCreate(author_name="Ann", rating=4.0, comment="Nice"))
    assert review.id == 6
    assert review.coffee_shop_id == 2
    assert review.date.tzinfo is not None
    assert store.get_review(6) == review


def test_add_review_unknown_shop_stores_nothing():
    store = _store()
    with pytest.raises(ShopNotFoundError):
        store.add_review(99, ReviewCreate(author_name="Ann", rating=4.0, comment="?"))
    assert store.get_reviews_for_shop(99) == []
    assert store.get_review(6) is None
    review = store.add_review(1, ReviewCreate(author_name="Ann", rating=4.0, comment="ok"))
    assert review.id == 6


def test_concurrent_reviews_keep_rating_consistent():
    store = _store()

    def _post_reviews(worker: int) -> list[int]:
        ids = []
        for i in range(25):
            rating = float((worker + i) % 5 + 1)
            review = store.add_review(4, ReviewCreate(author_name=f"w{worker}", rating=rating, comment=""))
            ids.append(review.id)
        return ids

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(_post_reviews, range(8)))

    review_ids = [rid for ids in results for rid in ids]
    assert len(set(review_ids)) == 200

    shop = store.get_coffee_shop(4)
    reviews = store.get_reviews_for_shop(4)
    assert shop.review_count == len(reviews) == 1 + 200
    assert shop.rating == compute_rating(reviews)[0]


# ── Favorites ────────────────────────────────────────────────────────────


def test_seeded_favorite():
    store = _store()
    assert store.is_favorite(1, 2)
    assert not store.is_favorite(1, 1)


def test_add_favorite_is_idempotent():
    store = _store()
    first = store.add_favorite(1, 3)
    second = store.add_favorite(1, 3)
    assert first.id == second.id == 2
    assert [s.id for s in store.get_favorite_coffee_shops(1)] == [2, 3]


def test_remove_missing_favorite_is_noop():
    store = _store()
    store.remove_favorite(1, 4)
    store.remove_favorite(7, 1)
    assert [s.id for s in store.get_favorite_coffee_shops(1)] == [2]


def test_favorite_ids_are_not_reused():
    store = _store()
    store.remove_favorite(1, 2)
    assert store.add_favorite(1, 2).id == 2


def test_favorite_shops_are_enriched():
    shops = _store().get_favorite_coffee_shops(1)
    assert len(shops) == 1
    assert shops[0].name == "Brew Haven"
    assert shops[0].is_favorite is True
    assert [r.author_name for r in shops[0].reviews] == ["Lisa R."]


def test_favorites_are_per_user():
    store = _store()
    store.add_favorite(2, 1)
    assert [s.id for s in store.get_favorite_coffee_shops(2)] == [1]
    assert [s.id for s in store.get_favorite_coffee_shops(1)] == [2]


# ── Adding shops ─────────────────────────────────────────────────────────


def test_add_coffee_shop_persists_with_defaults():
    store = _store()
    shop = store.add_coffee_shop(CoffeeShopCreate(name="Bean There", address="1 Main St"))
    assert shop.id == 5
    assert (shop.rating, shop.review_count) == (0.0, 0)
    assert 0.5 <= shop.distance <= 3.5
    assert shop.image_url in COFFEE_SHOP_IMAGES
    lat, lng = TEST_CONFIG.map_center
    assert abs(shop.latitude - lat) <= 0.05
    assert abs(shop.longitude - lng) <= 0.05
    assert store.get_coffee_shop(5) == shop


def test_add_coffee_shop_keeps_given_location_and_image():
    store = _store()
    shop = store.add_coffee_shop(CoffeeShopCreate(
        name="Pier Coffee",
        address="Pier 17",
        latitude=40.706,
        longitude=-74.003,
        image_url="https://example.com/pier.jpg",
    ))
    assert (shop.latitude, shop.longitude) == (40.706, -74.003)
    assert shop.image_url == "https://example.com/pier.jpg"


def test_comma_separated_tags_are_split():
    payload = CoffeeShopCreate.model_validate({
        "name": "Drip",
        "address": "2 Side St",
        "tags": "Specialty Coffee, Wifi ,",
        "popularItems": "Flat White,Cortado",
    })
    assert payload.tags == ["Specialty Coffee", "Wifi"]
    assert payload.popular_items == ["Flat White", "Cortado"]
