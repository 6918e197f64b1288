from __future__ import annotations

from typing import Any

COFFEE_SHOP_IMAGES: list[str] = [
    "https://images.unsplash.com/photo-1554118811-1e0d58224f24?auto=format&fit=crop&w=800&q=60",
    "https://images.unsplash.com/photo-1600093463592-8e36ae95ef56?auto=format&fit=crop&w=800&q=60",
    "https://images.unsplash.com/photo-1501339847302-ac426a4a7cbb?auto=format&fit=crop&w=800&q=60",
    "https://images.unsplash.com/photo-1559925393-8be0ec4767c8?auto=format&fit=crop&w=800&q=60",
]

SAMPLE_USER: dict[str, str] = {"username": "user", "password": "password"}

# Ratings and review counts are derived from SAMPLE_REVIEWS once loaded.
SAMPLE_SHOPS: list[dict[str, Any]] = [
    {
        "name": "The Daily Grind",
        "address": "123 Coffee Street, Brewsville",
        "latitude": 40.7128,
        "longitude": -74.0060,
        "image_url": COFFEE_SHOP_IMAGES[0],
        "is_open": True,
        "opening_time": "7AM",
        "closing_time": "8PM",
        "weekday_hours": "7AM - 8PM",
        "weekend_hours": "8AM - 9PM",
        "phone": "(555) 123-4567",
        "website": "www.dailygrind.com",
        "has_wifi": True,
        "description": (
            "The Daily Grind is a specialty coffee shop focusing on ethically "
            "sourced beans and expert brewing methods. Our cozy atmosphere makes "
            "it perfect for both quick coffee runs and longer work sessions."
        ),
        "tags": ["Specialty Coffee", "Pastries", "Vegan Options"],
        "popular_items": ["Signature Latte", "Pour Over", "Cold Brew", "Vegan Muffin"],
    },
    {
        "name": "Brew Haven",
        "address": "456 Espresso Avenue, Coffeeburgh",
        "latitude": 40.7282,
        "longitude": -74.0776,
        "image_url": COFFEE_SHOP_IMAGES[1],
        "is_open": True,
        "opening_time": "6AM",
        "closing_time": "9PM",
        "weekday_hours": "6AM - 9PM",
        "weekend_hours": "7AM - 10PM",
        "phone": "(555) 987-6543",
        "website": "www.brewhaven.com",
        "has_wifi": True,
        "description": (
            "Brew Haven is an artisanal coffee shop serving beans from "
            "sustainable farms, roasted in-house. Outdoor seating makes it a "
            "favorite for brunch with friends."
        ),
        "tags": ["Artisanal Coffee", "Brunch", "Outdoor Seating"],
        "popular_items": ["House Blend", "Avocado Toast", "Maple Latte", "Cold Brew"],
    },
    {
        "name": "Urban Beans",
        "address": "789 Latte Lane, Bean City",
        "latitude": 40.7053,
        "longitude": -74.0088,
        "image_url": COFFEE_SHOP_IMAGES[2],
        "is_open": False,
        "opening_time": "7AM",
        "closing_time": "7PM",
        "weekday_hours": "7AM - 7PM",
        "weekend_hours": "8AM - 6PM",
        "phone": "(555) 456-7890",
        "website": "www.urbanbeans.com",
        "has_wifi": True,
        "description": (
            "Urban Beans is a modern coffee shop with an industrial vibe, "
            "specializing in pour over and cold brew, with ample workspaces for "
            "remote workers and students."
        ),
        "tags": ["Pour Over", "Cold Brew", "Workspaces"],
        "popular_items": ["Cold Brew", "Nitro Coffee", "Scones", "Breakfast Sandwich"],
    },
    {
        "name": "Roast & Relax",
        "address": "321 Mocha Drive, Beantown",
        "latitude": 40.7223,
        "longitude": -74.0021,
        "image_url": COFFEE_SHOP_IMAGES[3],
        "is_open": True,
        "opening_time": "8AM",
        "closing_time": "6PM",
        "weekday_hours": "8AM - 6PM",
        "weekend_hours": "9AM - 5PM",
        "phone": "(555) 234-5678",
        "website": "www.roastandrelax.com",
        "has_wifi": False,
        "description": (
            "Roast & Relax offers a cozy, quiet environment for traditional "
            "espresso drinks. A no-laptop policy keeps the room for "
            "conversation and a good book."
        ),
        "tags": ["Traditional Espresso", "Quiet Atmosphere", "No Laptops"],
        "popular_items": ["Classic Espresso", "Cappuccino", "Croissants", "Tiramisu"],
    },
]

SAMPLE_REVIEWS: list[dict[str, Any]] = [
    {
        "coffee_shop_id": 1,
        "author_name": "Sarah J.",
        "rating": 5.0,
        "comment": (
            "Amazing coffee and atmosphere! The baristas are friendly and "
            "knowledgeable. Great spot for working remotely as well."
        ),
    },
    {
        "coffee_shop_id": 1,
        "author_name": "Mike T.",
        "rating": 4.0,
        "comment": "Good coffee and nice atmosphere. Gets a bit crowded during peak hours but worth the wait.",
    },
    {
        "coffee_shop_id": 2,
        "author_name": "Lisa R.",
        "rating": 5.0,
        "comment": "Best coffee in town! The outdoor seating area is so peaceful. I come here every weekend for brunch.",
    },
    {
        "coffee_shop_id": 3,
        "author_name": "David K.",
        "rating": 3.0,
        "comment": "Decent coffee but the service can be slow. I like the workspace options though.",
    },
    {
        "coffee_shop_id": 4,
        "author_name": "Emma P.",
        "rating": 4.0,
        "comment": "Love the traditional atmosphere. Perfect place to relax with a book. The cappuccino is excellent!",
    },
]

# (user_id, coffee_shop_id)
SAMPLE_FAVORITES: list[tuple[int, int]] = [(1, 2)]
