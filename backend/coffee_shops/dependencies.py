from __future__ import annotations

from fastapi import Request

from .store import CoffeeShopStore


def get_store(request: Request) -> CoffeeShopStore:
    """Return the store created with the application."""
    return request.app.state.store
