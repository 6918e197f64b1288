from __future__ import annotations

import logging
import math

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Query, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .auth.dependencies import get_current_user_id
from .coffee_shops.config import DEFAULT_STORE_CONFIG, StoreConfig
from .coffee_shops.dependencies import get_store
from .coffee_shops.models import (
    CoffeeShopCreate,
    EnrichedCoffeeShop,
    FavoriteToggle,
    FavoriteToggleResponse,
    MapsKeyResponse,
    Review,
    ReviewCreate,
    SearchParams,
    SearchResponse,
)
from .coffee_shops.search import search_coffee_shops
from .coffee_shops.store import CoffeeShopStore, ShopNotFoundError
from .maps.config import DEFAULT_MAPS_CONFIG, MapsConfig
from .maps.dependencies import require_maps_config

logger = logging.getLogger(__name__)

router = APIRouter()


def _number(raw: str | None, fallback: float) -> float:
    """Parse a query-string number; empty, zero, non-finite or unparsable values fall back."""
    try:
        value = float(raw) if raw else 0.0
    except ValueError:
        value = 0.0
    if not math.isfinite(value) or value == 0:
        return fallback
    return value


def _require_shop(store: CoffeeShopStore, shop_id: int) -> None:
    if store.get_coffee_shop(shop_id) is None:
        raise HTTPException(status_code=404, detail="Coffee shop not found")


# ── Public endpoints ─────────────────────────────────────────────────────


@router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/api/get-maps-key", response_model=MapsKeyResponse)
def get_maps_key(config: MapsConfig = Depends(require_maps_config)) -> MapsKeyResponse:
    return MapsKeyResponse(key=config.api_key)


# ── Coffee shop endpoints ────────────────────────────────────────────────
# Static paths are registered before /{shop_id} so they are not parsed as ids.


@router.get("/api/coffee-shops/search", response_model=SearchResponse)
def search(
    query: str = "",
    filter: str = "",
    distance: str | None = None,
    rating: str | None = None,
    page: str | None = None,
    types: list[str] | None = Query(default=None),
    bracket_types: list[str] | None = Query(default=None, alias="types[]"),
    store: CoffeeShopStore = Depends(get_store),
    user_id: int = Depends(get_current_user_id),
) -> SearchResponse:
    params = SearchParams(
        query=query,
        filter=filter,
        distance=_number(distance, store.config.default_distance),
        rating=_number(rating, 0.0),
        types=[t for t in (types or []) + (bracket_types or []) if t],
        page=max(1, int(_number(page, 1))),
        limit=store.config.page_size,
    )
    result = search_coffee_shops(store, params, user_id)
    return SearchResponse(shops=result.shops, has_more=result.has_more)


@router.get("/api/coffee-shops/favorites", response_model=list[EnrichedCoffeeShop])
def favorites(
    store: CoffeeShopStore = Depends(get_store),
    user_id: int = Depends(get_current_user_id),
) -> list[EnrichedCoffeeShop]:
    return store.get_favorite_coffee_shops(user_id)


@router.post("/api/coffee-shops", response_model=EnrichedCoffeeShop, status_code=201)
def add_coffee_shop(
    body: CoffeeShopCreate,
    store: CoffeeShopStore = Depends(get_store),
    user_id: int = Depends(get_current_user_id),
) -> EnrichedCoffeeShop:
    shop = store.add_coffee_shop(body)
    return store.enrich(shop, user_id)


@router.get("/api/coffee-shops/{shop_id}", response_model=EnrichedCoffeeShop)
def coffee_shop_detail(
    shop_id: int,
    store: CoffeeShopStore = Depends(get_store),
    user_id: int = Depends(get_current_user_id),
) -> EnrichedCoffeeShop:
    shop = store.get_coffee_shop(shop_id)
    if shop is None:
        raise HTTPException(status_code=404, detail="Coffee shop not found")
    return store.enrich(shop, user_id)


@router.post("/api/coffee-shops/{shop_id}/favorite", response_model=FavoriteToggleResponse)
def toggle_favorite(
    shop_id: int,
    body: FavoriteToggle,
    store: CoffeeShopStore = Depends(get_store),
    user_id: int = Depends(get_current_user_id),
) -> FavoriteToggleResponse:
    _require_shop(store, shop_id)
    if body.is_favorite:
        store.add_favorite(user_id, shop_id)
    else:
        store.remove_favorite(user_id, shop_id)
    return FavoriteToggleResponse(success=True)


@router.post("/api/coffee-shops/{shop_id}/reviews", response_model=Review, status_code=201)
def add_review(
    shop_id: int,
    body: ReviewCreate,
    store: CoffeeShopStore = Depends(get_store),
) -> Review:
    return store.add_review(shop_id, body)


# ── Error handlers ───────────────────────────────────────────────────────


async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


async def _shop_not_found(request: Request, exc: ShopNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": "Coffee shop not found"})


async def _unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# ── Application factory ──────────────────────────────────────────────────


def create_app(
    store_config: StoreConfig = DEFAULT_STORE_CONFIG,
    maps_config: MapsConfig = DEFAULT_MAPS_CONFIG,
) -> FastAPI:
    """Build an application with its own freshly seeded store."""
    logging.getLogger("backend").setLevel(store_config.log_level.upper())

    application = FastAPI(title="Coffee Shop Directory API", version="1.0.0")
    application.add_middleware(
        CORSMiddleware,
        allow_origins=list(store_config.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.state.store = CoffeeShopStore(store_config)
    application.state.maps_config = maps_config

    application.add_exception_handler(RequestValidationError, _validation_error)
    application.add_exception_handler(ShopNotFoundError, _shop_not_found)
    application.add_exception_handler(Exception, _unhandled_error)

    application.include_router(router)
    return application


app = create_app()
