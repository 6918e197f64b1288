from __future__ import annotations

import logging
from dataclasses import dataclass

import pandas as pd

from .models import CoffeeShop, EnrichedCoffeeShop, SearchParams
from .store import CoffeeShopStore

logger = logging.getLogger(__name__)

_FRAME_COLUMNS = ["id", "name", "address", "is_open", "rating", "distance", "tags"]


@dataclass
class SearchResult:
    shops: list[EnrichedCoffeeShop]
    has_more: bool


def _shop_frame(shops: list[CoffeeShop]) -> pd.DataFrame:
    """Build a DataFrame of the searchable columns, in store (id) order."""
    records = [
        {
            "id": s.id,
            "name": s.name.lower(),
            "address": s.address.lower(),
            "is_open": s.is_open,
            "rating": s.rating,
            "distance": s.distance,
            "tags": [t.lower() for t in s.tags],
        }
        for s in shops
    ]
    return pd.DataFrame(records, columns=_FRAME_COLUMNS)


def _any_tag_contains(tags: list[str], needles: list[str]) -> bool:
    return any(needle in tag for needle in needles for tag in tags)


def _apply_filter_mode(frame: pd.DataFrame, mode: str) -> pd.DataFrame:
    if mode == "open_now":
        return frame.loc[frame["is_open"].astype(bool)]
    if mode == "highest_rated":
        return frame.sort_values("rating", ascending=False, kind="stable")
    if mode == "nearest":
        return frame.sort_values("distance", ascending=True, kind="stable")
    if mode == "specialty":
        mask = frame["tags"].apply(lambda tags: _any_tag_contains(tags, ["specialty"]))
        return frame.loc[mask.astype(bool)]
    return frame


def search_coffee_shops(
    store: CoffeeShopStore,
    params: SearchParams,
    user_id: int,
) -> SearchResult:
    """
    Narrow, order and paginate the shop collection, then enrich the page.

    Steps run in a fixed order: text query, filter mode, max distance,
    min rating, tag types, pagination. No input combination raises.
    """
    shops = store.list_coffee_shops()
    by_id = {s.id: s for s in shops}
    frame = _shop_frame(shops)

    # --- Text query over name and address ---
    if params.query:
        q = params.query.lower()
        mask = frame["name"].str.contains(q, regex=False) | frame[
            "address"
        ].str.contains(q, regex=False)
        frame = frame.loc[mask.astype(bool)]

    if params.filter:
        frame = _apply_filter_mode(frame, params.filter)

    if params.distance > 0:
        frame = frame.loc[frame["distance"] <= params.distance]

    if params.rating > 0:
        frame = frame.loc[frame["rating"] >= params.rating]

    if params.types:
        wanted = [t.lower() for t in params.types]
        mask = frame["tags"].apply(lambda tags: _any_tag_contains(tags, wanted))
        frame = frame.loc[mask.astype(bool)]

    # --- Pagination ---
    start = (params.page - 1) * params.limit
    end = params.page * params.limit
    page_ids = frame["id"].iloc[start:end].tolist()
    has_more = end < len(frame)

    logger.debug(
        "Search %s matched %d shops, returning %d (has_more=%s)",
        params.model_dump(), len(frame), len(page_ids), has_more,
    )

    return SearchResult(
        shops=[store.enrich(by_id[int(sid)], user_id) for sid in page_ids],
        has_more=has_more,
    )
