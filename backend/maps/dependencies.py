from __future__ import annotations

from fastapi import HTTPException, Request

from .config import MapsConfig


def require_maps_config(request: Request) -> MapsConfig:
    """Raise 503 if no maps API key is configured."""
    config: MapsConfig = request.app.state.maps_config
    if not config.enabled:
        raise HTTPException(status_code=503, detail="Maps API key is not configured")
    return config
