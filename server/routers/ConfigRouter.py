"""Public configuration and health endpoints."""

from fastapi import APIRouter, Request

config_router = APIRouter()


@config_router.get("/api/config/public", tags=["Config"])
async def get_public_config(request: Request) -> dict:
    """Return the settings the browser may see, i.e. the map provider key.

    Args:
        request (Request): The incoming FastAPI request (carries app state).

    Returns:
        dict: {"googleMapsApiKey": str | None}
    """
    search_config = request.app.state.search_config
    return {"googleMapsApiKey": search_config.maps_api_key}


@config_router.get("/healthz", tags=["Health"])
async def healthcheck(request: Request) -> dict:
    return {"status": "ok", "configured": request.app.state.search_config.is_configured}
