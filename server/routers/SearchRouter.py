"""Search router — relays GraphQL search requests to Smart Search."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

search_router = APIRouter()


@search_router.post("/api/search", tags=["Search"])
async def handle_search(request: Request) -> JSONResponse:
    """Forward a GraphQL ``{query, variables}`` body to the remote search service.

    The body is read raw rather than through a pydantic parameter so that the
    configuration check runs before validation and a bad body answers 400.

    Args:
        request (Request): The incoming FastAPI request (carries app state).

    Returns:
        JSONResponse: The remote ``{"data": ...}`` body with status 200.

    Raises:
        SearchProxyError: Rendered by the application's exception handler.
    """
    search_proxy_service = request.app.state.search_proxy_service
    result = await search_proxy_service.do_search(await request.body())
    return JSONResponse(content=result)
