"""FastAPI application entry point for the geo search proxy."""

import os
from contextlib import asynccontextmanager
from logging import Logger
from typing import AsyncGenerator

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shared.logging.logging_setup import add_secret_filter, setup_logging
from shared.helper.HelperConfig import HelperConfig
from shared.models.config import SearchConfig
from shared.clients.search.SearchClientGraphQL import SearchClientGraphQL
from server.core.errors import SearchProxyError
from server.core.SearchProxyService import SearchProxyService
from server.routers.SearchRouter import search_router
from server.routers.ConfigRouter import config_router

app_version = os.getenv("APP_VERSION", "unknown")


def create_app(
    search_config: SearchConfig | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    logger: Logger | None = None,
    cors_origins: list[str] | None = None,
) -> FastAPI:
    """Build the application.

    Every argument left as None is resolved from the environment when the app
    starts. Tests pass a fixed config, an ``httpx.MockTransport`` and a ``ColorLogger``.

    Args:
        search_config (SearchConfig | None): Endpoint, token and public settings.
        transport (httpx.AsyncBaseTransport | None): Transport of the outbound client.
        logger (Logger | None): Application logger.
        cors_origins (list[str] | None): Allowed CORS origins.

    Returns:
        FastAPI: The configured application.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        # when the app starts
        app.state.logging = logger if logger is not None else setup_logging()
        app.state.helper_config = HelperConfig(logger=app.state.logging)
        app.state.search_config = (
            search_config if search_config is not None else app.state.helper_config.get_search_config()
        )
        if logger is None:
            add_secret_filter(app.state.search_config.get_secrets())

        search_client = SearchClientGraphQL(search_config=app.state.search_config, logger=app.state.logging)
        await search_client.boot(transport=transport)
        app.state.search_client = search_client
        app.state.search_proxy_service = SearchProxyService(
            search_config=app.state.search_config,
            search_client=search_client,
            logger=app.state.logging,
        )
        app.state.logging.info("Geo search proxy ready.", color="green")

        # while the app is running...
        yield

        # when the app shuts down
        await search_client.close()
        app.state.logging.info("Geo search proxy shut down.")

    app = FastAPI(
        title="geo_search_proxy",
        description=(
            "Backend relay for a hosted Smart Search GraphQL endpoint. "
            "POST /api/search forwards {query, variables} with a server-held bearer token."
        ),
        version=app_version,
        lifespan=lifespan,
    )

    if cors_origins is None:
        cors_origins = HelperConfig(logger=logger).get_cors_origins()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(SearchProxyError)
    async def handle_search_proxy_error(request: Request, exc: SearchProxyError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.to_content())

    app.include_router(search_router)
    app.include_router(config_router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "8000")))
