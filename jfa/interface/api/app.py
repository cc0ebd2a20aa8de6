"""FastAPI application."""

import asyncio
from contextlib import asynccontextmanager, suppress

import logfire
from dishka import AsyncContainer
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from jfa.config import Settings
from jfa.domain.error import UpstreamError
from jfa.domain.service import InviteService, NotificationDispatcher
from jfa.interface.api.routes import health, invites, ombi, users
from jfa.persistence.error import PersistenceError
from jfa.util.di.container import create_container, setup_di
from jfa.util.observability import (
    instrument_fastapi,
    instrument_httpx,
)


async def sweep_periodically(container: AsyncContainer, interval: float) -> None:
    """Purge expired invites every ``interval`` seconds until cancelled."""
    while True:
        await asyncio.sleep(interval)
        try:
            async with container() as request_container:
                invite_service = await request_container.get(InviteService)
                await invite_service.sweep_expired()
        except (PersistenceError, UpstreamError) as e:
            logfire.error("Housekeeping sweep failed", error=str(e))


async def persistence_error_handler(request: Request, exc: PersistenceError) -> JSONResponse:
    logfire.error("Storage failure", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Failed to store changes"},
    )


async def upstream_error_handler(request: Request, exc: UpstreamError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY, content={"detail": str(exc)}
    )


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: DI container to use; the production one when omitted

    Returns:
        Configured application
    """
    container = container or create_container()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        settings = await container.get(Settings)
        sweeper = None
        interval = settings.invites.sweep_interval_seconds
        if interval > 0:
            logfire.info("Starting invite housekeeping", interval=interval)
            sweeper = asyncio.create_task(sweep_periodically(container, interval))
        yield
        if sweeper is not None:
            sweeper.cancel()
            with suppress(asyncio.CancelledError):
                await sweeper
        # Let queued notification emails go out before shutting down
        dispatcher = await container.get(NotificationDispatcher)
        await dispatcher.drain()
        await container.close()

    # Instrument httpx for outbound Jellyfin, Ombi and Mailgun requests
    instrument_httpx()

    app_instance = FastAPI(
        title="jfa API",
        description="Invite-based account management for a Jellyfin media server",
        version="0.1.0",
        lifespan=lifespan,
    )

    instrument_fastapi(app_instance)

    setup_di(app_instance, container)

    app_instance.add_exception_handler(PersistenceError, persistence_error_handler)
    app_instance.add_exception_handler(UpstreamError, upstream_error_handler)

    # Register routes
    app_instance.include_router(health.router)
    app_instance.include_router(invites.router)
    app_instance.include_router(users.router)
    app_instance.include_router(ombi.router)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
app = create_app()
