"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI

from gate.interface.api.routes import access, admin_invites, health
from gate.util.di.container import create_container, setup_di
from gate.util.observability import instrument_fastapi, instrument_httpx


def create_app(
    container: AsyncContainer | None = None, instrument: bool = True
) -> FastAPI:
    """Create FastAPI application.

    Used as a uvicorn factory (`gate.interface.api.app:create_app`).
    Logfire should be configured before calling this function; start_app.py
    does so in production.

    Args:
        container: DI container, defaults to the production container
        instrument: Whether to install Logfire instrumentation

    Returns:
        Configured application
    """
    if instrument:
        # Outbound homeserver requests
        instrument_httpx()

    app_instance = FastAPI(
        title="Gate",
        description="Realm allowlisting and invitation gatekeeper for private chat deployments",
        version="0.1.0",
    )

    if instrument:
        instrument_fastapi(app_instance)

    setup_di(app_instance, container or create_container())

    app_instance.include_router(health.router)
    app_instance.include_router(access.router)
    app_instance.include_router(admin_invites.router)

    return app_instance
