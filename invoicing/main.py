from contextlib import asynccontextmanager

import sentry_sdk
import structlog
from fastapi import FastAPI
from sentry_sdk.integrations.starlette import StarletteIntegration
from starlette.middleware.cors import CORSMiddleware

from invoicing.api import errors
from invoicing.api.routers.health import router as health_router
from invoicing.api.routers.invoices import router as invoices_router
from invoicing.api.routers.tax_profiles import router as tax_profiles_router
from invoicing.api.routers.users import router as users_router
from invoicing.core.config import Settings, get_settings
from invoicing.core.security import JwtTokenIssuer, WerkzeugPasswordHasher
from invoicing.db import create_engine, create_session_factory
from invoicing.logging import setup_logging
from invoicing.middleware.request_id import request_id_middleware
from invoicing.services.container import ServiceContainer


def _init_sentry(settings: Settings) -> bool:
    """Initialise Sentry when ``SENTRY_DSN`` is configured; report whether it did."""
    if not settings.sentry_dsn:
        return False
    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.app_env,
        release=settings.release,
        integrations=[StarletteIntegration()],
        # clamp to [0.0, 0.2]
        traces_sample_rate=max(0.0, min(0.2, settings.sentry_traces_rate)),
        send_default_pii=False,
    )
    return True


def create_app(
    settings: Settings | None = None,
    services: ServiceContainer | None = None,
) -> FastAPI:
    """Build the API.

    ``services`` is normally wired here from ``settings``; tests pass their own
    container to run against another database or against fakes.
    """
    settings = settings or get_settings()
    setup_logging(settings)
    _init_sentry(settings)

    engine = None
    if services is None:
        engine = create_engine(settings.database_url)
        services = ServiceContainer.from_session_factory(
            create_session_factory(engine),
            hasher=WerkzeugPasswordHasher(),
            tokens=JwtTokenIssuer.from_settings(settings),
        )

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        yield
        if engine is not None:
            await engine.dispose()

    app = FastAPI(title="Invoicing API", lifespan=lifespan)
    app.state.services = services

    # Request-ID middleware (JSON access log)
    app.middleware("http")(request_id_middleware)

    # CORS from ALLOW_ORIGINS env (comma-separated)
    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "HEAD"],
            allow_headers=["*"],
        )

    errors.install(app)
    app.include_router(users_router)
    app.include_router(tax_profiles_router)
    app.include_router(invoices_router)
    app.include_router(health_router)

    structlog.get_logger(__name__).info("app_startup", env=settings.app_env)
    return app


app = create_app()
