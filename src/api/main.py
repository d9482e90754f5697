"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request

from infrastructure.database.dependencies import close_database_connections
from infrastructure.logging import configure_logging
from infrastructure.observability import DefaultStartupProbe
from infrastructure.settings import get_settings
from infrastructure.version import __version__
from tenancy.dependencies.resolver import build_tenant_directory, build_tenant_resolver
from tenancy.infrastructure import RestTenantDirectory
from tenancy.presentation import router as tenancy_router


@asynccontextmanager
async def helpdesk_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - Logging configuration
    - Tenant directory and resolver (one per process, cache included)
    - Directory client / database engine cleanup on shutdown
    """
    settings = get_settings()
    configure_logging(debug=settings.debug, version=__version__)
    probe = DefaultStartupProbe()

    tenancy = settings.tenancy
    directory = build_tenant_directory(tenancy)
    app.state.tenant_directory = directory
    app.state.tenant_resolver = build_tenant_resolver(tenancy, directory)
    probe.tenant_resolver_configured(
        backend=tenancy.directory_backend,
        platform_domains=tenancy.platform_domains,
        lookup_timeout=tenancy.lookup_timeout_seconds,
        cache_max_entries=tenancy.cache_max_entries,
    )

    yield

    try:
        if isinstance(directory, RestTenantDirectory):
            await directory.aclose()
        else:
            await close_database_connections()
    except Exception as e:
        probe.shutdown_failed(backend=tenancy.directory_backend, error=e)
    else:
        probe.shutdown_completed(backend=tenancy.directory_backend)


app = FastAPI(
    title=get_settings().app_name,
    description="Hostname-based tenant resolution for the multi-tenant IT helpdesk",
    version=__version__,
    lifespan=helpdesk_lifespan,
)


@app.middleware("http")
async def bind_request_context(request: Request, call_next):
    """Bind request id and host to every log line emitted for the request."""
    request_id = request.headers.get("x-request-id") or str(uuid4())
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        request_id=request_id,
        host=request.headers.get("host"),
    )
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


# Include Tenancy bounded context routes
app.include_router(tenancy_router)


@app.get("/health")
def health():
    """Basic health check endpoint."""
    return {"status": "ok"}
