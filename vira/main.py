"""
Vira - FastAPI Backend Application
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import structlog

from vira import __version__
from vira.config import settings
from vira.database import storage
from vira.errors import ViraError
from vira.api import tenants, reservations, floors, tables, menu, integrations

# Configure structured logging
logging.basicConfig(format="%(message)s", level=settings.log_level.upper())

structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
        if settings.log_format == "json"
        else structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    logger.info("Starting Vira API", version=__version__)
    await storage.initialize()
    yield
    await storage.dispose()
    logger.info("Shutting down Vira API")


# Create FastAPI application
app = FastAPI(
    title="Vira",
    description="Reservations, floor plans and menus for restaurants",
    version=__version__,
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ViraError)
async def vira_error_handler(request: Request, exc: ViraError):
    """Turn domain errors into typed JSON responses"""
    logger.warning(
        "Request rejected",
        path=request.url.path,
        code=exc.code,
        detail=exc.message,
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


# Health check endpoints
@app.get("/health")
async def health():
    """Basic health check"""
    return {"status": "healthy", "service": "api", "version": __version__}


@app.get("/health/ready")
async def ready():
    """Readiness check with dependency verification"""
    checks = {}

    # Check database
    try:
        await storage.ping()
        checks["database"] = "ok"
    except Exception as e:
        checks["database"] = f"failed: {str(e)}"

    all_ok = all(v == "ok" for v in checks.values())

    return {
        "status": "ready" if all_ok else "not_ready",
        "checks": checks,
    }


# Include API routers
app.include_router(tenants.router, prefix="/tenants", tags=["Tenants"])
app.include_router(reservations.router, prefix="/tenants/{tenant_id}/reservations", tags=["Reservations"])
app.include_router(floors.router, prefix="/tenants/{tenant_id}/floors", tags=["Floor Plans"])
app.include_router(tables.router, prefix="/tenants/{tenant_id}/tables", tags=["Tables"])
app.include_router(menu.router, prefix="/tenants/{tenant_id}/menu", tags=["Menu"])
app.include_router(integrations.router, prefix="/tenants/{tenant_id}/integrations", tags=["Integrations"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "vira.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_debug,
    )
