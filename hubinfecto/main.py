"""
Punto de entrada de la aplicación FastAPI.
Configura logging, CORS, el snapshot en memoria y monta los routers.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from hubinfecto.api.v1.router import api_v1_router
from hubinfecto.config import get_settings
from hubinfecto.database import async_session_factory, engine
from hubinfecto.services.record_store import RecordStore
from hubinfecto.services.snapshot import ClinicSnapshot

settings = get_settings()

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


# ── Lifecycle ────────────────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Eventos de inicio y cierre de la aplicación."""
    # Startup
    configure_logging()
    logger.info("%s iniciando en modo %s", settings.APP_NAME, settings.APP_ENV)
    if not settings.is_backend_configured:
        logger.warning("DATABASE_URL no configurada: el panel arranca sin datos")

    app.state.record_store = RecordStore(async_session_factory)
    app.state.snapshot = ClinicSnapshot()
    await app.state.snapshot.refresh(app.state.record_store)
    yield
    # Shutdown
    logger.info("%s cerrando...", settings.APP_NAME)
    if engine is not None:
        await engine.dispose()


# ── App ──────────────────────────────────────────────
app = FastAPI(
    title=settings.APP_NAME,
    description="API del panel de agenda, capacidad y pendientes del consultorio",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# ── CORS ─────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Global Exception Handler ────────────────────────
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Captura excepciones no manejadas para evitar exponer detalles internos."""
    logger.exception("Error no manejado en %s %s", request.method, request.url.path)
    if settings.DEBUG:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": str(exc), "type": type(exc).__name__},
        )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Error interno del servidor"},
    )


# ── Routers ──────────────────────────────────────────
app.include_router(api_v1_router, prefix=settings.API_V1_PREFIX)


# ── Health Check ─────────────────────────────────────
@app.get("/health", tags=["Health"])
async def health_check(request: Request):
    """Endpoint de health check para monitoreo."""
    snapshot = getattr(request.app.state, "snapshot", None)
    return {
        "status": "healthy",
        "app": settings.APP_NAME,
        "version": "0.1.0",
        "environment": settings.APP_ENV,
        "backend_configured": settings.is_backend_configured,
        "snapshot_version": snapshot.version if snapshot else None,
    }
