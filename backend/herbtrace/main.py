import logging

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from herbtrace import __version__
from herbtrace.config import CORS_ORIGINS, INITIAL_AUTHORITY
from herbtrace.database import create_tables
from herbtrace.dependencies import LedgerServices, get_services
from herbtrace.exceptions import LedgerError
from herbtrace.logging_config import setup_logging
from herbtrace.routes.events import router as events_router
from herbtrace.routes.geofence import router as geofence_router
from herbtrace.routes.herbs import router as herbs_router
from herbtrace.routes.ledgers import router as ledgers_router
from herbtrace.routes.zones import router as zones_router

# Initialize logging before anything else
setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="Herb Traceability Ledger", version=__version__)
logger.info("FastAPI app created")

# Include routers
app.include_router(zones_router)
app.include_router(geofence_router)
app.include_router(herbs_router)
app.include_router(ledgers_router)
app.include_router(events_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    allow_headers=["*"],
)


@app.exception_handler(LedgerError)
async def ledger_error_handler(request: Request, exc: LedgerError) -> JSONResponse:
    logger.warning(f"{request.method} {request.url.path} rejected: {exc.code} - {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.code, "detail": exc.message},
    )


@app.on_event("startup")
async def startup_event():
    logger.info("Herb traceability ledger starting up")
    await create_tables()
    await get_services().initialize(INITIAL_AUTHORITY)
    logger.info("API docs available at http://localhost:8000/docs")


@app.get("/api/health")
async def health_check(services: LedgerServices = Depends(get_services)):
    """Liveness plus a storage round trip: current authority and zone count."""
    return {
        "status": "ok",
        "version": __version__,
        "authority": await services.zones.authority(),
        "zones": await services.zones.zone_count(),
    }
