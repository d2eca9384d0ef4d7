from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging

from app.parks import PARKS
from app.routers import entities, live, schedule
from app.scheduler import start_scheduler, stop_scheduler

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
)
logger = logging.getLogger(__name__)

SUPPORTED_PARKS = list(PARKS)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting Parques Reunidos connector API...")
    start_scheduler()
    yield
    logger.info("Shutting down...")
    stop_scheduler()


app = FastAPI(
    title="Parques Reunidos — Canonical Park Data",
    description=(
        "Parques Reunidos parks normalized to canonical entities. "
        "Attractions, restaurants, live statuses and operating calendars."
    ),
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=["*"],
)

# Register all routers for every supported park
for park_id in SUPPORTED_PARKS:
    app.include_router(entities.router, prefix=f"/{park_id}", tags=[park_id])
    app.include_router(live.router,     prefix=f"/{park_id}", tags=[park_id])
    app.include_router(schedule.router, prefix=f"/{park_id}", tags=[park_id])


@app.get("/", tags=["root"])
async def root():
    return {
        "api": "Parques Reunidos Connector",
        "version": "1.0.0",
        "supported_parks": SUPPORTED_PARKS,
        "docs": "/docs",
    }


@app.get("/health", tags=["root"])
async def health():
    return {"status": "ok"}
