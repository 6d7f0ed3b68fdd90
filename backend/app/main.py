"""FastAPI entry point for the Human Essentials reporting backend."""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.logger import get_logger
from infrastructure.database import init_db
from interfaces import deps, distribution_router, report_router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):  # pragma: no cover - runtime wiring
    init_db()
    logger.info("Database ready; config version %s", deps.settings.version)
    yield


app = FastAPI(title="Human Essentials Reporting", lifespan=lifespan)

app.include_router(report_router)
app.include_router(distribution_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://localhost:5174"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health", tags=["health"])
def health_check() -> dict:
    """Expose a minimal health endpoint to help dev tooling."""
    return {"status": "ok", "configVersion": deps.settings.version}
