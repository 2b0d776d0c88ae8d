from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fleetops.config import settings
from fleetops.exception_handlers import register_exception_handlers
from fleetops.imports.router import router as imports_router
from fleetops.logging_config import setup_logging
from fleetops.records.router import router as records_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    yield


app = FastAPI(
    title="Fleet Ops Bulk Import",
    description="Bulk import, edit and delete of fleet reference data",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in settings.cors_origins.split(",") if origin.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(imports_router, prefix="/api/v1/imports", tags=["imports"])
app.include_router(records_router, prefix="/api/v1/records", tags=["records"])


@app.get("/api/v1/health")
async def health():
    return {"status": "healthy"}
