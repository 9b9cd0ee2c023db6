from fastapi import FastAPI
from fastapi.responses import RedirectResponse
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from app.controllers.v1.auth.auth import router as auth_router
from app.controllers.v1.project_management.project import router as project_router
from app.controllers.v1.resource_management.resource import router as resource_router
from app.controllers.v1.public_api.public_api import router as public_api_router
from app.database.conn import mongo_client
from app.database.schema import ensure_collections_and_indexes
from app.utils.error_utils import register_exception_handlers
from app.utils.logger_utils import logger
from config import CORS_CONFIG

API_PREFIX = "/api"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events."""

    # Startup
    logger.info("Starting up the application...")
    await mongo_client.connect()
    # Ensure DB collections, validators and indexes
    try:
        await ensure_collections_and_indexes()
        logger.info("Ensured DB schema (collections, validators, indexes)")
    except Exception as e:
        logger.warning(f"Failed to ensure DB schema: {e}")

    yield

    # Shutdown
    logger.info("Shutting down the application...")
    if mongo_client.connected:
        await mongo_client.close()

# Create FastAPI application
app = FastAPI(title="Mock API Service", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_CONFIG["ALLOW_ORIGINS"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Routers; the public data API matches any /{project_id}/{resource} path, so it goes last
app.include_router(auth_router, prefix=API_PREFIX, tags=["Auth"])
app.include_router(project_router, prefix=API_PREFIX, tags=["Project"])
app.include_router(resource_router, prefix=API_PREFIX, tags=["Resource"])
app.include_router(public_api_router, prefix=API_PREFIX, tags=["Data API"])


@app.get("/", include_in_schema=False)
async def root_redirect():
    return RedirectResponse(url="/docs", status_code=307)


if __name__ == "__main__":
    import os
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=int(os.getenv("PORT", 8000)))
