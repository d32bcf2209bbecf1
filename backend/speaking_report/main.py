from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from speaking_report.api.router import api_router
from speaking_report.config import SettingsError, load_cors_origins, load_settings

logger = logging.getLogger(__name__)

CORS_ORIGINS = list(load_cors_origins())


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Student assessment report server started")
    try:
        settings = load_settings()
    except SettingsError as exc:
        logger.error("Invalid server configuration: %s", exc)
        data_source = None
    else:
        data_source = settings.source_url or str(settings.data_path)
        logger.info("Server URL: http://%s:%s", settings.host, settings.port)
        logger.info("Data source: %s", data_source)
    app.state.lifespan_started = True
    app.state.data_source = data_source
    yield
    app.state.lifespan_shutdown = True
    logger.info("Student assessment report server stopped")


app = FastAPI(title="Student Speaking Assessment Report", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(api_router, prefix="/api")
