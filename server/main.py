"""
Sondage API Server

FastAPI application exposing the polling store and the statistics engine.
Routes, services, and utilities are organized into focused modules.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import config, get_logger
from database.store import SessionStore
from server.middleware.logging import log_requests
from server.middleware.metrics import metrics_middleware
from server.middleware.request_id import RequestIDMiddleware
from server.routes import group, monitoring, participants, questions

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the session store; its contents live for the process only"""
    app.state.store = SessionStore()
    logger.info("configuration", config_summary=config.summary())

    yield

    stats = app.state.store.get_stats()
    logger.info("shutting down, discarding session store", **stats)


def create_app() -> FastAPI:
    app = FastAPI(title="sondage API", description="Anonymous opinion polling", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.ALLOWED_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
        allow_credentials=True,
    )

    # Request ID middleware (must be early in stack for tracing)
    app.add_middleware(RequestIDMiddleware)

    # Last registered runs first: metrics -> logging
    @app.middleware("http")
    async def log_requests_middleware(request, call_next):
        return await log_requests(request, call_next)

    @app.middleware("http")
    async def metrics_middleware_wrapper(request, call_next):
        return await metrics_middleware(request, call_next)

    app.include_router(monitoring.router)    # Root, health and metrics
    app.include_router(participants.router)  # Anonymous participant ids
    app.include_router(questions.router)     # Questions, responses, results
    app.include_router(group.router)         # Group cohesion and alignment

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    logger.info("Starting sondage API server...")

    uvicorn.run(
        app,
        host=config.API_HOST,
        port=config.API_PORT,
        access_log=False,  # Request logging middleware covers this
    )
