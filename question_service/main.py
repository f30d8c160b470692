"""
Question Service — FastAPI application entry point.

Configures the app and middleware, registers the read-only question
routes, and runs the matching request listener for the lifetime of
the process.
"""

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from question_service.config import settings
from question_service.api import questions

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    logging.basicConfig(level=settings.LOG_LEVEL)

    from question_service.database import engine
    from question_service.redis_client import redis
    from question_service.matching.listener import MatchRequestListener

    listener = None
    listener_task = None
    if settings.MATCHING_LISTENER_ENABLED:
        listener = MatchRequestListener(redis_client=redis)
        listener_task = asyncio.create_task(listener.run())
    app.state.listener = listener

    yield

    # Shutdown: let in-flight requests reply, then close connections
    if listener is not None:
        await listener.stop()
        await listener_task
    await engine.dispose()
    await redis.aclose()


app = FastAPI(
    title=settings.APP_NAME,
    description="Question repository answering matching requests from the pairing service.",
    version="0.1.0",
    lifespan=lifespan,
)

# --- CORS Middleware ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Routers ---
app.include_router(questions.router, prefix="/api/v1/questions", tags=["Questions"])


@app.get("/health")
async def health_check():
    """Health check endpoint for load balancers and monitoring."""
    listener = getattr(app.state, "listener", None)
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": "0.1.0",
        "listener": {
            "enabled": listener is not None,
            "in_flight": listener.in_flight if listener is not None else 0,
        },
    }
