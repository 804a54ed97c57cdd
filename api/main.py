"""
FastAPI application for the Quote Stream API.

Serves a plain-text health check at / and a Server-Sent Events stream of
random quotes at /quotes. Auto-generated OpenAPI documentation at /docs.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse, StreamingResponse

from utils.log import banner, setup_logging

from .config import settings
from .data_access import QuoteProvider
from .stream import SessionManager

# Configure logging
setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

HEALTH_MESSAGE = "It's working 🙌"

SSE_HEADERS = {
    "Content-Type": "text/event-stream",
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "Access-Control-Allow-Origin": "*",
}

# Quote store and open streams
provider = QuoteProvider()
sessions = SessionManager()


# ----------------------------------------------------------------
# Lifecycle
# ----------------------------------------------------------------

def startup_event():
    logger.info(f"Server is running on PORT {settings.PORT}")


def shutdown_event():
    """Close every open quote stream on shutdown."""
    closed = sessions.close_all()
    logger.info(f"Quote streams closed on shutdown: {closed}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    startup_event()
    yield
    shutdown_event()


# Initialize FastAPI app
app = FastAPI(
    title=settings.API_TITLE,
    description=settings.API_DESCRIPTION,
    version=settings.API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# Enable CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ----------------------------------------------------------------
# Health
# ----------------------------------------------------------------

@app.get("/", response_class=PlainTextResponse, tags=["Health"])
def root():
    """API health check."""
    return HEALTH_MESSAGE


# ----------------------------------------------------------------
# Quote Stream
# ----------------------------------------------------------------

@app.get("/quotes", tags=["Quotes"])
async def stream_quotes(request: Request):
    """
    Stream random quotes as Server-Sent Events.

    Sends one quote immediately, then one every few seconds until the
    client disconnects. Each record looks like:

        data: {"quote": "...", "timestamp": "2024-05-01T12:00:00.000Z"}
    """
    return StreamingResponse(
        sessions.stream(provider, settings.QUOTE_INTERVAL_SECONDS, request.is_disconnected),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )


if __name__ == "__main__":
    import uvicorn
    banner(f"{settings.API_TITLE} v{settings.API_VERSION}")
    uvicorn.run(
        app,
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower()
    )
