import asyncio
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from verify_news.api.verification_api import router as verification_router
from verify_news.core.config import BACKEND_HOST, BACKEND_PORT, CORS_HEADERS, LOG_LEVEL
from verify_news.core.database import get_verifications_collection, ping
from verify_news.repository.verification_repository import VerificationRepository

# Configure logging
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def prepare_database() -> None:
    if ping():
        VerificationRepository(get_verifications_collection()).ensure_indexes()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # pymongo blocks, keep it off the event loop
    loop = asyncio.get_running_loop()
    await loop.run_in_executor(None, prepare_database)
    yield


app = FastAPI(
    title="Verify News API",
    description="Fact-checks news claims with web search and Gemini, caching verdicts for 7 days",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS is handled per route with fixed headers, preflights included
app.include_router(verification_router, prefix="/api", tags=["Verification"])


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error("Unhandled error on %s: %s", request.url.path, exc, exc_info=exc)
    return JSONResponse(
        {"error": "Failed to process verification request"},
        status_code=500,
        headers=CORS_HEADERS,
    )


@app.get("/")
async def root():
    return {"message": "Verify News API is running. POST a claim to /api/verify-news."}


@app.get("/api/health")
async def health():
    return {"status": "ok"}


if __name__ == "__main__":
    uvicorn.run(app, host=BACKEND_HOST, port=BACKEND_PORT)
