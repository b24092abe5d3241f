import asyncio
import logging
from functools import lru_cache

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse, Response

from verify_news.core.config import CORS_HEADERS
from verify_news.core.database import get_verifications_collection
from verify_news.core.errors import CacheReadError, InvalidQueryError
from verify_news.models.verification import VerificationRequest
from verify_news.repository.verification_repository import VerificationRepository
from verify_news.services.analysis_service import AnalysisService
from verify_news.services.search_service import SearchService
from verify_news.services.verification_service import VerificationService

logger = logging.getLogger(__name__)

router = APIRouter()


@lru_cache(maxsize=1)
def get_verification_service() -> VerificationService:
    """Build the pipeline once, on first use."""
    repo = VerificationRepository(get_verifications_collection())
    return VerificationService(repo, SearchService(), AnalysisService())


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code, headers=CORS_HEADERS)


@router.options("/verify-news")
async def verify_news_preflight():
    return Response(headers=CORS_HEADERS)


@router.post("/verify-news")
async def verify_news(request: Request, service: VerificationService = Depends(get_verification_service)):
    """
    Verify a news claim.

    Body: {"query_text": "..."}

    Returns:
        200 with verdict, explanation, sources and cached flag,
        400 for a blank claim, 500 for any server-side failure
    """
    try:
        data = VerificationRequest.model_validate(await request.json())

        # Run the blocking pipeline in the threadpool to keep the event loop free
        loop = asyncio.get_running_loop()
        result = await loop.run_in_executor(None, service.verify, data.query_text)
    except InvalidQueryError:
        return _error("Query text is required", 400)
    except CacheReadError:
        logger.exception("Database query error")
        return _error("Failed to query database", 500)
    except Exception:
        logger.exception("Error processing verification")
        return _error("Failed to process verification request", 500)

    return JSONResponse(result.model_dump(mode="json"), headers=CORS_HEADERS)


@router.get("/verifications/recent")
async def recent_verifications(
    limit: int = Query(5, ge=1, le=50),
    service: VerificationService = Depends(get_verification_service),
):
    """List the latest verifications, newest first."""
    loop = asyncio.get_running_loop()
    try:
        records = await loop.run_in_executor(None, service.recent, limit)
    except CacheReadError:
        logger.exception("Error fetching recent verifications")
        return _error("Failed to query database", 500)

    return JSONResponse([r.model_dump(mode="json") for r in records], headers=CORS_HEADERS)
