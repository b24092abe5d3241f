import logging
from typing import List, Optional

from verify_news.core.config import CACHE_WINDOW_DAYS
from verify_news.core.errors import CacheWriteError, InvalidQueryError
from verify_news.models.verification import MAX_SOURCES, Source, VerificationRecord, VerificationResult
from verify_news.repository.verification_repository import VerificationRepository
from verify_news.services.analysis_service import AnalysisService
from verify_news.services.search_service import SearchService
from verify_news.services.verdict_extractor import extract_verdict

logger = logging.getLogger(__name__)


class VerificationService:
    """
    News verification pipeline, one pass per request, no retries:
    1. Validate the claim
    2. Check the cache (same claim within the cache window)
    3. Web search
    4. AI analysis of the claim against the search results
    5. Extract the verdict
    6. Store the result (best effort)
    7. Return the response
    """

    def __init__(
        self,
        repo: VerificationRepository,
        search: SearchService,
        analysis: AnalysisService,
        cache_window_days: int = CACHE_WINDOW_DAYS,
        max_sources: int = MAX_SOURCES,
    ):
        self.repo = repo
        self.search = search
        self.analysis = analysis
        self.cache_window_days = cache_window_days
        self.max_sources = min(max_sources, MAX_SOURCES)

    def verify(self, query_text: Optional[str]) -> VerificationResult:
        """
        Verify a news claim.

        Args:
            query_text (str): The claim as submitted by the user

        Returns:
            VerificationResult: Verdict, explanation, sources and cache flag

        Raises:
            InvalidQueryError: If the claim is missing or blank
            CacheReadError: If the cache cannot be queried
            SearchError: If the web search fails
            AnalysisError: If the AI analysis fails
        """
        # Step 1: Validate
        claim = (query_text or "").strip()
        if not claim:
            raise InvalidQueryError("Query text is required")

        logger.info("[Verify] Verifying news: %s", claim[:100])

        # Step 2: Cache check
        cached = self.repo.find_recent(claim, self.cache_window_days)
        if cached:
            logger.info("[Verify] Returning cached verification result")
            return VerificationResult(
                verdict=cached.verdict,
                explanation=cached.explanation,
                sources=cached.sources,
                cached=True,
            )

        # Step 3: Search
        logger.info("[Verify] Performing new verification analysis")
        results = self.search.search(claim)
        sources = [
            Source(url=r.url, title=r.title or None, snippet=r.snippet)
            for r in results[:self.max_sources]
        ]

        # Step 4: Analyze
        analysis_text = self.analysis.analyze(claim, sources)

        # Step 5: Extract
        verdict = extract_verdict(analysis_text)
        logger.info("[Verify] Verdict: %s (%d sources)", verdict.value, len(sources))

        # Step 6: Persist, a failed write only means this result is not cached
        try:
            self.repo.insert(claim, verdict, analysis_text, sources)
        except CacheWriteError as e:
            logger.error("[Verify] Database insert error: %s", e)

        # Step 7: Respond
        return VerificationResult(
            verdict=verdict,
            explanation=analysis_text,
            sources=sources,
            cached=False,
        )

    def recent(self, limit: int = 5) -> List[VerificationRecord]:
        """Latest stored verifications, newest first."""
        return self.repo.get_recent(limit)
