import logging
from typing import List, Optional

import requests
from pydantic import BaseModel

from verify_news.core.config import SERPER_API_KEY, SERPER_API_URL, SEARCH_RESULT_COUNT, SEARCH_TIMEOUT
from verify_news.core.errors import SearchError

logger = logging.getLogger(__name__)


class SearchResult(BaseModel):
    url: str
    title: str = ""
    snippet: str = ""


class SearchService:
    """
    Web search through the Serper Google Search API.
    """

    def __init__(
        self,
        api_key: Optional[str] = SERPER_API_KEY,
        base_url: str = SERPER_API_URL,
        result_count: int = SEARCH_RESULT_COUNT,
        timeout: float = SEARCH_TIMEOUT,
    ):
        if not api_key:
            logger.warning("SERPER_API_KEY not set. Verification requests will fail at the search step.")
        self.api_key = api_key
        self.base_url = base_url
        self.result_count = result_count
        self.timeout = timeout

    def search(self, query_text: str) -> List[SearchResult]:
        """
        Search the web for the claim.

        Args:
            query_text (str): Claim to search for

        Returns:
            list: Organic results in ranking order, at most result_count

        Raises:
            SearchError: On a missing key, transport error or non-200 response
        """
        if not self.api_key:
            raise SearchError("Serper API key is not configured")

        headers = {
            "X-API-KEY": self.api_key,
            "Content-Type": "application/json"
        }
        payload = {"q": query_text, "num": self.result_count}

        logger.info("[Search] Making API request for: %s...", query_text[:50])
        try:
            response = requests.post(self.base_url, headers=headers, json=payload, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            raise SearchError("Serper API timeout") from e
        except requests.exceptions.RequestException as e:
            raise SearchError(f"Serper request failed: {e}") from e

        logger.info("[Search] Response status: %s", response.status_code)
        if response.status_code != 200:
            logger.error("[Search] API error: %s - %s", response.status_code, response.text[:500])
            raise SearchError(f"Serper returned HTTP {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise SearchError("Serper returned an undecodable body") from e
        if not isinstance(data, dict):
            raise SearchError("Serper returned an unexpected payload")

        organic = data.get("organic") or []

        results = self._parse_organic(organic)
        logger.info("[Search] Got %d results", len(results))
        return results

    def _parse_organic(self, organic: list) -> List[SearchResult]:
        results = []
        for item in organic:
            # Results without a link cannot be cited
            link = item.get("link") if isinstance(item, dict) else None
            if not link:
                continue
            results.append(SearchResult(
                url=link,
                title=item.get("title") or "",
                snippet=item.get("snippet") or "",
            ))
            if len(results) >= self.result_count:
                break
        return results
