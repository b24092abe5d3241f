import uuid
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from verify_news.core.errors import CacheReadError, CacheWriteError
from verify_news.models.verification import Source, VerificationRecord
from verify_news.services.analysis_service import AnalysisService
from verify_news.services.search_service import SearchResult, SearchService
from verify_news.services.verification_service import VerificationService


class FakeVerificationRepository:
    """In-memory stand-in for VerificationRepository."""

    def __init__(self):
        self.records = []
        self.fail_reads = False
        self.fail_writes = False
        self.insert_calls = 0

    def find_recent(self, query_text, window_days, now=None):
        if self.fail_reads:
            raise CacheReadError("database unavailable")
        now = now or datetime.now(timezone.utc)
        cutoff = now - timedelta(days=window_days)
        key = query_text.strip().lower()
        matches = [
            r for r in self.records
            if r.query_text.lower() == key and r.created_at >= cutoff
        ]
        return max(matches, key=lambda r: r.created_at, default=None)

    def insert(self, query_text, verdict, explanation, sources):
        self.insert_calls += 1
        if self.fail_writes:
            raise CacheWriteError("database unavailable")
        created_at = datetime.now(timezone.utc)
        # Keep insertion order strict even when the clock does not advance
        if self.records and created_at <= self.records[-1].created_at:
            created_at = self.records[-1].created_at + timedelta(microseconds=1)
        record = VerificationRecord(
            id=str(uuid.uuid4()),
            query_text=query_text.strip(),
            verdict=verdict,
            explanation=explanation,
            sources=sources,
            created_at=created_at,
        )
        self.records.append(record)
        return record

    def get_recent(self, limit=5):
        if self.fail_reads:
            raise CacheReadError("database unavailable")
        return sorted(self.records, key=lambda r: r.created_at, reverse=True)[:limit]


SEARCH_RESULTS = [
    SearchResult(url="https://www.nasa.gov/apollo", title="Apollo Program", snippet="Six crewed landings between 1969 and 1972."),
    SearchResult(url="https://www.snopes.com/moon", title="Snopes - Moon landing", snippet="The hoax claims have been debunked."),
    SearchResult(url="https://en.wikipedia.org/wiki/Moon_landing_conspiracy_theories", title="Moon landing conspiracy theories", snippet=""),
    SearchResult(url="https://www.factcheck.org/apollo", title="FactCheck.org", snippet="Retroreflectors are still in use."),
    SearchResult(url="https://www.bbc.com/apollo", title="BBC", snippet="Independent tracking confirmed the missions."),
]

FALSE_ANALYSIS = (
    "VERDICT: False\n"
    "EXPLANATION: Independent tracking stations and returned samples show the landings happened; "
    "the verdict is false based on overwhelming evidence."
)


@pytest.fixture
def repo():
    return FakeVerificationRepository()


@pytest.fixture
def search():
    mock = MagicMock(spec=SearchService)
    mock.search.return_value = list(SEARCH_RESULTS)
    return mock


@pytest.fixture
def analysis():
    mock = MagicMock(spec=AnalysisService)
    mock.analyze.return_value = FALSE_ANALYSIS
    return mock


@pytest.fixture
def service(repo, search, analysis):
    return VerificationService(repo, search, analysis)


@pytest.fixture
def client(service):
    from main import app
    from verify_news.api.verification_api import get_verification_service

    app.dependency_overrides[get_verification_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def sample_sources():
    return [Source(url=r.url, title=r.title, snippet=r.snippet) for r in SEARCH_RESULTS[:3]]
