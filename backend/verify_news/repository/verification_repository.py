import hashlib
import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from pymongo import ASCENDING, DESCENDING
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from verify_news.core.errors import CacheReadError, CacheWriteError
from verify_news.models.verification import Source, Verdict, VerificationRecord

logger = logging.getLogger(__name__)


class VerificationRepository:
    """Cache store for verification results in MongoDB"""

    def __init__(self, collection: Collection):
        """
        Initialize the repository with a MongoDB collection

        Args:
            collection: MongoDB collection for verifications
        """
        self.collection = collection

    def ensure_indexes(self) -> None:
        """Create the lookup and recency indexes. Failures are logged only."""
        try:
            self.collection.create_index([("query_hash", ASCENDING), ("created_at", DESCENDING)])
            self.collection.create_index([("created_at", DESCENDING)])
        except PyMongoError as e:
            logger.warning("[Cache] Could not create indexes: %s", e)

    def find_recent(self, query_text: str, window_days: int, now: Optional[datetime] = None) -> Optional[VerificationRecord]:
        """
        Find the most recent verification of the same claim inside the window.

        The claim matches case-insensitively after trimming; longer claims
        that merely contain it do not match.

        Args:
            query_text: Claim text as submitted
            window_days: How far back a result may be reused
            now: Reference time, defaults to the current UTC time

        Returns:
            The newest matching record, or None

        Raises:
            CacheReadError: If MongoDB cannot be queried
        """
        now = now or datetime.now(timezone.utc)
        cutoff = now - timedelta(days=window_days)

        try:
            doc = self.collection.find_one(
                {"query_hash": self._hash_query(query_text), "created_at": {"$gte": cutoff}},
                sort=[("created_at", DESCENDING)],
            )
        except PyMongoError as e:
            raise CacheReadError(f"Failed to query verifications: {e}") from e

        if doc is None:
            return None

        logger.info("[Cache] Hit for claim: %s...", query_text[:50])
        return self._to_record(doc)

    def insert(self, query_text: str, verdict: Verdict, explanation: str, sources: List[Source]) -> VerificationRecord:
        """
        Persist a new verification. Records are never updated afterwards.

        Returns:
            The stored record, with its assigned id and timestamp

        Raises:
            CacheWriteError: If MongoDB rejects the write
        """
        query_text = query_text.strip()
        record = VerificationRecord(
            id=str(uuid.uuid4()),
            query_text=query_text,
            verdict=verdict,
            explanation=explanation,
            sources=sources,
            created_at=datetime.now(timezone.utc),
        )

        doc = {
            "_id": record.id,
            "query_text": record.query_text,
            "query_hash": self._hash_query(query_text),
            "verdict": record.verdict.value,
            "explanation": record.explanation,
            "sources": [s.model_dump() for s in record.sources],
            "created_at": record.created_at,
        }

        try:
            self.collection.insert_one(doc)
        except PyMongoError as e:
            raise CacheWriteError(f"Failed to save verification: {e}") from e

        logger.info("[Cache] Saved verification: %s...", query_text[:50])
        return record

    def get_recent(self, limit: int = 5) -> List[VerificationRecord]:
        """
        Get recent verifications, newest first.

        Raises:
            CacheReadError: If MongoDB cannot be queried
        """
        try:
            docs = list(self.collection.find().sort("created_at", DESCENDING).limit(limit))
        except PyMongoError as e:
            raise CacheReadError(f"Failed to list recent verifications: {e}") from e
        return [self._to_record(doc) for doc in docs]

    def _hash_query(self, query_text: str) -> str:
        """
        SHA256 of the trimmed, lower-cased claim, used as the lookup key.
        """
        normalized = query_text.strip().lower()
        return hashlib.sha256(normalized.encode()).hexdigest()

    def _to_record(self, doc: dict) -> VerificationRecord:
        return VerificationRecord(
            id=str(doc["_id"]),
            query_text=doc.get("query_text", ""),
            verdict=Verdict(doc.get("verdict", Verdict.INCONCLUSIVE.value)),
            explanation=doc.get("explanation", ""),
            sources=[Source(**s) for s in doc.get("sources") or []],
            created_at=doc["created_at"],
        )
