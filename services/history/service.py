"""History store: save, page through and delete a user's saved checks."""

import math
from datetime import timedelta

from sqlalchemy.orm import Session

from models.database.history import HistoryEntry
from models.history import HistoryCreateRequest, HistoryItem, HistoryPage
from shared.utils import clamp, config, setup_logging, utcnow

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


class HistoryService:
    """CRUD over grammar_history rows, always scoped to one owner."""

    def __init__(self, ttl_days: int | None = None):
        self.logger = setup_logging("history-service")
        self.ttl_days = ttl_days if ttl_days is not None else int(config.get("history_ttl_days", 30))

    def _cutoff(self):
        return utcnow() - timedelta(days=self.ttl_days)

    def purge_expired(self, db: Session) -> int:
        """Delete every row older than the TTL; returns how many were removed."""
        removed = (
            db.query(HistoryEntry)
            .filter(HistoryEntry.created_at < self._cutoff())
            .delete(synchronize_session=False)
        )
        db.commit()
        if removed:
            self.logger.info(f"Purged {removed} expired history entries")
        return removed

    def save(self, db: Session, user_id: int, payload: HistoryCreateRequest) -> HistoryEntry:
        entry = HistoryEntry(
            user_id=user_id,
            original_text=payload.original_text,
            corrected_text=payload.corrected_text,
            suggestions=[s.model_dump() for s in payload.suggestions],
        )
        db.add(entry)
        db.commit()
        db.refresh(entry)
        return entry

    def list_page(
        self, db: Session, user_id: int, page: int = 1, limit: int = DEFAULT_PAGE_SIZE
    ) -> HistoryPage:
        page = clamp(page, 1)
        limit = clamp(limit, 1, MAX_PAGE_SIZE)
        skip = (page - 1) * limit

        self.purge_expired(db)
        query = db.query(HistoryEntry).filter(HistoryEntry.user_id == user_id)
        total = query.count()
        rows = (
            query.order_by(HistoryEntry.created_at.desc(), HistoryEntry.id.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )

        return HistoryPage(
            history=[self._to_item(row) for row in rows],
            total=total,
            page=page,
            limit=limit,
            total_pages=math.ceil(total / limit),
            has_more=skip + len(rows) < total,
        )

    def delete(self, db: Session, user_id: int, entry_id: int) -> bool:
        """Delete an entry if it exists and belongs to the user."""
        entry = (
            db.query(HistoryEntry)
            .filter(HistoryEntry.id == entry_id, HistoryEntry.user_id == user_id)
            .first()
        )
        if entry is None:
            return False
        db.delete(entry)
        db.commit()
        return True

    @staticmethod
    def _to_item(row: HistoryEntry) -> HistoryItem:
        return HistoryItem(
            id=row.id,
            original_text=row.original_text,
            corrected_text=row.corrected_text,
            suggestions=row.suggestions or [],
            created_at=row.created_at,
        )
