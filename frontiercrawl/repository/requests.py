import logging
from typing import List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from frontiercrawl.codec.row_codec import RequestRowCodec
from frontiercrawl.db.models import RequestRow
from frontiercrawl.domain.request import Request

logger = logging.getLogger(__name__)


class RequestsRepository:
    """Sorted row store for encoded requests.

    Stores rows as opaque bytes keyed by their primary key column and
    iterates them in key byte order. `get_request` / `put_request`
    translate through the row codec.

    Requires an explicit `session_factory` (callable returning a `Session`).
    """
    def __init__(self, session_factory, codec: Optional[RequestRowCodec] = None):
        self.session_factory = session_factory
        self.codec = codec or RequestRowCodec()

    def get_session(self) -> Session:
        return self.session_factory()

    def _check_key(self, key: bytes) -> bytes:
        key = bytes(key)
        if len(key) != self.codec.rowdef.primary_key_width:
            raise ValueError(f"key must have {self.codec.rowdef.primary_key_width} bytes, got {len(key)}")
        return key

    def get(self, key: bytes) -> Optional[bytes]:
        key = self._check_key(key)
        with self.get_session() as session:
            r = session.get(RequestRow, key)
            return bytes(r.row) if r is not None else None

    def has(self, key: bytes) -> bool:
        return self.get(key) is not None

    def put(self, row: bytes) -> None:
        """Insert or replace `row` under its primary key."""
        row = bytes(row)
        if len(row) != self.codec.width:
            raise ValueError(f"row must have {self.codec.width} bytes, got {len(row)}")
        key = self.codec.primary_key(row)
        with self.get_session() as session:
            session.merge(RequestRow(url_hash=key, row=row))
            session.commit()
        logger.debug("Stored request row %s", key.hex())

    def remove(self, key: bytes) -> bool:
        key = self._check_key(key)
        with self.get_session() as session:
            result = session.execute(delete(RequestRow).where(RequestRow.url_hash == key))
            session.commit()
            removed = result.rowcount > 0
        if removed:
            logger.debug("Removed request row %s", key.hex())
        return removed

    def size(self) -> int:
        with self.get_session() as session:
            return session.execute(select(func.count()).select_from(RequestRow)).scalar_one()

    def rows(self, after: Optional[bytes] = None, limit: Optional[int] = None) -> List[bytes]:
        """Rows in ascending key order, optionally starting after key `after`."""
        with self.get_session() as session:
            q = select(RequestRow.row)
            if after is not None:
                q = q.where(RequestRow.url_hash > self._check_key(after))
            q = q.order_by(RequestRow.url_hash)
            if limit is not None:
                q = q.limit(limit)
            return [bytes(r) for r in session.execute(q).scalars().all()]

    def get_request(self, key: bytes) -> Optional[Request]:
        row = self.get(key)
        if row is None:
            return None
        return self.codec.decode(row)

    def put_request(self, request: Request) -> None:
        self.put(self.codec.encode(request))

    def fetch_requests(self, after: Optional[bytes] = None, limit: Optional[int] = None) -> List[Request]:
        return [self.codec.decode(row) for row in self.rows(after=after, limit=limit)]
