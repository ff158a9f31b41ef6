from __future__ import annotations


from sqlalchemy import Column, LargeBinary
from sqlalchemy.orm import declarative_base

from frontiercrawl.codec.columns import REQUEST_ROW


Base = declarative_base()


class RequestRow(Base):
    """One encoded request, keyed by its url hash.

    Ordering on `url_hash` is the database's binary collation (memcmp for
    SQLite BLOB, bytea for Postgres).
    """
    __tablename__ = "crawl_requests"

    url_hash = Column(LargeBinary(REQUEST_ROW.primary_key_width), primary_key=True)
    row = Column(LargeBinary(REQUEST_ROW.width), nullable=False)
