from typing import Dict, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from frontiercrawl import config

# One Engine per database URL and process, so repositories share a connection pool.
_ENGINES: Dict[str, Engine] = {}


def make_engine(database_url: Optional[str] = None) -> Engine:
    """Create or return the cached SQLAlchemy Engine for `database_url`."""
    database_url = database_url or config.DATABASE_URL
    if not database_url:
        raise RuntimeError("DATABASE_URL not set")
    engine = _ENGINES.get(database_url)
    if engine is None:
        engine = create_engine(database_url, future=True)
        _ENGINES[database_url] = engine
    return engine
