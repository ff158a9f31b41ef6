"""Dependency injection container for the application."""
from dependency_injector import containers, providers
from sqlalchemy.orm import sessionmaker

from frontiercrawl import config as env
from frontiercrawl.codec.row_codec import RequestRowCodec
from frontiercrawl.db.engine import make_engine
from frontiercrawl.parser import build_default_dispatcher
from frontiercrawl.repository.requests import RequestsRepository


# Environment variables used by the container (read via `frontiercrawl.config` helpers).
#
# DATABASE_URL (str, default: "sqlite:///frontier.db")
#   SQLAlchemy URL of the database holding the request rows.
#
# FRONTIER_TEMP_DIR (str | optional)
#   Directory for temporary files written while decompressing content.
#   Unset means the platform default temp directory.
#
# FRONTIER_DECOMPRESS_CHUNK_SIZE (int bytes, default: 1024)
#   Read size of the decompression loop; the stop event is checked once per chunk.
#
# FRONTIER_API_HOST (str, default: "0.0.0.0")
# FRONTIER_API_PORT (int, default: 8000)
#   Bind address of the inspection API.
#
# FRONTIER_LOG_LEVEL (str, default: "INFO")
ENV = {
    "DATABASE_URL": env.DATABASE_URL,
    "FRONTIER_TEMP_DIR": env.temp_dir(),
    "FRONTIER_DECOMPRESS_CHUNK_SIZE": env.decompress_chunk_size(),
    "FRONTIER_API_HOST": env.get_str_env("FRONTIER_API_HOST", "0.0.0.0"),
    "FRONTIER_API_PORT": env.get_int_env("FRONTIER_API_PORT", 8000),
    "FRONTIER_LOG_LEVEL": env.log_level(),
}


class Container(containers.DeclarativeContainer):
    """Dependency injection container for frontiercrawl."""

    config = providers.Configuration(default=ENV)

    # Database engine - Singleton to reuse connection pool
    db_engine = providers.Singleton(
        make_engine,
        database_url=config.DATABASE_URL
    )
    session_factory = providers.Factory(
        sessionmaker,
        bind=db_engine,
        future=True
    )

    row_codec = providers.Singleton(RequestRowCodec)

    requests_repository = providers.Singleton(
        RequestsRepository,
        session_factory=session_factory,
        codec=row_codec,
    )

    parser_dispatcher = providers.Singleton(
        build_default_dispatcher,
        temp_dir=config.FRONTIER_TEMP_DIR,
        chunk_size=config.FRONTIER_DECOMPRESS_CHUNK_SIZE.as_(int),
    )
