import logging

import uvicorn
from fastapi import FastAPI

from frontiercrawl.api.routers import create_requests_router, create_systems_router
from frontiercrawl.container import Container
from frontiercrawl.db.models import Base


def create_app(container: Container) -> FastAPI:
    requests_repo = container.requests_repository()
    Base.metadata.create_all(container.db_engine())

    app = FastAPI(title="frontiercrawl")
    app.include_router(create_requests_router(requests_repo))
    app.include_router(create_systems_router(container.config()))
    return app


def main(container: Container = None):
    container = container or Container()
    logging.basicConfig(
        level=container.config.FRONTIER_LOG_LEVEL() or "INFO",
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = create_app(container)
    uvicorn.run(
        app,
        host=container.config.FRONTIER_API_HOST() or "0.0.0.0",
        port=int(container.config.FRONTIER_API_PORT() or 8000),
    )


if __name__ == '__main__':
    main()
