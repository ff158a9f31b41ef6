from fastapi import APIRouter

from frontiercrawl.codec.columns import REQUEST_ROW


def create_systems_router(container_env: dict):
    """Health, effective settings and the request row layout."""
    router = APIRouter(prefix="/systems", tags=["System"])

    @router.get("/health")
    def health():
        return {"status": "ok"}

    @router.get("/config")
    def get_config():
        return {
            "environment": {
                key: str(value) if value is not None else None
                for key, value in container_env.items()
            }
        }

    @router.get("/layout")
    def get_layout():
        """Columns of a stored request row, in order."""
        return {
            "width": REQUEST_ROW.width,
            "columns": [
                {
                    "index": i,
                    "name": col.name,
                    "offset": REQUEST_ROW.offset(i),
                    "width": col.width,
                    "kind": col.kind,
                    "reserved": col.reserved,
                }
                for i, col in enumerate(REQUEST_ROW.columns)
            ],
        }

    return router
