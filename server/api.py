"""FastAPI backend serving the ``/outfits`` collection."""

from __future__ import annotations

from typing import List

from fastapi import Depends, FastAPI, HTTPException, Response, status

from logic.validation import OutfitCreate, OutfitRecord, OutfitUpdate
from outfit_log.config import OutfitLogConfig
from outfit_log.logging_config import configure_logging, get_logger
from tools.outfit_store import OutfitStore, SQLiteOutfitStore

LOGGER = get_logger(__name__)


def create_app(store: OutfitStore | None = None, config: OutfitLogConfig | None = None) -> FastAPI:
    """Build the API around ``store`` (a SQLite store from config by default)."""

    settings = config or OutfitLogConfig.from_env()
    outfit_store = store or SQLiteOutfitStore(settings.database_path)
    app = FastAPI(title="Outfit Log", version="0.1.0")

    def get_store() -> OutfitStore:
        return outfit_store

    @app.get("/healthz")
    async def healthcheck() -> dict:
        """Lightweight readiness probe."""

        return {
            "status": "ok",
            "service": "outfit-log",
            "environment": settings.environment or "local",
        }

    @app.get("/outfits", response_model=List[OutfitRecord])
    def list_outfits(store: OutfitStore = Depends(get_store)) -> List[OutfitRecord]:
        return store.list_outfits()

    @app.post("/outfits", response_model=OutfitRecord, status_code=status.HTTP_201_CREATED)
    def create_outfit(outfit: OutfitCreate, store: OutfitStore = Depends(get_store)) -> OutfitRecord:
        record = store.create_outfit(outfit)
        LOGGER.info("Outfit created", extra={"outfit_id": record.id})
        return record

    @app.put("/outfits/{outfit_id}", response_model=OutfitRecord)
    def update_outfit(outfit_id: str, update: OutfitUpdate, store: OutfitStore = Depends(get_store)) -> OutfitRecord:
        record = store.update_outfit(outfit_id, update.changes())
        if record is None:
            raise HTTPException(status_code=404, detail="Outfit not found")
        LOGGER.info("Outfit updated", extra={"outfit_id": outfit_id})
        return record

    @app.delete("/outfits/{outfit_id}", status_code=status.HTTP_204_NO_CONTENT)
    def delete_outfit(outfit_id: str, store: OutfitStore = Depends(get_store)) -> Response:
        if not store.delete_outfit(outfit_id):
            raise HTTPException(status_code=404, detail="Outfit not found")
        LOGGER.info("Outfit deleted", extra={"outfit_id": outfit_id})
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return app


def get_app() -> FastAPI:
    """ASGI factory: ``uvicorn --factory server.api:get_app``."""

    configure_logging()
    return create_app()


if __name__ == "__main__":
    import uvicorn

    settings = OutfitLogConfig.from_env()
    uvicorn.run(get_app(), host=settings.host, port=settings.port, reload=False)
