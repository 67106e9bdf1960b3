"""
Process-wide storage instance selected by STORAGE_BACKEND
"""

import logging
from typing import Optional

from tuca.core.settings import settings
from tuca.storage.base import Storage
from tuca.storage.memory import MemStorage

logger = logging.getLogger(__name__)

_storage: Optional[Storage] = None


async def init_storage() -> Storage:
    global _storage
    if _storage is not None:
        return _storage

    if settings.STORAGE_BACKEND == "database":
        from tuca.storage.database import DatabaseStorage

        storage = DatabaseStorage()
        await storage.initialize(seed=settings.SEED_SAMPLE_DATA)
    else:
        storage = MemStorage(seed=settings.SEED_SAMPLE_DATA)

    _storage = storage
    logger.info(f"Storage backend ready: {settings.STORAGE_BACKEND}")
    return storage


async def close_storage() -> None:
    global _storage
    if _storage is not None:
        await _storage.close()
        _storage = None


def set_storage(storage: Optional[Storage]) -> None:
    """Replace the active storage, e.g. with a fresh MemStorage between tests"""
    global _storage
    _storage = storage


def get_storage() -> Storage:
    """FastAPI dependency returning the active storage"""
    global _storage
    if _storage is None:
        if settings.STORAGE_BACKEND != "memory":
            raise RuntimeError(
                f"{settings.STORAGE_BACKEND} storage is not initialized; run the app lifespan or call init_storage() first"
            )
        # Requests served without the lifespan hook (plain TestClient) get a fresh memory store
        logger.warning("Storage used before init_storage(); creating in-memory storage")
        _storage = MemStorage(seed=settings.SEED_SAMPLE_DATA)
    return _storage
