# backend/storage/factory.py
import logging
from typing import Optional

from config import settings
from storage.base import Storage

logger = logging.getLogger(__name__)

BACKENDS = ("memory", "database")

_storage: Optional[Storage] = None


def build_storage(backend: Optional[str] = None, seed_samples: Optional[bool] = None) -> Storage:
    backend = (backend or settings.STORAGE_BACKEND).strip().lower()
    if seed_samples is None:
        seed_samples = settings.SEED_SAMPLE_DATA

    if backend == "memory":
        from storage.memory import MemStorage

        storage = MemStorage(seed_samples=seed_samples)
    elif backend == "database":
        from database import init_db
        from storage.database import DatabaseStorage
        from storage.seed import seed_sample_content

        init_db()
        storage = DatabaseStorage()
        storage.seed_admin()
        if seed_samples:
            seed_sample_content(storage)
    else:
        raise ValueError(f"Unknown STORAGE_BACKEND {backend!r}, expected one of {BACKENDS}")

    logger.info("Using %s storage backend", backend)
    return storage


# FastAPI dependency; the store is built once per process
def get_storage() -> Storage:
    global _storage
    if _storage is None:
        _storage = build_storage()
    return _storage
