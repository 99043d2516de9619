from skillsage.core.config import Settings
from skillsage.db.session import Database
from skillsage.storage.base import Storage
from skillsage.storage.memory import MemoryStorage
from skillsage.storage.sql import SQLStorage


def build_storage(settings: Settings) -> Storage:
    """Pick the backing store once at process start."""
    if settings.STORAGE_BACKEND == "memory":
        return MemoryStorage()
    return SQLStorage(Database(settings.DATABASE_URL))


__all__ = ["Storage", "MemoryStorage", "SQLStorage", "build_storage"]
