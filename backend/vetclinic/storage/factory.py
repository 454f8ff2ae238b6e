import logging

from vetclinic.core.config import Settings
from vetclinic.storage.base import Storage
from vetclinic.storage.memory import MemStorage
from vetclinic.storage.seed import seed_demo_data
from vetclinic.storage.sql import SqlStorage

logger = logging.getLogger(__name__)


def build_storage(settings: Settings) -> Storage:
    """Build the configured store and, if asked to, seed it when it is empty."""
    if settings.storage_backend == "sql":
        storage: Storage = SqlStorage.from_url(settings.database_url)
    else:
        storage = MemStorage()
    logger.info("Using %s storage backend", settings.storage_backend)

    if settings.seed_demo_data and storage.is_empty():
        seed_demo_data(storage)
    return storage
