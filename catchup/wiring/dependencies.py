from functools import lru_cache
import logging

from catchup.core.config import settings
from catchup.application.ports.local_storage import LocalStoragePort
from catchup.application.use_cases.resilient_store import ResilientBookingStore
from catchup.infrastructure.remote.bookings_api import RemoteBookingStore
from catchup.infrastructure.store.json_file_storage import JsonFileLocalStorage
from catchup.infrastructure.store.local_booking_store import LocalBookingStore
from catchup.infrastructure.store.memory_storage import MemoryLocalStorage


@lru_cache
def get_local_storage() -> LocalStoragePort:
    logger = logging.getLogger(__name__)
    provider = settings.LOCAL_STORE_PROVIDER.lower()
    if provider == "memory":
        logger.info("Using MemoryLocalStorage")
        return MemoryLocalStorage()
    if provider != "json":
        logger.warning("Unknown LOCAL_STORE_PROVIDER, using json", extra={"provider": provider})
    logger.info("Using JsonFileLocalStorage", extra={"data_dir": settings.LOCAL_STORAGE_DIR})
    return JsonFileLocalStorage(data_dir=settings.LOCAL_STORAGE_DIR)


@lru_cache
def get_remote_booking_store() -> RemoteBookingStore:
    return RemoteBookingStore(
        base_url=settings.BOOKINGS_API_BASE_URL,
        timeout=settings.BOOKINGS_API_TIMEOUT_SECONDS,
    )


@lru_cache
def get_local_booking_store() -> LocalBookingStore:
    return LocalBookingStore(storage=get_local_storage(), key=settings.BOOKINGS_STORAGE_KEY)


def get_booking_store() -> ResilientBookingStore:
    return ResilientBookingStore(
        remote=get_remote_booking_store(),
        local=get_local_booking_store(),
    )
