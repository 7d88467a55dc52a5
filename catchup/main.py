from fastapi import FastAPI

from catchup.api.v1.bookings import router as bookings_router
from catchup.api.v1.times import router as times_router
from catchup.core.config import settings
from catchup.core.log_config import configure_logging


def create_app() -> FastAPI:
    configure_logging(settings.LOG_LEVEL)

    application = FastAPI(
        title="CatchUp Booking Gateway",
        description="Booking requests with local fallback, and 12/24-hour time helpers.",
        version="1.0.0",
    )
    application.include_router(bookings_router, prefix="/api/v1", tags=["bookings"])
    application.include_router(times_router, prefix="/api/v1", tags=["times"])

    @application.get("/health", tags=["health"])
    def health() -> dict[str, str]:
        return {"status": "ok"}

    return application


app = create_app()
