"""Exception handlers mapping booking errors to structured JSON responses."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from cabin_rentals.errors import BookingError

logger = logging.getLogger(__name__)


def setup_exception_handlers(app: FastAPI) -> None:
    """Render every :class:`BookingError` as ``{"kind", "detail", "details"}``."""

    @app.exception_handler(BookingError)
    async def booking_error_handler(request: Request, exc: BookingError) -> JSONResponse:
        logger.info("%s %s -> %s: %s", request.method, request.url.path, exc.kind, exc.message)
        return JSONResponse(content=exc.to_dict(), status_code=exc.status_code)
