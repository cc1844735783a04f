"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from bankroll_tracker.api.dashboard import router as dashboard_router
from bankroll_tracker.api.players import router as players_router
from bankroll_tracker.api.sessions import router as sessions_router
from bankroll_tracker.app_logging import configure_logging
from bankroll_tracker.containers import AppContainer
from bankroll_tracker.domain.errors import (
    BankrollError,
    DuplicatePlayerError,
    PlayerNotFoundError,
    SessionCompletedError,
    SessionNotFoundError,
    TransactionNotFoundError,
    UnbalancedSessionError,
    ValidationError,
)

_ERROR_STATUS: dict[type[BankrollError], int] = {
    SessionNotFoundError: status.HTTP_404_NOT_FOUND,
    PlayerNotFoundError: status.HTTP_404_NOT_FOUND,
    TransactionNotFoundError: status.HTTP_404_NOT_FOUND,
    SessionCompletedError: status.HTTP_409_CONFLICT,
    UnbalancedSessionError: status.HTTP_409_CONFLICT,
    DuplicatePlayerError: status.HTTP_409_CONFLICT,
    ValidationError: 422,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI(title="Bankroll Tracker")
    app.state.container = container

    app.include_router(dashboard_router)
    app.include_router(players_router)
    app.include_router(sessions_router)

    @app.exception_handler(BankrollError)
    async def bankroll_error_handler(
        request: Request, exc: BankrollError
    ) -> JSONResponse:
        status_code = error_status(exc)
        logger.info(
            "Request rejected",
            extra={"path": request.url.path, "error": type(exc).__name__},
        )
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def error_status(exc: BankrollError) -> int:
    """Map a domain error to an HTTP status code."""
    for error_type in type(exc).__mro__:
        if error_type in _ERROR_STATUS:
            return _ERROR_STATUS[error_type]
    return status.HTTP_400_BAD_REQUEST
