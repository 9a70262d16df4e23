"""FastAPI application entry point."""
import logging

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

from workout_api.errors import (
    AuthorizationError,
    CancellationError,
    PersistenceError,
    ValidationError,
)
from workout_api.logging_config import configure_logging
from workout_api.routers import workouts


configure_logging()
logger = logging.getLogger(__name__)

# Non-standard status used by proxies for "client closed request".
CLIENT_CLOSED_REQUEST = 499

app = FastAPI(title="Workout Tracking API")


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={
            "detail": "Validation failed",
            "errors": [{"field": e.field, "message": e.message} for e in exc.errors],
        },
    )


@app.exception_handler(AuthorizationError)
async def authorization_error_handler(request: Request, exc: AuthorizationError) -> JSONResponse:
    return JSONResponse(status_code=401, content={"detail": str(exc)})


@app.exception_handler(PersistenceError)
async def persistence_error_handler(request: Request, exc: PersistenceError) -> JSONResponse:
    return JSONResponse(status_code=500, content={"detail": str(exc)})


@app.exception_handler(CancellationError)
async def cancellation_error_handler(request: Request, exc: CancellationError) -> Response:
    logger.info("Request cancelled: %s %s", request.method, request.url.path)
    return Response(status_code=CLIENT_CLOSED_REQUEST)


@app.get("/health", tags=["system"])
async def health_check() -> dict[str, str]:
    """Simple health probe for liveness checks."""
    return {"status": "ok"}


# Include routers
app.include_router(workouts.router)
