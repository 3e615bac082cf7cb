from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy import text

from perks.db.session import shutdown
from perks.dependencies import DB
from perks.exceptions import ConflictError, DomainError, NotFoundError, describe_validation_errors
from perks.logging import get_logger
from perks.middleware import RequestIDMiddleware
from perks.routers.perk import router as perk_router
from perks.schemas.error import ErrorResponse

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Close pooled database connections on shutdown."""
    yield
    await shutdown()


app = FastAPI(title="Perks API", lifespan=lifespan)
app.add_middleware(RequestIDMiddleware)
app.include_router(perk_router)


def _error_json(message: str) -> dict[str, object]:
    """Build the standard error body as a dict for JSONResponse."""
    return ErrorResponse(message=message).model_dump()


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content=_error_json(exc.message))


@app.exception_handler(ConflictError)
async def conflict_handler(request: Request, exc: ConflictError) -> JSONResponse:
    logger.warning("conflict", error=exc.message, path=request.url.path)
    return JSONResponse(status_code=409, content=_error_json(exc.message))


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Return 400 for client input that breaks a domain rule."""
    logger.warning("domain_error", error=exc.message, path=request.url.path)
    return JSONResponse(status_code=400, content=_error_json(exc.message))


@app.exception_handler(RequestValidationError)
async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report schema failures as 400 with a readable message instead of FastAPI's 422."""
    message = describe_validation_errors(exc.errors())
    logger.warning("validation_failed", error=message, path=request.url.path)
    return JSONResponse(status_code=400, content=_error_json(message))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log the traceback and return a generic 500 without internals."""
    logger.exception("unhandled_exception", path=request.url.path, method=request.method)
    return JSONResponse(status_code=500, content=_error_json("Internal server error"))


@app.get("/health")
async def health(db: DB) -> dict[str, str]:
    """Verify database connectivity with a ping query."""
    await db.execute(text("SELECT 1"))
    return {"status": "ok"}
