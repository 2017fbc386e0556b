import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .database import SessionLocal, engine, ensure_sqlite_dir
from .errors import (
    ConfirmationRequiredError,
    ConflictError,
    NotFoundError,
    PartialBatchFailure,
    StoreUnavailableError,
    ValidationError,
)
from .models.generated import Base
from .redis_client import redis_client
from .routers import admin_reservations, availability, courses, reports, reservations
from .services.course_catalog import seed_courses

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    ensure_sqlite_dir()
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        seed_courses(db)
    finally:
        db.close()

    yield


app = FastAPI(title="Lecture Booking API", lifespan=lifespan)

app.include_router(availability.router)
app.include_router(reservations.router)
app.include_router(admin_reservations.router)
app.include_router(reports.router)
app.include_router(courses.router)


# ===== Error mapping =====

@app.exception_handler(ConflictError)
async def conflict_handler(request: Request, exc: ConflictError):
    return JSONResponse(
        status_code=409,
        content={
            "detail": str(exc),
            "date": exc.date.isoformat(),
            "slot": exc.slot.value,
        },
    )


@app.exception_handler(ConfirmationRequiredError)
async def confirmation_handler(request: Request, exc: ConfirmationRequiredError):
    return JSONResponse(
        status_code=428,
        content={
            "detail": str(exc),
            "count": exc.count,
            "threshold": exc.threshold,
        },
    )


@app.exception_handler(ValidationError)
async def validation_handler(request: Request, exc: ValidationError):
    return JSONResponse(
        status_code=400,
        content={"detail": exc.reason, "field": exc.field},
    )


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": "Not found"})


@app.exception_handler(StoreUnavailableError)
async def store_unavailable_handler(request: Request, exc: StoreUnavailableError):
    return JSONResponse(
        status_code=503,
        content={"detail": "Service temporarily unavailable, try again later"},
    )


@app.exception_handler(PartialBatchFailure)
async def partial_batch_handler(request: Request, exc: PartialBatchFailure):
    logger.warning(f"Partial series: succeeded={exc.succeeded}, failed={exc.failed}")
    return JSONResponse(
        status_code=207,
        content={
            "detail": str(exc),
            "succeeded": exc.succeeded,
            "failed": exc.failed,
        },
    )


@app.get("/health")
def health():
    try:
        redis_ok = bool(redis_client.ping())
    except Exception as e:
        logger.warning(f"Redis ping failed: {e}")
        redis_ok = False
    return {"redis": redis_ok}
