import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.api.v1 import routers
from app.core.config import settings
from app.db.session import connect_db_pool, close_db_pool
from app.middleware.auth_middleware import RouteGuardMiddleware

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await connect_db_pool()
    yield
    await close_db_pool()


app = FastAPI(
    title="Contacts API",
    description="Personal contact manager: login and per-user contact CRUD",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(RouteGuardMiddleware)

app.include_router(routers.router)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    fields = {}
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        fields[".".join(loc) or "body"] = error.get("msg", "Invalid value")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": {"error": "Validation failed", "fields": fields}},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Internal Server Error on {request.method} {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": {"error": "Internal server error"}},
    )


@app.get("/")
async def root():
    return {"message": "Contacts API is running"}
