import os
from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from vidtube.api.v1 import comments, likes, subscriptions, tweets, users, videos
from vidtube.core.config import Settings, get_settings
from vidtube.core.errors import ApiError, StoreError, ValidationError
from vidtube.core.logging import configure_logging
from vidtube.database import init_db, make_engine, make_session_factory
from vidtube.services.media_store import MediaStore, build_media_store

logger = structlog.get_logger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        if exc.status_code >= 500:
            logger.error("request_failed", path=request.url.path, status=exc.status_code, error=exc.message)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = [
            {"field": ".".join(str(part) for part in err.get("loc", ())), "message": err.get("msg")}
            for err in exc.errors()
        ]
        error = ValidationError("Invalid request parameters", errors=errors)
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "statusCode": exc.status_code,
                "message": str(exc.detail),
                "success": False,
                "errors": [],
            },
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(SQLAlchemyError)
    async def store_error_handler(request: Request, exc: SQLAlchemyError):
        logger.exception("database_error", path=request.url.path)
        error = StoreError()
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("unhandled_error", path=request.url.path)
        error = ApiError()
        return JSONResponse(status_code=error.status_code, content=error.to_dict())


def create_app(settings: Optional[Settings] = None, media_store: Optional[MediaStore] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    engine = make_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)
    # Create database tables
    init_db(engine)
    store = media_store or build_media_store(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        # Injected stores belong to the caller
        if media_store is None:
            store.close()
        engine.dispose()
        logger.info("app_stopped", app=settings.APP_NAME)

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.VERSION,
        description="A video sharing platform API built with FastAPI",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = make_session_factory(engine)
    app.state.media_store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Local media is served straight from the static directory
    if media_store is None and settings.MEDIA_BACKEND == "local":
        os.makedirs(settings.STATIC_DIR, exist_ok=True)
        app.mount("/static", StaticFiles(directory=settings.STATIC_DIR), name="static")

    register_exception_handlers(app)

    app.include_router(videos.router, prefix=f"{settings.API_V1_STR}/videos", tags=["Videos"])
    app.include_router(comments.router, prefix=f"{settings.API_V1_STR}/comments", tags=["Comments"])
    app.include_router(tweets.router, prefix=f"{settings.API_V1_STR}/tweets", tags=["Tweets"])
    app.include_router(likes.router, prefix=f"{settings.API_V1_STR}/likes", tags=["Likes"])
    app.include_router(subscriptions.router, prefix=f"{settings.API_V1_STR}/subscriptions", tags=["Subscriptions"])
    app.include_router(users.router, prefix=f"{settings.API_V1_STR}/users", tags=["Users"])

    @app.get("/")
    def root():
        return {
            "message": f"Welcome to {settings.APP_NAME}",
            "version": settings.VERSION,
            "docs": "/docs",
            "redoc": "/redoc"
        }

    @app.get("/health")
    def health_check():
        return {"status": "healthy"}

    logger.info("app_created", app=settings.APP_NAME, media_backend=settings.MEDIA_BACKEND)
    return app


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("vidtube.main:create_app", factory=True, host="0.0.0.0", port=8000, reload=True)
