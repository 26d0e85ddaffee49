import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from task_manager.config import Settings, setup_logging
from task_manager.database import build_engine, build_session_factory, init_db
from task_manager.routers import auth, tasks
from task_manager.services.token_service import TokenService

logger = logging.getLogger(__name__)


def _format_validation_errors(exc: RequestValidationError) -> list:
    errors = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ())]
        # Drop the "body"/"query"/"path" prefix so the client sees field names
        if loc and loc[0] in ("body", "query", "path"):
            loc = loc[1:]
        errors.append({"field": ".".join(loc), "message": error.get("msg", "Invalid value")})
    return errors


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()
    setup_logging(settings.log_level)
    settings.warn_if_insecure()

    engine = build_engine(settings.database_url)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Create missing tables on startup, release the pool on shutdown"""
        logger.info("Starting Task Manager API...")
        init_db(engine)
        yield
        logger.info("Shutting down Task Manager API...")
        engine.dispose()

    app = FastAPI(title="Task Manager API", lifespan=lifespan)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.token_service = TokenService(
        secret_key=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expires_delta=settings.access_token_expires,
    )

    # CORS configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Malformed input is a client error: 400 with per-field detail
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={"detail": "Validation failed", "errors": _format_validation_errors(exc)},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})

    # Route registration
    app.include_router(auth.router, prefix="/auth", tags=["Authentication"])
    app.include_router(tasks.router, prefix="/tasks", tags=["Tasks"])

    # Root route
    @app.get("/")
    def read_root():
        return {"message": "Task Manager API is running!"}

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


app = create_app()
