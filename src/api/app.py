from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from .error import ClientError, ServerError
import logging

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    logger.warning(
        f"Client error on {request.method} {request.url.path}: "
        f"{exc.base_error.code} - {exc.base_error.message}"
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def handle_server_error(request: Request, exc: ServerError):
    logger.error(
        f"Server error on {request.method} {request.url.path}: "
        f"{exc.base_error.code} - {exc.base_error.message}"
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


@asynccontextmanager
async def lifespan(app: FastAPI):
    from src.depends import init_db

    await init_db()
    logger.info("Database schema ready")
    yield


def create_app(ApplicationConfig) -> FastAPI:
    app = FastAPI(title="HR Identity Service", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from src.api.routes import admin, auth, health_check, sessions

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(auth.router, tags=["Authentication"])
    app.include_router(sessions.router, tags=["Sessions"])
    app.include_router(admin.router, tags=["Admin"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)

    return app
