"""
FastAPI application factory.

``create_app()`` assembles the transcription gateway with CORS, error
handlers, the liveness/health endpoints, and the transcription router.
The module-level ``app`` instance allows
``uvicorn transcriber.api.app:app --reload --port 3030``.
"""

import logging
from datetime import UTC, datetime

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from transcriber import __version__
from transcriber.api.middleware.error_handler import register_error_handlers
from transcriber.api.middleware.upload_limit import UploadSizeLimitMiddleware
from transcriber.api.routes import transcription
from transcriber.core.config import get_settings
from transcriber.core.models import HealthResponse, RootResponse


def create_app() -> FastAPI:
    """Build and return a fully configured FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Audio Transcriber",
        description="Upload an audio clip, get its transcript back.",
        version=__version__,
    )

    # -- Upload cap --
    app.add_middleware(UploadSizeLimitMiddleware, max_mb=settings.max_upload_mb)

    # -- CORS --
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -- Error handlers --
    register_error_handlers(app)

    # -- Liveness --
    @app.get("/", response_model=RootResponse, tags=["system"])
    async def root() -> RootResponse:
        return RootResponse()

    @app.get("/health", response_model=HealthResponse, tags=["system"])
    async def health() -> HealthResponse:
        return HealthResponse(timestamp=datetime.now(UTC))

    # -- REST routes --
    app.include_router(transcription.router)

    return app


app = create_app()


def run() -> None:
    """Console entry point: configure logging and serve the gateway."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(app, host=settings.app_host, port=settings.app_port)


if __name__ == "__main__":
    run()
