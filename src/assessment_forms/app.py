"""
FastAPI application factory and main app configuration.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from assessment_forms.api.deps import build_form_repository
from assessment_forms.api.errors import domain_error_body, domain_error_status
from assessment_forms.api.routers import assessment_forms, health
from assessment_forms.core.config import Settings, get_settings
from assessment_forms.core.logging import configure_logging
from assessment_forms.domain.errors import DomainError


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    settings: Settings = app.state.settings
    logger = configure_logging(settings.logging)
    logger.info("Starting %s v%s", settings.app_name, settings.app_version)
    logger.info("Environment: %s, storage backend: %s", settings.app_env, settings.storage_backend)

    client = None
    if settings.uses_mongo:
        # Initialize database connection (MongoDB + Beanie)
        from beanie import init_beanie
        from motor.motor_asyncio import AsyncIOMotorClient

        from assessment_forms.adapters.db.mongo.models.assessment_form_m import (
            AssessmentFormMongo,
            use_collection,
        )

        use_collection(settings.database.collection)
        client = AsyncIOMotorClient(
            settings.database.uri,
            serverSelectionTimeoutMS=settings.database.timeout_ms,
            socketTimeoutMS=settings.database.timeout_ms,
        )
        try:
            await init_beanie(
                database=client[settings.database.db_name],
                document_models=[AssessmentFormMongo],
            )
            logger.info("Database connection established")
        except Exception:
            logger.error("Database connection failed", exc_info=True)
            client.close()
            raise

    yield

    # Shutdown
    if client is not None:
        client.close()
    logger.info("Shutting down %s", settings.app_name)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure FastAPI application."""
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Assessment form schemas with branching sub-questions for student progress tracking",
        version=settings.app_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.form_repository = build_form_repository(settings)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.allowed_origins,
        allow_credentials=settings.cors.allow_credentials,
        allow_methods=settings.cors.allowed_methods,
        allow_headers=settings.cors.allowed_headers,
    )

    # Include routers
    app.include_router(health.router)
    app.include_router(assessment_forms.router)

    # Global exception handler for domain errors
    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError):
        return JSONResponse(
            status_code=domain_error_status(exc),
            content={"detail": domain_error_body(exc)},
        )

    # Bodies that cannot be read as a form at all
    @app.exception_handler(RequestValidationError)
    async def malformed_input_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "detail": {
                    "error": "MALFORMED_INPUT",
                    "message": "Request body could not be parsed as an assessment form",
                    "details": {
                        "errors": [
                            {"location": list(err.get("loc", ())), "message": err.get("msg", "")}
                            for err in exc.errors()
                        ]
                    },
                }
            },
        )

    return app


# Create the app instance
app = create_app()
