"""
Application Factory Module.

This module contains the factory function for creating a FastAPI application
with all necessary middleware, routers, and dependencies.
"""

# Standard Library Imports
import logging
import traceback
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

# Third-Party Imports
import sentry_sdk
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# Application-Specific Imports
from app.application.services.assessment_engine import AssessmentEngine
from app.core.config import Settings
from app.core.config.settings import get_settings
from app.core.interfaces.services.question_generator_interface import (
    QuestionGeneratorInterface,
)
from app.core.interfaces.services.transcription_service_interface import (
    TranscriptionServiceInterface,
)
from app.core.logging_config import build_logging_config, setup_logging
from app.domain.exceptions import (
    CollaboratorUnavailableError,
    IncompleteHistoryError,
    InvalidResponseError,
    QuestionNotFoundError,
    SessionNotFoundError,
    ValidationError,
)
from app.domain.services.branching_selector import ConcernRules
from app.infrastructure.catalog import load_catalog
from app.infrastructure.ml import OllamaQuestionGenerator, WhisperTranscriptionService
from app.infrastructure.repositories.memory import InMemoryAssessmentSessionRepository
from app.presentation.api.v1.api_router import api_v1_router
from app.presentation.middleware.request_id import RequestIdMiddleware

logger = logging.getLogger(__name__)


# --- Helper Functions ---
def _initialize_sentry(settings: Settings) -> None:
    """Initializes Sentry if DSN is provided."""
    if settings.SENTRY_DSN:
        logger.info("Sentry DSN found, initializing Sentry.")
        try:
            sentry_sdk.init(
                dsn=str(settings.SENTRY_DSN),
                traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
                environment=settings.ENVIRONMENT,
                release=settings.API_VERSION,
                # answers and journals are health data
                send_default_pii=False,
            )
        except Exception as e:
            logger.error(f"Failed to initialize Sentry: {e}", exc_info=True)
    else:
        logger.info("Sentry DSN not provided, skipping Sentry initialization.")


def _build_question_generator(settings: Settings) -> QuestionGeneratorInterface | None:
    if not settings.FOLLOW_UP_GENERATION_ENABLED:
        logger.info("Follow-up generation disabled, using template follow-ups only.")
        return None
    logger.info(
        f"Follow-up generation enabled: {settings.QUESTION_GENERATOR_URL} "
        f"(model {settings.QUESTION_GENERATOR_MODEL})"
    )
    return OllamaQuestionGenerator(
        base_url=settings.QUESTION_GENERATOR_URL,
        model=settings.QUESTION_GENERATOR_MODEL,
        timeout=settings.QUESTION_GENERATOR_TIMEOUT_SECONDS,
    )


def _build_transcription_service(settings: Settings) -> TranscriptionServiceInterface | None:
    if not settings.TRANSCRIPTION_ENABLED:
        logger.info("Transcription disabled, voice journaling unavailable.")
        return None
    return WhisperTranscriptionService(
        base_url=settings.TRANSCRIPTION_URL,
        model=settings.TRANSCRIPTION_MODEL,
        timeout=settings.TRANSCRIPTION_TIMEOUT_SECONDS,
    )


def _error_response(status_code: int, message: str, **extra: object) -> JSONResponse:
    content: dict[str, object] = {"detail": message}
    content.update({k: v for k, v in extra.items() if v is not None})
    return JSONResponse(status_code=status_code, content=content)


@asynccontextmanager
async def lifespan(fastapi_app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Lifespan context manager for FastAPI application.

    Sessions live in process memory, so shutdown only reports how many
    sessions are discarded.
    """
    logger.info("Application startup complete.")
    yield
    repository = getattr(fastapi_app.state, "session_repository", None)
    remaining = len(repository) if repository is not None else 0
    logger.info(f"Application shutting down, discarding {remaining} in-memory session(s).")


def create_application(
    settings_override: Settings | None = None,
    question_generator_override: QuestionGeneratorInterface | None = None,
    transcription_override: TranscriptionServiceInterface | None = None,
) -> FastAPI:
    """
    Create and configure a FastAPI application instance.

    Args:
        settings_override: Override default settings (useful for testing)
        question_generator_override: Use this follow-up generator regardless of settings
        transcription_override: Use this transcription service regardless of settings

    Returns:
        FastAPI: Configured FastAPI application instance

    Raises:
        ConfigurationError: If the question catalog is missing or invalid
    """
    current_settings = settings_override or get_settings()

    setup_logging(
        build_logging_config(
            level=current_settings.LOG_LEVEL,
            log_to_file=current_settings.LOG_TO_FILE,
            log_dir=current_settings.LOG_DIR,
        )
    )
    logger.info(f"Creating application for environment: {current_settings.ENVIRONMENT}")
    _initialize_sentry(current_settings)

    # A broken catalog is fatal at startup
    catalog = load_catalog(current_settings.QUESTION_CATALOG_PATH)
    engine = AssessmentEngine(
        catalog,
        concern_rules=ConcernRules(multi_select_min=current_settings.MULTI_SELECT_CONCERN_THRESHOLD),
        scale_factor=current_settings.SCORE_SCALE_FACTOR,
        question_generator=question_generator_override or _build_question_generator(current_settings),
        generator_timeout=current_settings.QUESTION_GENERATOR_TIMEOUT_SECONDS,
    )

    app_instance = FastAPI(
        title=current_settings.API_TITLE,
        description=current_settings.API_DESCRIPTION,
        version=current_settings.API_VERSION,
        openapi_url="/openapi.json",
        docs_url="/docs",
        redoc_url="/redoc",
        default_response_class=JSONResponse,
        lifespan=lifespan,
    )

    # --- Exception handlers ---
    @app_instance.exception_handler(StarletteHTTPException)
    async def starlette_http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        logger.info(f"Starlette HTTP Exception: {exc.status_code} - {exc.detail}")
        if exc.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR:
            return _error_response(exc.status_code, "An internal server error occurred.")
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": str(exc.detail)},
            headers=exc.headers or {},
        )

    @app_instance.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        logger.info(f"FastAPI HTTP Exception: {exc.status_code} - {exc.detail}")
        if exc.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR:
            return _error_response(exc.status_code, "An internal server error occurred.")
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": str(exc.detail)},
            headers=exc.headers or {},
        )

    @app_instance.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Handle validation errors with detailed information."""
        logger.warning(f"Validation error on {request.url.path}: {len(exc.errors())} error(s)")
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": jsonable_errors(exc)},
        )

    @app_instance.exception_handler(InvalidResponseError)
    async def invalid_response_handler(request: Request, exc: InvalidResponseError) -> JSONResponse:
        # the submitted value is not echoed back or logged
        logger.info(f"Rejected response for question '{exc.question_id}': {exc.message}")
        return _error_response(
            status.HTTP_400_BAD_REQUEST, exc.message, questionId=exc.question_id
        )

    @app_instance.exception_handler(SessionNotFoundError)
    async def session_not_found_handler(request: Request, exc: SessionNotFoundError) -> JSONResponse:
        return _error_response(status.HTTP_404_NOT_FOUND, exc.message)

    @app_instance.exception_handler(QuestionNotFoundError)
    async def question_not_found_handler(
        request: Request, exc: QuestionNotFoundError
    ) -> JSONResponse:
        return _error_response(status.HTTP_404_NOT_FOUND, exc.message)

    @app_instance.exception_handler(IncompleteHistoryError)
    async def incomplete_history_handler(
        request: Request, exc: IncompleteHistoryError
    ) -> JSONResponse:
        return _error_response(status.HTTP_422_UNPROCESSABLE_ENTITY, exc.message)

    @app_instance.exception_handler(ValidationError)
    async def domain_validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
        return _error_response(status.HTTP_422_UNPROCESSABLE_ENTITY, exc.message)

    @app_instance.exception_handler(CollaboratorUnavailableError)
    async def collaborator_unavailable_handler(
        request: Request, exc: CollaboratorUnavailableError
    ) -> JSONResponse:
        logger.warning(f"Collaborator '{exc.service}' unavailable: {exc.message}")
        return _error_response(
            status.HTTP_503_SERVICE_UNAVAILABLE, exc.message, service=exc.service
        )

    @app_instance.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """
        Handle all unhandled exceptions with a generic error message.

        No exception detail reaches the client.
        """
        logger.error(f"Unhandled exception: {type(exc).__name__}: {exc!s}")
        logger.debug(traceback.format_exc())
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "An internal server error occurred."
        )

    # --- Application state ---
    app_instance.state.settings = current_settings
    app_instance.state.assessment_engine = engine
    app_instance.state.session_repository = InMemoryAssessmentSessionRepository()
    app_instance.state.transcription_service = (
        transcription_override or _build_transcription_service(current_settings)
    )

    # --- Middleware ---
    if current_settings.CORS_ORIGINS:
        app_instance.add_middleware(
            CORSMiddleware,
            allow_origins=[str(origin) for origin in current_settings.CORS_ORIGINS],
            allow_credentials=current_settings.CORS_ALLOW_CREDENTIALS,
            allow_methods=current_settings.CORS_ALLOW_METHODS,
            allow_headers=current_settings.CORS_ALLOW_HEADERS,
        )
    app_instance.add_middleware(RequestIdMiddleware)

    # --- Routers ---
    app_instance.include_router(api_v1_router, prefix=current_settings.API_V1_STR)

    logger.info(
        f"Application created with {len(catalog)} catalog questions "
        f"(follow-up generation {'on' if engine.question_generator else 'off'}, "
        f"transcription {'on' if app_instance.state.transcription_service else 'off'})"
    )
    return app_instance


def jsonable_errors(exc: RequestValidationError) -> list[dict[str, object]]:
    """Validation errors without the rejected input values."""
    return [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}
        for error in exc.errors()
    ]
