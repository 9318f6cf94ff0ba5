"""
Assessment Dependency Provider Module.

Provides the assessment engine, the session repository and the optional
transcription service, all created once by the application factory and
stored on ``app.state``.
"""

import logging
from typing import Annotated

from fastapi import Depends, Request

from app.application.services.assessment_engine import AssessmentEngine
from app.application.services.history_parser import HistoryParser
from app.core.config.settings import Settings
from app.core.interfaces.repositories.assessment_session_repository_interface import (
    IAssessmentSessionRepository,
)
from app.core.interfaces.services.transcription_service_interface import (
    TranscriptionServiceInterface,
)
from app.domain.exceptions import CollaboratorUnavailableError

logger = logging.getLogger(__name__)


def get_assessment_engine(request: Request) -> AssessmentEngine:
    return request.app.state.assessment_engine


def get_session_repository(request: Request) -> IAssessmentSessionRepository:
    return request.app.state.session_repository


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_history_parser(engine: AssessmentEngine = Depends(get_assessment_engine)) -> HistoryParser:
    return engine.history_parser


def get_transcription_service(request: Request) -> TranscriptionServiceInterface:
    """
    Provide the configured transcription service.

    Raises:
        CollaboratorUnavailableError: If voice journaling is disabled
    """
    service = getattr(request.app.state, "transcription_service", None)
    if service is None:
        logger.info("Voice journal requested but transcription is disabled")
        raise CollaboratorUnavailableError(
            "Voice journaling is not enabled", service="transcription"
        )
    return service


# Type aliases for cleaner dependency usage in endpoints
AssessmentEngineDep = Annotated[AssessmentEngine, Depends(get_assessment_engine)]
SessionRepositoryDep = Annotated[IAssessmentSessionRepository, Depends(get_session_repository)]
HistoryParserDep = Annotated[HistoryParser, Depends(get_history_parser)]
SettingsDep = Annotated[Settings, Depends(get_app_settings)]
TranscriptionServiceDep = Annotated[
    TranscriptionServiceInterface, Depends(get_transcription_service)
]
