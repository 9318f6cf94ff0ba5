"""
Dependencies specific to the v1 API endpoints.

This module re-exports dependency functions required by
v1 API endpoints for improved code organization.
"""

# flake8: noqa: F401 - Allow unused imports for re-export

from app.presentation.api.v1.dependencies.assessment import (
    AssessmentEngineDep,
    HistoryParserDep,
    SessionRepositoryDep,
    SettingsDep,
    TranscriptionServiceDep,
    get_app_settings,
    get_assessment_engine,
    get_history_parser,
    get_session_repository,
    get_transcription_service,
)

__all__ = [
    "AssessmentEngineDep",
    "HistoryParserDep",
    "SessionRepositoryDep",
    "SettingsDep",
    "TranscriptionServiceDep",
    "get_app_settings",
    "get_assessment_engine",
    "get_history_parser",
    "get_session_repository",
    "get_transcription_service",
]
