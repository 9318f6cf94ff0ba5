"""
Global test configuration for the entire test suite.

This module contains fixtures and configurations that should be available
to all tests in the application. It is automatically loaded by pytest.
"""

import logging
import os
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

# Collaborators and Sentry stay off for every test run
os.environ.setdefault("ENVIRONMENT", "test")

from app.app_factory import create_application  # noqa: E402
from app.application.services.assessment_engine import AssessmentEngine  # noqa: E402
from app.core.config.settings import Settings  # noqa: E402
from app.domain.entities.question import Question  # noqa: E402
from app.domain.enums.assessment import AnswerType, QuestionCategory  # noqa: E402
from app.domain.services.question_catalog import QuestionCatalog  # noqa: E402
from app.infrastructure.catalog import load_catalog  # noqa: E402
from app.infrastructure.ml import MockTranscriptionService  # noqa: E402

logger = logging.getLogger(__name__)

SLEEP_OPTIONS = (
    "Trouble falling asleep",
    "Waking up during the night",
    "Waking up too early",
    "Sleeping too much",
    "Not feeling rested after sleep",
)


@pytest.fixture
def mood_question() -> Question:
    return Question(
        id="dep-mood",
        text="How low has your mood been over the past two weeks?",
        answer_type=AnswerType.SCALE,
        category=QuestionCategory.EMOTIONAL,
        sub_category="mood",
        conditions=("depression",),
        scale_reference="PHQ-9",
    )


@pytest.fixture
def sleep_question() -> Question:
    return Question(
        id="sleep",
        text="Which of these sleep problems have you had recently?",
        answer_type=AnswerType.MULTI_SELECT,
        category=QuestionCategory.BEHAVIORAL,
        sub_category="sleep",
        options=SLEEP_OPTIONS,
        conditions=("depression", "anxiety"),
    )


@pytest.fixture
def small_catalog(mood_question: Question, sleep_question: Question) -> QuestionCatalog:
    """Two-question catalog: a depression scale then a sleep multi-select."""
    return QuestionCatalog([mood_question, sleep_question])


@pytest.fixture(scope="session")
def bundled_catalog() -> QuestionCatalog:
    return load_catalog()


@pytest.fixture
def engine(small_catalog: QuestionCatalog) -> AssessmentEngine:
    return AssessmentEngine(small_catalog)


@pytest.fixture
def test_settings() -> Settings:
    """
    Create test application settings.

    No external service is enabled and nothing is written to disk.
    """
    return Settings(
        ENVIRONMENT="test",
        TESTING=True,
        LOG_LEVEL="WARNING",
        LOG_TO_FILE=False,
        SENTRY_DSN=None,
        FOLLOW_UP_GENERATION_ENABLED=False,
        TRANSCRIPTION_ENABLED=False,
    )


@pytest.fixture
def transcription_service() -> MockTranscriptionService:
    return MockTranscriptionService(text="I have been feeling anxious and tired all week")


@pytest.fixture
def test_app(test_settings: Settings, transcription_service: MockTranscriptionService) -> FastAPI:
    return create_application(
        settings_override=test_settings,
        transcription_override=transcription_service,
    )


@pytest_asyncio.fixture
async def client(test_app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client bound to the test application, no network involved."""
    async with AsyncClient(
        transport=ASGITransport(app=test_app), base_url="http://testserver"
    ) as async_client:
        yield async_client
