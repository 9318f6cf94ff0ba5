"""
Assessment API Endpoints Module.

Exposes the adaptive assessment engine over HTTP: list the question
catalog, start a session, submit answers one at a time, attach a voice
journal, read or discard a session, and compare two stored reports.

Sessions are held in process memory only; completed reports are returned
to the caller, who owns their persistence and sends them back as history.
"""

import logging
from datetime import timedelta
from uuid import UUID

from fastapi import APIRouter, Response, status

from app.domain.exceptions import IncompleteHistoryError
from app.presentation.api.v1.dependencies.assessment import (
    AssessmentEngineDep,
    HistoryParserDep,
    SessionRepositoryDep,
    SettingsDep,
    TranscriptionServiceDep,
)
from app.presentation.api.v1.schemas.assessment import (
    AssessmentReportSchema,
    CompareReportsRequest,
    HistoryComparisonSchema,
    QuestionSchema,
    SessionStatusResponse,
    StartAssessmentRequest,
    StartAssessmentResponse,
    SubmitResponseRequest,
    SubmitResponseResponse,
    VoiceJournalRequest,
    VoiceJournalResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/questions",
    response_model=list[QuestionSchema],
    response_model_by_alias=True,
    summary="List the question catalog",
    status_code=status.HTTP_200_OK,
)
async def list_questions(engine: AssessmentEngineDep) -> list[QuestionSchema]:
    """Return every scripted catalog question in presentation order."""
    return [QuestionSchema.from_entity(q) for q in engine.catalog.ordered()]


@router.post(
    "",
    response_model=StartAssessmentResponse,
    response_model_by_alias=True,
    summary="Start an assessment session",
    status_code=status.HTTP_201_CREATED,
)
async def start_assessment(
    payload: StartAssessmentRequest,
    engine: AssessmentEngineDep,
    repository: SessionRepositoryDep,
    settings: SettingsDep,
) -> StartAssessmentResponse:
    """
    Open a new session and return its first question.

    Sessions older than ``SESSION_MAX_AGE_MINUTES`` are pruned first.

    Args:
        payload: Prior history plus optional mood context
        engine: Assessment engine from app state
        repository: Session storage from app state
        settings: Application settings

    Returns:
        StartAssessmentResponse: Session id and first question
    """
    pruned = await repository.remove_expired(timedelta(minutes=settings.SESSION_MAX_AGE_MINUTES))
    if pruned:
        logger.info(f"Pruned {pruned} expired assessment session(s)")

    started = engine.start(
        prior_history=payload.prior_history,
        mood_description=payload.mood_description,
        mood_rating=payload.mood_rating,
    )
    await repository.add(started.session)
    return StartAssessmentResponse(
        session_id=started.session.id,
        state=started.session.state,
        question=QuestionSchema.from_entity(started.question),
        indicated_conditions=list(started.session.mood.indicated_conditions),
    )


@router.post(
    "/compare",
    response_model=HistoryComparisonSchema,
    response_model_by_alias=True,
    summary="Compare two assessment reports",
    status_code=status.HTTP_200_OK,
)
async def compare_reports(
    payload: CompareReportsRequest,
    parser: HistoryParserDep,
    engine: AssessmentEngineDep,
) -> HistoryComparisonSchema:
    """
    Compare a report with an earlier one.

    Raises:
        IncompleteHistoryError: If the current report cannot be read
    """
    current = parser.parse_entry(payload.current)
    previous = None
    if payload.previous is not None:
        try:
            previous = parser.parse_entry(payload.previous)
        except IncompleteHistoryError as e:
            logger.warning(f"Previous report unreadable, comparing as initial: {e.message}")
    comparison = engine.comparator.compare(current, previous)
    return HistoryComparisonSchema.from_value(comparison)


@router.post(
    "/{session_id}/responses",
    response_model=SubmitResponseResponse,
    response_model_by_alias=True,
    summary="Submit an answer to the pending question",
    status_code=status.HTTP_200_OK,
)
async def submit_response(
    session_id: UUID,
    payload: SubmitResponseRequest,
    engine: AssessmentEngineDep,
    repository: SessionRepositoryDep,
) -> SubmitResponseResponse:
    """
    Record one answer and return the next step.

    The response carries either the next question or, once the session is
    complete, the final report and the comparison with prior history.
    """
    session = await repository.get(session_id)
    result = await engine.submit(session, payload.question_id, payload.value)
    return SubmitResponseResponse(
        session_id=session.id,
        state=result.state,
        complete=result.complete,
        question=QuestionSchema.from_entity(result.question) if result.question else None,
        report=AssessmentReportSchema.from_entity(result.report) if result.report else None,
        history_delta=(
            HistoryComparisonSchema.from_value(result.history_delta)
            if result.history_delta
            else None
        ),
    )


@router.post(
    "/{session_id}/voice-journal",
    response_model=VoiceJournalResponse,
    response_model_by_alias=True,
    summary="Attach a voice journal to a session",
    status_code=status.HTTP_200_OK,
)
async def attach_voice_journal(
    session_id: UUID,
    payload: VoiceJournalRequest,
    engine: AssessmentEngineDep,
    repository: SessionRepositoryDep,
    transcription: TranscriptionServiceDep,
) -> VoiceJournalResponse:
    """
    Transcribe a recorded journal entry and attach it as mood context.

    A failed transcription is reported to the caller and leaves the
    session untouched; the assessment itself can still be completed.
    """
    session = await repository.get(session_id)
    text = await transcription.transcribe(
        payload.audio_bytes(), filename=payload.filename, content_type=payload.content_type
    )
    engine.attach_transcript(session, text)
    return VoiceJournalResponse(attached=bool(text.strip()), characters=len(text))


@router.get(
    "/{session_id}",
    response_model=SessionStatusResponse,
    response_model_by_alias=True,
    summary="Get assessment session status",
    status_code=status.HTTP_200_OK,
)
async def get_session(session_id: UUID, repository: SessionRepositoryDep) -> SessionStatusResponse:
    session = await repository.get(session_id)
    return SessionStatusResponse(
        session_id=session.id,
        state=session.state,
        complete=session.complete,
        answered=len(session.history),
        created_at=session.created_at,
        question=(
            QuestionSchema.from_entity(session.pending_question)
            if session.pending_question
            else None
        ),
        indicated_conditions=list(session.mood.indicated_conditions),
        report=AssessmentReportSchema.from_entity(session.report) if session.report else None,
        history_delta=(
            HistoryComparisonSchema.from_value(session.history_delta)
            if session.history_delta
            else None
        ),
    )


@router.delete(
    "/{session_id}",
    summary="Discard an assessment session",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_session(session_id: UUID, repository: SessionRepositoryDep) -> Response:
    await repository.remove(session_id)
    logger.info(f"Assessment session {session_id} discarded")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
