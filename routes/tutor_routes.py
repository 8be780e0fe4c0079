"""
FastAPI routes for the onboarding tutor.

  POST   /api/chat      : stream a retrieval-augmented reply to the transcript
  POST   /api/quiz      : return question N (1-3) of the cached/generated quiz
  DELETE /api/quiz      : drop the cached quiz for a (technicalLevel, goal) pair
  POST   /api/analysis  : critique a student's answer
  POST   /api/studyplan : build a study plan from the critique

Text results are returned as text/plain; errors as JSON via the app's handlers.
"""

import logging
from typing import List

from fastapi import APIRouter, Body, Depends
from fastapi.responses import PlainTextResponse, StreamingResponse

from models.tutor_models import (
    AnalysisRequest,
    ChatMessage,
    QuizRequestItem,
    QuizSessionRequest,
    StudyPlanRequest,
)
from services.analysis_service import AnalysisService
from services.chat_service import ChatService
from services.container import (
    get_analysis_service,
    get_chat_service,
    get_quiz_service,
    get_study_plan_service,
)
from services.quiz_service import QuizService
from services.study_plan_service import StudyPlanService
from utils.exceptions import ValidationError

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["tutor"])


@router.post("/chat")
async def chat(
    messages: List[ChatMessage] = Body(...),
    chat_service: ChatService = Depends(get_chat_service),
):
    """
    Reply to the onboarding conversation.

    Body: the full ordered transcript, [{role, content}, ...]; the last entry
    is the student's new message. No state is kept between calls.
    """
    transcript = await chat_service.prepare(messages)

    # Pull the first delta before the status line goes out, so model
    # connect/auth failures reach the error handlers as a 500.
    deltas = chat_service.stream(transcript)
    try:
        first = await deltas.__anext__()
    except StopAsyncIteration:
        first = None

    async def text_stream():
        if first is None:
            return
        yield first
        try:
            async for delta in deltas:
                yield delta
        except Exception as e:
            logger.error(f"Chat stream failed: {e}", exc_info=True)
            raise

    return StreamingResponse(text_stream(), media_type="text/plain; charset=utf-8")


@router.post("/quiz", response_class=PlainTextResponse)
async def get_quiz_question(
    items: List[QuizRequestItem] = Body(...),
    quiz_service: QuizService = Depends(get_quiz_service),
):
    """
    Return one question of the student's quiz.

    Body: [{technicalLevel, goal, questionNumber?}]. questionNumber defaults to 1.
    The three questions are generated once per (technicalLevel, goal) pair and
    served from the session store afterwards.
    """
    if not items:
        raise ValidationError("Invalid input data", error_code="INVALID_REQUEST")

    student = items[0]
    question = await quiz_service.get_question(
        student.technical_level,
        student.goal,
        student.question_number,
    )
    return PlainTextResponse(question)


@router.delete("/quiz")
async def invalidate_quiz(
    body: QuizSessionRequest = Body(...),
    quiz_service: QuizService = Depends(get_quiz_service),
):
    """Forget the cached quiz so the next request generates a fresh set."""
    key, removed = await quiz_service.invalidate(body.technical_level, body.goal)
    return {"session_key": key, "invalidated": removed}


@router.post("/analysis", response_class=PlainTextResponse)
async def analyze_answer(
    body: AnalysisRequest = Body(...),
    analysis_service: AnalysisService = Depends(get_analysis_service),
):
    """Body: {studentInfo: {technicalLevel, goal}, question, userAnswer}."""
    critique = await analysis_service.analyze(body.student_info, body.question, body.user_answer)
    return PlainTextResponse(critique)


@router.post("/studyplan", response_class=PlainTextResponse)
async def study_plan(
    body: StudyPlanRequest = Body(...),
    study_plan_service: StudyPlanService = Depends(get_study_plan_service),
):
    """Body: {studentInfo: {technicalLevel, goal}, aiAnalysis}."""
    plan = await study_plan_service.plan(body.student_info, body.ai_analysis)
    return PlainTextResponse(plan)
