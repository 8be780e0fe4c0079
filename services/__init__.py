from services.quiz_store import QuizStore, InMemoryQuizStore, RedisQuizStore
from services.quiz_service import QuizService
from services.analysis_service import AnalysisService
from services.study_plan_service import StudyPlanService
from services.chat_service import ChatService
from services.retrieval_service import RetrievalService

__all__ = [
    'QuizStore',
    'InMemoryQuizStore',
    'RedisQuizStore',
    'QuizService',
    'AnalysisService',
    'StudyPlanService',
    'ChatService',
    'RetrievalService'
]
