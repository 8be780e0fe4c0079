import logging
from typing import Optional

from models.tutor_models import StudentInfo
from prompts.tutor_prompts import build_study_plan_prompt
from services.analysis_service import NO_RESPONSE_FALLBACK
from services.validation import require_fields

logger = logging.getLogger(__name__)


class StudyPlanService:
    """Turns an answer critique into a personalized study plan"""

    def __init__(self, llm):
        self.llm = llm

    async def plan(self, student_info: Optional[StudentInfo], ai_analysis: Optional[str]) -> str:
        require_fields(
            "Student info and AI analysis are required.",
            studentInfo=student_info,
            aiAnalysis=ai_analysis,
        )
        require_fields(
            "Technical level and goal are required.",
            technicalLevel=student_info.technical_level,
            goal=student_info.goal,
        )

        prompt = build_study_plan_prompt(
            technical_level=student_info.technical_level,
            goal=student_info.goal,
            ai_analysis=ai_analysis,
        ).render()

        text = await self.llm.complete([{"role": "user", "content": prompt}])
        if not text:
            logger.warning("Study plan completion carried no text, returning fallback")
            return NO_RESPONSE_FALLBACK
        return text
