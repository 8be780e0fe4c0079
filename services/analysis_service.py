import logging
from typing import Optional

from models.tutor_models import StudentInfo
from prompts.tutor_prompts import build_analysis_prompt
from services.validation import require_fields

logger = logging.getLogger(__name__)

NO_RESPONSE_FALLBACK = "No valid response received from AI"


class AnalysisService:
    """Critiques a student's free-text answer to one quiz question"""

    def __init__(self, llm):
        self.llm = llm

    async def analyze(
        self,
        student_info: Optional[StudentInfo],
        question: Optional[str],
        user_answer: Optional[str],
    ) -> str:
        require_fields(
            "Student info, question, and user answer are all required.",
            studentInfo=student_info,
            question=question,
            userAnswer=user_answer,
        )
        require_fields(
            "Technical level and goal are required.",
            technicalLevel=student_info.technical_level,
            goal=student_info.goal,
        )

        prompt = build_analysis_prompt(
            technical_level=student_info.technical_level,
            goal=student_info.goal,
            question=question,
            user_answer=user_answer,
        ).render()

        text = await self.llm.complete([{"role": "user", "content": prompt}])
        if not text:
            logger.warning("Analysis completion carried no text, returning fallback")
            return NO_RESPONSE_FALLBACK
        return text
