"""
Pydantic models for the tutor endpoints.
Wire names are camelCase (the browser client's shape); Python attributes are snake_case.
Required-ness is enforced by the services so every missing field maps to the same 400.
"""

from typing import Any, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class StudentInfo(_CamelModel):
    """Self-reported profile, supplied fresh on every request"""
    technical_level: Optional[str] = Field(None, alias="technicalLevel")
    goal: Optional[str] = None


class QuizRequestItem(StudentInfo):
    """Single element of the /api/quiz body list. questionNumber is checked by the quiz service, uncoerced."""
    question_number: Optional[Any] = Field(None, alias="questionNumber")


class QuizSessionRequest(StudentInfo):
    """Body for invalidating a cached quiz"""


class ChatMessage(_CamelModel):
    role: str = "user"
    content: Optional[str] = None


class AnalysisRequest(_CamelModel):
    student_info: Optional[StudentInfo] = Field(None, alias="studentInfo")
    question: Optional[str] = None
    user_answer: Optional[str] = Field(None, alias="userAnswer")


class StudyPlanRequest(_CamelModel):
    student_info: Optional[StudentInfo] = Field(None, alias="studentInfo")
    ai_analysis: Optional[str] = Field(None, alias="aiAnalysis")


class QuizQuestionSet(BaseModel):
    """Exactly three non-empty questions, addressed 1-3"""
    model_config = ConfigDict(frozen=True)

    questions: Tuple[str, str, str]

    @field_validator("questions")
    @classmethod
    def _non_empty(cls, value: Tuple[str, str, str]) -> Tuple[str, str, str]:
        if any(not q.strip() for q in value):
            raise ValueError("quiz questions must be non-empty strings")
        return value

    def question(self, number: int) -> str:
        return self.questions[number - 1]

    def as_list(self) -> List[str]:
        return list(self.questions)
