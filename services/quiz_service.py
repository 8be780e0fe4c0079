"""
Quiz generation and lookup.

  get_or_create_quiz: cache-or-generate the three questions for a (level, goal) pair
  get_question      : return question 1-3 from that set
  invalidate        : drop a cached set so the next request regenerates it
"""

import logging
from typing import Optional, Tuple

from models.tutor_models import QuizQuestionSet
from prompts.tutor_prompts import (
    QUIZ_MATERIAL_HEADER,
    build_quiz_prompt,
    build_retrieval_query,
    format_material,
)
from services.quiz_parser import decode_quiz
from services.quiz_store import QuizStore
from services.validation import require_fields, resolve_question_number

logger = logging.getLogger(__name__)

# Nearest neighbours spliced into the quiz prompt as material
QUIZ_TOP_K = 3


class QuizService:

    def __init__(self, store: QuizStore, retrieval, llm):
        self.store = store
        self.retrieval = retrieval
        self.llm = llm

    @staticmethod
    def session_key(technical_level: str, goal: str) -> str:
        return f"{technical_level}-{goal}"

    @staticmethod
    def _clean_profile(technical_level: Optional[str], goal: Optional[str]) -> Tuple[str, str]:
        require_fields(
            "Technical level and goal are required",
            technicalLevel=technical_level,
            goal=goal,
        )
        return technical_level.strip(), goal.strip()

    async def get_or_create_quiz(
        self,
        technical_level: Optional[str],
        goal: Optional[str],
    ) -> QuizQuestionSet:
        technical_level, goal = self._clean_profile(technical_level, goal)
        key = self.session_key(technical_level, goal)
        logger.info(f"Session key: {key}")
        return await self.store.get_or_create(
            key, lambda: self._generate(technical_level, goal)
        )

    async def get_question(
        self,
        technical_level: Optional[str],
        goal: Optional[str],
        question_number: Optional[int] = None,
    ) -> str:
        self._clean_profile(technical_level, goal)
        number = resolve_question_number(question_number)
        quiz = await self.get_or_create_quiz(technical_level, goal)
        return quiz.question(number)

    async def invalidate(self, technical_level: Optional[str], goal: Optional[str]) -> Tuple[str, bool]:
        technical_level, goal = self._clean_profile(technical_level, goal)
        key = self.session_key(technical_level, goal)
        removed = await self.store.invalidate(key)
        logger.info(f"Invalidated quiz session {key}: {removed}")
        return key, removed

    async def _generate(self, technical_level: str, goal: str) -> QuizQuestionSet:
        query = build_retrieval_query(technical_level, goal).render()
        snippets = await self.retrieval.snippets(query, top_k=QUIZ_TOP_K)
        material = format_material(QUIZ_MATERIAL_HEADER, snippets)

        prompt = build_quiz_prompt(technical_level, goal, material).render()
        raw = await self.llm.complete([{"role": "user", "content": prompt}])
        logger.debug(f"Raw generated quiz: {raw}")
        return decode_quiz(raw)
