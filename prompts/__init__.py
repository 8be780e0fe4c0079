# Prompts module initialization

from .tutor_prompts import (
    Prompt,
    render_prompt,
    build_retrieval_query,
    build_quiz_prompt,
    build_analysis_prompt,
    build_study_plan_prompt,
    format_material,
    CHAT_SYSTEM_PROMPT,
    QUIZ_SYSTEM_PROMPT
)

__all__ = [
    'Prompt',
    'render_prompt',
    'build_retrieval_query',
    'build_quiz_prompt',
    'build_analysis_prompt',
    'build_study_plan_prompt',
    'format_material',
    'CHAT_SYSTEM_PROMPT',
    'QUIZ_SYSTEM_PROMPT'
]
