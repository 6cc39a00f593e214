"""Generative assessment boundary: schemas and the LiteLLM assessor."""

from agentready.analysis.llm._llm_call import (
    CompletionResult,
    guarded_completion,
)
from agentready.analysis.llm.assessor import LiteLLMAssessor, parse_assessment
from agentready.analysis.llm.schemas import AIAssessment, CategoryScores

__all__ = [
    "AIAssessment",
    "CategoryScores",
    "CompletionResult",
    "LiteLLMAssessor",
    "guarded_completion",
    "parse_assessment",
]
