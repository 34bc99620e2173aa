from __future__ import annotations

import json
import logging
from typing import Any

from career_reimagined.application.exceptions import LLMContractError
from career_reimagined.application.ports.generative_ai import GenerativeAIPort
from career_reimagined.application.utils.plan_schema import CAREER_PLAN_SCHEMA
from career_reimagined.application.utils.prompt_policy import policy_for_subject
from career_reimagined.domain.entities.career_plan import CareerPlan


class GenerateCareerPlanUseCase:
    """
    Ask the AI service for a structured 8-week plan and validate it.

    Raises:
        LLMUpstreamError: provider failures (propagated from the adapter)
        LLMContractError: empty text, invalid JSON, or a payload that is not a plan
    """

    def __init__(self, ai: GenerativeAIPort) -> None:
        self._ai = ai
        self._logger = logging.getLogger(__name__)

    async def execute(self, career: str, subject_descriptor: str) -> CareerPlan:
        policy = policy_for_subject(subject_descriptor)
        prompt = policy.plan_prompt(career, subject_descriptor)

        text = await self._ai.generate_plan(prompt, CAREER_PLAN_SCHEMA)
        if not (text or "").strip():
            raise LLMContractError("Plan: empty response text.")

        data = _parse_json(text, what="plan")
        try:
            plan = CareerPlan.from_payload(data)
        except (TypeError, ValueError) as e:
            raise LLMContractError(f"Plan: invalid shape: {e}") from e

        self._logger.info(
            "Career plan generated",
            extra={"career": career, "policy": policy.name, "fictional": plan.is_fictional},
        )
        return plan


def _parse_json(text: str, what: str) -> Any:
    try:
        return json.loads(text)
    except Exception:
        snippet = text[:200].replace("\n", " ")
        raise LLMContractError(f"{what.capitalize()}: invalid JSON. Snippet: {snippet!r}")
