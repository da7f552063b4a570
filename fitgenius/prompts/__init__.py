"""Prompts for each AI request kind."""

from fitgenius.prompts.plan_prompt import PLAN_PROMPT
from fitgenius.prompts.advice_prompt import ADVICE_PROMPT
from fitgenius.prompts.report_prompt import REPORT_PROMPT
from fitgenius.prompts.insight_prompt import INSIGHT_PROMPT

__all__ = [
    "PLAN_PROMPT",
    "ADVICE_PROMPT",
    "REPORT_PROMPT",
    "INSIGHT_PROMPT",
]
