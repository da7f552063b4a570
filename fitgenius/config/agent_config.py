"""Per-request-kind model configuration for AI content generation."""

from typing import Dict, Any

AGENT_CONFIG: Dict[str, Any] = {
    "plan": {
        "model": "gpt-4o-mini",
        "fallback_model": "claude-3-haiku-20240307",
        "temperature": 0.4,
        "system_prompt": "You are a professional fitness coach. Return only valid structured data.",
    },
    "advice": {
        "model": "gpt-4o-mini",
        "fallback_model": "claude-3-haiku-20240307",
        "temperature": 0.3,
        "system_prompt": "You are a data-driven fitness analyst. Be professional and encouraging.",
    },
    "report": {
        "model": "gpt-4o-mini",
        "fallback_model": "claude-3-haiku-20240307",
        "temperature": 0.2,
        "system_prompt": (
            "You are a senior sports scientist writing a detailed physiological "
            "training report for an athlete."
        ),
    },
    "insight": {
        "model": "gpt-4o-mini",
        "fallback_model": "claude-3-haiku-20240307",
        "temperature": 0.2,
        "system_prompt": "You are a biomechanics expert.",
    },
}
