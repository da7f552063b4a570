"""Chat model construction with an optional Anthropic fallback."""

import importlib
from typing import Optional, Type

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.runnables import Runnable
from langchain_openai import ChatOpenAI
from pydantic import BaseModel

from fitgenius.config.agent_config import AGENT_CONFIG
from fitgenius.config.settings import settings
from fitgenius.utils.logger import setup_logger

logger = setup_logger(__name__)

# Anthropic support is optional; without the package only OpenAI is used.
ChatAnthropic = None
try:  # pragma: no cover - optional dependency
    anthropic_module = importlib.import_module("langchain_anthropic")
    ChatAnthropic = getattr(anthropic_module, "ChatAnthropic", None)
except ImportError:
    logger.info("langchain_anthropic not installed; Anthropic fallback disabled")


def _primary_model(kind: str, config: dict) -> Optional[BaseChatModel]:
    model_name = config.get("model") or settings.openai_model
    if not settings.openai_api_key:
        return None
    try:
        return ChatOpenAI(
            model=model_name,
            temperature=config.get("temperature", 0.3),
            api_key=settings.openai_api_key,
        )
    except Exception as e:
        logger.warning(f"Failed to initialize OpenAI model '{model_name}' for {kind}: {e}")
        return None


def _fallback_model(kind: str, config: dict) -> Optional[BaseChatModel]:
    model_name = config.get("fallback_model")
    if not (settings.anthropic_api_key and model_name):
        return None
    if ChatAnthropic is None:
        logger.warning(f"Cannot use fallback model '{model_name}' for {kind}: langchain_anthropic missing")
        return None
    try:
        return ChatAnthropic(
            model=model_name,
            temperature=config.get("temperature", 0.3),
            anthropic_api_key=settings.anthropic_api_key,
        )
    except Exception as e:
        logger.warning(f"Failed to initialize Anthropic model '{model_name}' for {kind}: {e}")
        return None


def get_llm(kind: str, schema: Optional[Type[BaseModel]] = None) -> Runnable:
    """Model for a request kind ("plan", "advice", "report", "insight").

    With ``schema`` the returned runnable yields parsed ``schema`` instances.
    The fallback is attached after structured output is applied to each
    model, since a fallback wrapper cannot be given a schema afterwards.
    """
    config = AGENT_CONFIG.get(kind)
    if not config:
        raise ValueError(f"No model configuration found for '{kind}'")

    primary = _primary_model(kind, config)
    fallback = _fallback_model(kind, config)

    if schema is not None:
        primary = primary.with_structured_output(schema) if primary else None
        fallback = fallback.with_structured_output(schema) if fallback else None

    if primary and fallback:
        logger.info(f"Configured OpenAI model with Claude fallback for {kind}")
        return primary.with_fallbacks([fallback])
    if primary:
        return primary
    if fallback:
        logger.info(f"Using Claude fallback model as primary for {kind}")
        return fallback

    raise RuntimeError(
        f"Unable to configure chat model for '{kind}'. "
        "Ensure OpenAI or Anthropic credentials are provided."
    )
