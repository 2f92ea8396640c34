from __future__ import annotations

import logging
import os
from typing import Mapping, Optional

from planner_ai.models import ApiConfig

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes"}


def _flag(env: Mapping[str, str], name: str, default: str = "false") -> bool:
    return env.get(name, default).strip().lower() in _TRUE_VALUES


def _float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Ignoring non-numeric {name}={raw!r}, using {default}")
        return default


def load_api_config(environ: Optional[Mapping[str, str]] = None) -> ApiConfig:
    """Read relay configuration from the environment once."""
    env = os.environ if environ is None else environ

    provider = env.get("API_PROVIDER", "openai").strip().lower()
    if provider not in {"openai", "anthropic"}:
        logger.warning(f"Unknown API_PROVIDER {provider!r}, falling back to openai")
        provider = "openai"

    openai_key = env.get("OPENAI_API_KEY", "").strip()
    if provider == "anthropic":
        api_key = env.get("ANTHROPIC_API_KEY", "").strip() or openai_key
    else:
        api_key = openai_key

    config = ApiConfig(
        api_key=api_key,
        api_provider=provider,
        use_mock_responses=_flag(env, "USE_MOCK_RESPONSES"),
        use_mock_images=_flag(env, "USE_MOCK_IMAGES"),
        image_api_key=openai_key,
        openai_model=env.get("OPENAI_MODEL", "gpt-4o").strip(),
        anthropic_model=env.get("ANTHROPIC_MODEL", "claude-3-opus-20240229").strip(),
        image_model=env.get("OPENAI_IMAGE_MODEL", "dall-e-3").strip(),
        openai_base_url=env.get("OPENAI_BASE_URL", "https://api.openai.com/v1").strip(),
        anthropic_base_url=env.get("ANTHROPIC_BASE_URL", "https://api.anthropic.com/v1").strip(),
        openai_timeout_s=_float(env, "OPENAI_TIMEOUT_S", 30.0),
        anthropic_timeout_s=_float(env, "ANTHROPIC_TIMEOUT_S", 30.0),
        image_timeout_s=_float(env, "IMAGE_TIMEOUT_S", 30.0),
        rate_limit_report_delay_s=_float(env, "RATE_LIMIT_REPORT_DELAY_S", 0.5),
    )

    if not config.api_key and not config.use_mock_responses:
        logger.warning(f"{provider} API key is missing in environment variables")

    return config
