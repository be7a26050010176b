"""
LLM Router
Selects the LLM client used for data analysis, or none for deterministic mode.
"""

import logging
from typing import Optional
from insighthub.core.config import Settings, settings as default_settings
from insighthub.core.logging import setup_logger

SUPPORTED_PROVIDERS = ("none", "gemini", "auto")


def is_llm_configured(config: Optional[Settings] = None) -> bool:
    """
    Check if an LLM provider is enabled and has an API key.
    """
    config = config or default_settings
    return config.LLM_PROVIDER in ("gemini", "auto") and bool(config.GEMINI_API_KEY)


def get_llm_client(
    config: Optional[Settings] = None,
    logger: Optional[logging.Logger] = None
):
    """
    Build the configured LLM client.
    
    Provider selection:
    1) 'none': no client, callers fall back to rule-based insights
    2) 'gemini' / 'auto': Gemini when GEMINI_API_KEY is set
    
    Returns:
        GeminiClient, or None when no provider is usable
    """
    config = config or default_settings
    logger = logger or setup_logger(config.LOG_LEVEL)
    provider = config.LLM_PROVIDER
    
    if provider == "none":
        logger.info("LLM provider not enabled - running in lightweight mode")
        return None
    
    if provider not in SUPPORTED_PROVIDERS:
        logger.warning(f"Unknown LLM_PROVIDER: {provider}, falling back to 'none'")
        return None
    
    if not is_llm_configured(config):
        logger.warning(f"LLM_PROVIDER={provider} but GEMINI_API_KEY is not set")
        return None
    
    from insighthub.llm.gemini_client import GeminiClient
    
    try:
        return GeminiClient(
            api_key=config.GEMINI_API_KEY,
            model=config.GEMINI_MODEL,
            logger=logger
        )
    except ImportError as e:
        logger.error(f"Gemini provider not available: {str(e)}")
        return None
