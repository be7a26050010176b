"""
Gemini LLM Provider
Lazy-loaded integration with Google Gemini API.
Only imports dependencies when this provider is selected.
"""

import logging
from typing import Dict, Any, Optional
from insighthub.core.config import settings
from insighthub.core.logging import setup_logger


class GeminiClient:
    """
    Gemini LLM client with lazy dependency loading.
    """
    
    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize Gemini client.
        
        Args:
            api_key: Google API key (defaults to GEMINI_API_KEY setting)
            model: Model name (defaults to GEMINI_MODEL setting)
            logger: Injected logger
        """
        self.logger = logger or setup_logger(settings.LOG_LEVEL)
        self.api_key = api_key or settings.GEMINI_API_KEY
        self.model = model or settings.GEMINI_MODEL
        if not self.api_key:
            raise ValueError("GEMINI_API_KEY not found in environment variables")
        
        # Lazy import - only load when needed
        try:
            from google import genai
            from google.genai import types
        except ImportError as e:
            raise ImportError(
                f"Google GenAI SDK not installed. Install with: pip install google-genai. Error: {e}"
            ) from e
        
        self.types = types
        self.client = genai.Client(api_key=self.api_key)
        self.logger.info(f"Gemini client initialized model={self.model}")
    
    def generate(
        self,
        prompt: str,
        system: Optional[str] = None,
        temperature: float = 0.7
    ) -> Dict[str, Any]:
        """
        Generate a response using Gemini.
        
        Args:
            prompt: User prompt
            system: System instruction (optional)
            temperature: Sampling temperature
            
        Returns:
            Dict with 'text', 'provider', 'raw' keys
        """
        config_args = {"temperature": temperature}
        if system:
            config_args["system_instruction"] = system
        
        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=prompt,
                config=self.types.GenerateContentConfig(**config_args)
            )
        except Exception as e:
            self.logger.error(f"Gemini generation failed: {str(e)}")
            raise
        
        text = ""
        if response.candidates and response.candidates[0].content.parts:
            for part in response.candidates[0].content.parts:
                if getattr(part, "text", None):
                    text += part.text
        
        self.logger.info("Gemini generation successful")
        
        return {
            "text": text,
            "provider": "gemini",
            "raw": response
        }
