"""
AI data analysis - prompt construction and response parsing.

The model is asked for a JSON object with a summary, a handful of insights
and a visualization suggestion. Anything that cannot be parsed into that shape
is replaced by a templated response instead of failing the request.
"""

import json
import logging
import re
from typing import Any, Dict, List, Optional, Union

from insighthub.core.config import settings
from insighthub.core.logging import setup_logger
from insighthub.data_processing.schemas import CSVSchema

_JSON_BLOCK = re.compile(r"\{[\s\S]*\}")

FALLBACK_ANALYSIS = {
    "summary": "Analysis completed but structured response could not be generated.",
    "insights": ["The data was processed but no structured insights could be extracted."],
    "visualization_suggestion": "table"
}

PROMPT_TEMPLATE = """You are an AI business intelligence assistant analyzing data for InsightHub.

User Question: {question}

Data Schema: {schema}

Data Sample: {sample}

Based on this information, please provide:
1. A concise summary of the analysis (2-3 sentences)
2. 3-5 key insights from the data
3. A suggestion for the most appropriate visualization type

Format your response as a JSON object with the following structure:
{{
  "summary": "Your summary here",
  "insights": ["Insight 1", "Insight 2", "Insight 3"],
  "visualization_suggestion": "bar chart"
}}
"""


def _schema_to_json(schema: Optional[Union[CSVSchema, Dict[str, Any]]]) -> str:
    if schema is None:
        return "{}"
    if isinstance(schema, CSVSchema):
        schema = schema.to_dict()
    return json.dumps(schema, default=str)


def build_analysis_prompt(
    prompt: str,
    data_context: str,
    schema: Optional[Union[CSVSchema, Dict[str, Any]]] = None,
    max_chars: Optional[int] = None
) -> str:
    """
    Build the analysis prompt sent to the LLM.

    Args:
        prompt: The user's question
        data_context: Raw data text; only the first max_chars characters are sent
        schema: Inferred or stored schema
        max_chars: Sample size in characters (defaults to PROMPT_DATA_CHARS)

    Returns:
        Prompt text
    """
    limit = max_chars if max_chars is not None else settings.PROMPT_DATA_CHARS
    return PROMPT_TEMPLATE.format(
        question=prompt,
        schema=_schema_to_json(schema),
        sample=data_context[:limit]
    )


def _as_insight_list(value: Any) -> List[str]:
    if isinstance(value, list):
        return [str(item) for item in value]
    if value:
        return [str(value)]
    return []


def parse_analysis_response(text: Optional[str]) -> Dict[str, Any]:
    """
    Extract the structured analysis from raw model output.

    The outermost {...} block is parsed as JSON. Missing or invalid JSON
    yields a copy of FALLBACK_ANALYSIS with "structured": False.
    """
    match = _JSON_BLOCK.search(text or "")
    if match:
        try:
            payload = json.loads(match.group(0))
        except json.JSONDecodeError:
            payload = None

        if isinstance(payload, dict):
            suggestion = payload.get(
                "visualization_suggestion",
                payload.get("visualizationSuggestion", FALLBACK_ANALYSIS["visualization_suggestion"])
            )
            return {
                "summary": payload.get("summary", ""),
                "insights": _as_insight_list(payload.get("insights")),
                "visualization_suggestion": suggestion,
                "structured": True
            }

    return {
        **FALLBACK_ANALYSIS,
        "insights": list(FALLBACK_ANALYSIS["insights"]),
        "structured": False
    }


class DataAnalyzer:
    """
    Runs a natural-language question against data through an LLM client.

    The client only needs a generate(prompt) method returning {"text": ...},
    which GeminiClient provides.
    """

    def __init__(self, client: Any, logger: Optional[logging.Logger] = None):
        self.client = client
        self.logger = logger or setup_logger(settings.LOG_LEVEL)

    def analyze(
        self,
        prompt: str,
        data_context: str,
        schema: Optional[Union[CSVSchema, Dict[str, Any]]] = None
    ) -> Dict[str, Any]:
        """
        Ask the LLM to analyze the data.

        Raises:
            Exception: Whatever the client raises; callers decide how to degrade
        """
        full_prompt = build_analysis_prompt(prompt, data_context, schema)

        try:
            response = self.client.generate(full_prompt)
        except Exception as e:
            self.logger.error(f"Error analyzing data with LLM: {str(e)}")
            raise

        result = parse_analysis_response(response.get("text"))
        if not result["structured"]:
            self.logger.warning("LLM response did not contain a JSON object")

        result["provider"] = response.get("provider", "unknown")
        return result
