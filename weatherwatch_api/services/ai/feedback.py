"""
Feedback Relay for the Hugging Face Inference API

Forwards chart data, wrapped in an analysis prompt, to a hosted
text-generation model and returns the generated text.
"""

import json
from typing import Any, Optional

import httpx

from weatherwatch_core.config import Settings
from weatherwatch_core.errors import ConfigurationError, Provider
from weatherwatch_api.services.upstream import UpstreamClient

NO_RESPONSE = "No response"

FEEDBACK_PROMPT = """
You are a weather assistant. Analyze the following chart data and provide:
1. Summary
2. Recommendations
3. Trend Analysis

Weather data: {chart_data}
"""


def serialize_chart_data(chart_data: Any) -> str:
    """Strings are embedded as-is, anything else as JSON"""
    if isinstance(chart_data, str):
        return chart_data
    return json.dumps(chart_data, ensure_ascii=False, default=str)


def build_feedback_prompt(chart_data: Any) -> str:
    return FEEDBACK_PROMPT.format(chart_data=serialize_chart_data(chart_data))


def extract_generated_text(result: Any) -> str:
    """
    First ``generated_text`` of an inference response.

    The text-generation task answers with ``[{"generated_text": ...}, ...]``;
    an empty list, another shape or an empty text yields the fallback.
    """
    if isinstance(result, list) and result and isinstance(result[0], dict):
        text = result[0].get("generated_text")
        if isinstance(text, str) and text:
            return text
    return NO_RESPONSE


class FeedbackRelay(UpstreamClient):
    """Single-call pipeline: chart data -> prompt -> inference -> text"""

    provider = Provider.INFERENCE

    def __init__(self, client: httpx.AsyncClient, api_key: Optional[str], model_url: str):
        super().__init__(client)
        self.api_key = api_key
        self.model_url = model_url

    @classmethod
    def from_settings(cls, client: httpx.AsyncClient, settings: Settings) -> "FeedbackRelay":
        return cls(client, api_key=settings.hf_api_key, model_url=settings.hf_model_url)

    async def generate_feedback(self, chart_data: Any) -> str:
        """
        Generate feedback text for chart data.

        Raises:
            ConfigurationError: inference API key not configured
            UpstreamError: transport failure, non-2xx status or non-JSON body
        """
        if not self.api_key:
            raise ConfigurationError(["HF_API_KEY"])

        prompt = build_feedback_prompt(chart_data)
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        self.log.info(f"Requesting feedback for {len(prompt)}-character prompt")
        result = await self.fetch_json("POST", self.model_url, headers=headers, json={"inputs": prompt})

        feedback = extract_generated_text(result)
        if feedback == NO_RESPONSE:
            self.log.warning("Inference response carried no generated_text, using fallback")
        return feedback
