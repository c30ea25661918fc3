"""
Tests for the AI feedback relay
"""

import json

import httpx
import pytest

from weatherwatch_core.errors import ConfigurationError, Provider, UpstreamError
from weatherwatch_api.services.ai.feedback import (
    NO_RESPONSE,
    FeedbackRelay,
    build_feedback_prompt,
    extract_generated_text,
)

from tests.conftest import make_settings, mock_client

CHART_DATA = {"labels": ["Mon", "Tue"], "temp": [12.1, 14.3], "aqi": [2, 3]}


class TestPrompt:
    """Tests for prompt construction and response parsing"""

    def test_prompt_embeds_json(self):
        """Test structured chart data is serialized as JSON"""
        prompt = build_feedback_prompt(CHART_DATA)

        assert json.dumps(CHART_DATA) in prompt
        assert "Summary" in prompt
        assert "Trend Analysis" in prompt

    def test_prompt_embeds_string_as_is(self):
        """Test string chart data is not re-quoted"""
        prompt = build_feedback_prompt("temp rising 12 -> 14")

        assert "Weather data: temp rising 12 -> 14" in prompt

    def test_extract_first_generated_text(self):
        """Test the first element's generated_text is used"""
        assert extract_generated_text([{"generated_text": "summary..."}, {"generated_text": "other"}]) == "summary..."

    @pytest.mark.parametrize("result", [
        [],
        [{}],
        [{"generated_text": ""}],
        {"error": "Model is loading"},
        None,
    ])
    def test_extract_fallback(self, result):
        """Test shapes without generated text give the fallback literal"""
        assert extract_generated_text(result) == NO_RESPONSE


class TestFeedbackRelay:
    """Tests for FeedbackRelay"""

    def setup_method(self):
        """Setup test fixtures"""
        self.requests = []

    def relay(self, handler, **overrides):
        def recording(request):
            self.requests.append(request)
            return handler(request)
        return FeedbackRelay.from_settings(mock_client(recording), make_settings(**overrides))

    @pytest.mark.asyncio
    async def test_generate_feedback(self):
        """Test the generated text is returned and the prompt is posted"""
        relay = self.relay(lambda request: httpx.Response(200, json=[{"generated_text": "summary..."}]))

        feedback = await relay.generate_feedback(CHART_DATA)

        assert feedback == "summary..."
        request = self.requests[0]
        assert request.method == "POST"
        assert str(request.url) == "https://inference.test/models/test-model"
        assert request.headers["Authorization"] == "Bearer hf-test-key"
        body = json.loads(request.content)
        assert json.dumps(CHART_DATA) in body["inputs"]

    @pytest.mark.asyncio
    async def test_empty_array_returns_fallback(self):
        """Test an empty inference response does not raise"""
        relay = self.relay(lambda request: httpx.Response(200, json=[]))

        assert await relay.generate_feedback(CHART_DATA) == "No response"

    @pytest.mark.asyncio
    async def test_non_success_status(self):
        """Test a 503 from the inference endpoint is an UpstreamError"""
        relay = self.relay(lambda request: httpx.Response(503, json={"error": "Model is currently loading"}))

        with pytest.raises(UpstreamError) as exc_info:
            await relay.generate_feedback(CHART_DATA)

        assert exc_info.value.provider == Provider.INFERENCE
        assert exc_info.value.to_dict() == {"error": "AI request failed"}

    @pytest.mark.asyncio
    async def test_transport_error(self):
        """Test a network failure is an UpstreamError"""
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(UpstreamError):
            await self.relay(refuse).generate_feedback(CHART_DATA)

    @pytest.mark.asyncio
    async def test_missing_key_makes_no_call(self):
        """Test a missing inference key fails before any request"""
        relay = self.relay(lambda request: httpx.Response(200, json=[]), hf_api_key=None)

        with pytest.raises(ConfigurationError):
            await relay.generate_feedback(CHART_DATA)

        assert self.requests == []


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
