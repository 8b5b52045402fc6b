"""Integration tests for LLMClient and Proofreader with Groq API.

These tests require a valid GROQ_API_KEY in the environment.
They will be skipped if the API key is not available.
"""
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'backend'))

import pytest
from models.document import Page
from prompts import PROOFREADER_SYSTEM_PROMPT, build_prompt
from services.llm_client import LLMClient, LLMResponse
from services.proofreader import Proofreader


@pytest.mark.skipif(
    not os.getenv("GROQ_API_KEY"),
    reason="GROQ_API_KEY not set in environment"
)
class TestLLMClientIntegration:
    """Integration tests for LLMClient with real Groq API."""

    @pytest.fixture
    def client(self):
        """Create LLMClient instance."""
        with LLMClient() as client:
            yield client

    def test_generate_proofreading_feedback(self, client):
        prompt = build_prompt(
            PROOFREADER_SYSTEM_PROMPT,
            "The results was analysed and found to be very extremely significant."
        )

        response = client.generate(
            model="llama-3.1-8b-instant",
            prompt=prompt,
            max_tokens=200
        )

        assert isinstance(response, LLMResponse)
        assert len(response.text) > 0
        assert response.tokens_input > 0
        assert response.tokens_output > 0
        assert response.latency_ms > 0
        assert response.model_used == "llama-3.1-8b-instant"

    def test_token_tracking_respects_max_tokens(self, client):
        response = client.generate(
            model="llama-3.1-8b-instant",
            prompt=build_prompt(PROOFREADER_SYSTEM_PROMPT, "Hello world."),
            max_tokens=20
        )

        assert response.tokens_input > 10  # At least the instruction text
        assert response.tokens_output <= 20

    def test_process_page_end_to_end(self, client):
        page = Page(
            page_number=1,
            text="1Section 4Near-Term Responses in a Changing Climate",
            word_count=8
        )
        proofreader = Proofreader(client, model="llama-3.1-8b-instant")

        result = proofreader.process_page(page)

        assert result.page_number == 1
        assert "Section" in result.tidied_text
        assert result.feedback
        assert result.proofread_latency_ms > 0
