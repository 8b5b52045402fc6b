"""Unit tests for Proofreader and prompt construction."""
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'backend'))

import pytest
from unittest.mock import Mock

from models.document import Page
from models.proofread import PageResult
from prompts import (
    PDF_TEXT_REFORMATTER_PROMPT,
    PROOFREADER_SYSTEM_PROMPT,
    build_prompt,
    format_page,
)
from services.llm_client import LLMResponse, LLMError, LLMClientError
from services.proofreader import Proofreader


def make_response(text, tokens_input=100, tokens_output=20, latency_ms=250):
    return LLMResponse(
        text=text,
        tokens_input=tokens_input,
        tokens_output=tokens_output,
        latency_ms=latency_ms,
        model_used="llama-3.3-70b-versatile"
    )


@pytest.fixture
def page():
    return Page(page_number=30, text="43Current Status and TrendsSection 2", word_count=4)


class TestPrompts:
    """Test suite for prompt construction."""

    def test_build_prompt_concatenates_instruction_and_text(self):
        prompt = build_prompt(PROOFREADER_SYSTEM_PROMPT, "Some page text.")
        assert prompt == PROOFREADER_SYSTEM_PROMPT + " " + "Some page text."

    def test_build_prompt_keeps_text_untouched(self):
        text = "  leading spaces\nand\ttabs  "
        assert build_prompt("Instruction", text) == "Instruction " + text

    def test_format_page_prefixes_page_number(self, page):
        assert format_page(page) == "Page: 30\n43Current Status and TrendsSection 2"

    def test_reformatter_examples_kept_in_full(self):
        assert (
            "Reduction in Northern Hemisphere springtime snow cover since 1950"
            "Greenland ice sheet mass loss since 1990s" in PDF_TEXT_REFORMATTER_PROMPT
        )
        assert PDF_TEXT_REFORMATTER_PROMPT.endswith(
            "Atmosphere and water cycleOceanCryosphereCarbon cycleLand climateSynthesisKe"
        )
        # Expected outputs carry literal backslash-n, not real line breaks
        assert "43\\nCurrent Status and Trends\\nSection 2" in PDF_TEXT_REFORMATTER_PROMPT

    def test_proofreader_prompt_wording(self):
        assert PROOFREADER_SYSTEM_PROMPT.startswith(
            "You are a proofreading assistant for a formal, scientific document."
        )
        assert "spelling, punctuation, grammar, verbosity and tone of voice" in PROOFREADER_SYSTEM_PROMPT
        assert PROOFREADER_SYSTEM_PROMPT.endswith("quoting the original text and issue in bold")


class TestProofreader:
    """Test suite for Proofreader class."""

    def test_process_page_makes_two_sequential_calls(self, page):
        llm_client = Mock()
        llm_client.generate.side_effect = [
            make_response("43\nCurrent Status and Trends\nSection 2", latency_ms=100),
            make_response("No issues found.", tokens_input=80, tokens_output=5, latency_ms=400),
        ]
        proofreader = Proofreader(llm_client, model="llama-3.3-70b-versatile")

        result = proofreader.process_page(page)

        assert isinstance(result, PageResult)
        assert result.page_number == 30
        assert result.raw_text == format_page(page)
        assert result.tidied_text == "43\nCurrent Status and Trends\nSection 2"
        assert result.feedback == "No issues found."
        assert result.tokens_input == 180
        assert result.tokens_output == 25
        assert result.proofread_latency_ms == 400

        first, second = llm_client.generate.call_args_list
        assert first.kwargs["prompt"] == PDF_TEXT_REFORMATTER_PROMPT + " " + format_page(page)
        assert second.kwargs["prompt"] == (
            PROOFREADER_SYSTEM_PROMPT + " " + "43\nCurrent Status and Trends\nSection 2"
        )
        assert first.kwargs["model"] == "llama-3.3-70b-versatile"
        assert first.kwargs["temperature"] == 0.0

    def test_process_page_without_proofreading(self, page):
        llm_client = Mock()
        llm_client.generate.return_value = make_response("Tidied")
        proofreader = Proofreader(llm_client)

        result = proofreader.process_page(page, proofread=False)

        assert result.feedback is None
        assert result.proofread_latency_ms is None
        assert llm_client.generate.call_count == 1

    def test_tidy_failure_propagates_without_second_call(self, page):
        llm_client = Mock()
        llm_client.generate.side_effect = LLMClientError(
            LLMError(code="API_ERROR", message="Groq API error: boom", details={})
        )
        proofreader = Proofreader(llm_client)

        with pytest.raises(LLMClientError):
            proofreader.process_page(page)

        assert llm_client.generate.call_count == 1

    def test_proofread_failure_propagates(self, page):
        llm_client = Mock()
        llm_client.generate.side_effect = [
            make_response("Tidied"),
            LLMClientError(LLMError(code="TIMEOUT_ERROR", message="Request timed out.", details={})),
        ]
        proofreader = Proofreader(llm_client)

        with pytest.raises(LLMClientError) as exc_info:
            proofreader.process_page(page)

        assert exc_info.value.error.code == "TIMEOUT_ERROR"
