"""Two-step page pipeline: reformat raw extraction, then proofread."""
import logging

from config import DEFAULT_MODEL, TEMPERATURE
from models.document import Page
from models.proofread import PageResult
from prompts import (
    PDF_TEXT_REFORMATTER_PROMPT,
    PROOFREADER_SYSTEM_PROMPT,
    build_prompt,
    format_page,
)
from services.llm_client import LLMClient, LLMResponse

logger = logging.getLogger(__name__)


class Proofreader:
    """Sends pages through the reformatter and proofreader prompts."""

    def __init__(
        self,
        llm_client: LLMClient,
        model: str = DEFAULT_MODEL,
        temperature: float = TEMPERATURE
    ):
        self.llm_client = llm_client
        self.model = model
        self.temperature = temperature

    def tidy_page(self, page: Page) -> LLMResponse:
        """Ask the model to repair spacing and line breaks in a raw page."""
        prompt = build_prompt(PDF_TEXT_REFORMATTER_PROMPT, format_page(page))
        logger.debug(f"Tidying page {page.page_number} ({page.token_count} tokens)")
        return self.llm_client.generate(
            model=self.model,
            prompt=prompt,
            temperature=self.temperature
        )

    def proofread_text(self, text: str) -> LLMResponse:
        """Ask the model for proofreading feedback on already tidied text."""
        prompt = build_prompt(PROOFREADER_SYSTEM_PROMPT, text)
        return self.llm_client.generate(
            model=self.model,
            prompt=prompt,
            temperature=self.temperature
        )

    def process_page(self, page: Page, proofread: bool = True) -> PageResult:
        """
        Run one page through up to two sequential calls.

        Args:
            page: Page to process
            proofread: Whether to make the second (proofreading) call

        Returns:
            PageResult for the page

        Raises:
            LLMClientError: From either call; nothing is retried
        """
        tidied = self.tidy_page(page)
        result = PageResult(
            page_number=page.page_number,
            raw_text=format_page(page),
            tidied_text=tidied.text,
            feedback=None,
            model_used=tidied.model_used,
            tokens_input=tidied.tokens_input,
            tokens_output=tidied.tokens_output
        )

        if proofread:
            feedback = self.proofread_text(tidied.text)
            result.feedback = feedback.text
            result.tokens_input += feedback.tokens_input
            result.tokens_output += feedback.tokens_output
            result.proofread_latency_ms = feedback.latency_ms

        logger.info(
            f"Processed page {page.page_number}: "
            f"input_tokens={result.tokens_input}, output_tokens={result.tokens_output}"
        )
        return result
