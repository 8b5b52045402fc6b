"""Per-page proofreading result."""
from dataclasses import dataclass
from typing import Optional


@dataclass
class PageResult:
    """
    Outcome of sending one page through the reformat and proofread calls.

    Attributes:
        page_number: 1-based page number in the source PDF
        raw_text: Formatted page text as sent to the reformatter
        tidied_text: Reformatter output
        feedback: Proofreader output, or None when proofreading was skipped
        model_used: Model that served the requests
        tokens_input: Prompt tokens summed over both calls
        tokens_output: Completion tokens summed over both calls
        proofread_latency_ms: Latency of the proofreading call only
    """
    page_number: int
    raw_text: str
    tidied_text: str
    feedback: Optional[str]
    model_used: str
    tokens_input: int = 0
    tokens_output: int = 0
    proofread_latency_ms: Optional[int] = None
