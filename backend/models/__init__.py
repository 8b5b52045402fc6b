"""Data models for the PDF proofreader."""
from .document import Document, Page, PageNotFoundError
from .proofread import PageResult

__all__ = [
    "Document",
    "Page",
    "PageNotFoundError",
    "PageResult",
]
