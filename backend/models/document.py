"""Document data models."""
from dataclasses import dataclass, field
from typing import List


class PageNotFoundError(ValueError):
    """Raised when a requested page number is not in the document."""

    def __init__(self, page_number: int, total_pages: int):
        self.page_number = page_number
        self.total_pages = total_pages
        super().__init__(
            f"Page {page_number} out of range (document has {total_pages} pages)"
        )


@dataclass(frozen=True)
class Page:
    """Represents a single page from a document."""
    page_number: int
    text: str
    word_count: int
    token_count: int = 0


@dataclass
class Document:
    """Represents a loaded PDF document."""
    filename: str
    pages: List[Page] = field(default_factory=list)
    total_pages: int = 0
    source_path: str = ""

    def get_page(self, page_number: int) -> Page:
        """Return the page with the given 1-based number."""
        if page_number < 1 or page_number > len(self.pages):
            raise PageNotFoundError(page_number, len(self.pages))
        return self.pages[page_number - 1]
