"""Document loading service for PDF processing."""
import logging
import os
from typing import List, Optional
import fitz  # PyMuPDF
import tiktoken

from config import TOKEN_ENCODING
from models.document import Document, Page

logger = logging.getLogger(__name__)


class DocumentLoadError(Exception):
    """Raised when a PDF cannot be opened or its text cannot be extracted."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Error loading PDF {path}: {reason}")


class TokenizerError(Exception):
    """Raised when the token encoding cannot be loaded (e.g. offline first run)."""

    def __init__(self, encoding_name: str, reason: str):
        self.encoding_name = encoding_name
        self.reason = reason
        super().__init__(f"Could not load token encoding {encoding_name}: {reason}")


class DocumentLoader:
    """Loads and extracts text from PDF files."""

    def __init__(self, encoding_name: str = TOKEN_ENCODING):
        """
        Initialize DocumentLoader.

        Args:
            encoding_name: tiktoken encoding used for per-page token counts
        """
        self.encoding_name = encoding_name
        self._encoder = None

    def _get_encoder(self):
        if self._encoder is None:
            try:
                self._encoder = tiktoken.get_encoding(self.encoding_name)
            except Exception as e:
                logger.error(f"Failed to load token encoding {self.encoding_name}: {str(e)}", exc_info=True)
                raise TokenizerError(self.encoding_name, str(e)) from e
        return self._encoder

    def load_pdf(self, filepath: str) -> Document:
        """
        Load a single PDF file and extract text page-by-page.

        Args:
            filepath: Path to the PDF file

        Returns:
            Document whose pages are numbered from 1 in source order

        Raises:
            DocumentLoadError: If the file is missing, not a PDF or unreadable
            TokenizerError: If the token encoding cannot be loaded
        """
        filename = os.path.basename(filepath)

        if not os.path.isfile(filepath):
            logger.error(f"PDF file not found: {filepath}")
            raise DocumentLoadError(filepath, "file not found")

        encoder = self._get_encoder()

        try:
            pdf_document = fitz.open(filepath)
        except Exception as e:
            logger.error(f"Failed to open PDF {filename}: {str(e)}", exc_info=True)
            raise DocumentLoadError(filepath, str(e)) from e

        try:
            if not pdf_document.is_pdf:
                raise DocumentLoadError(filepath, "not a PDF document")

            pages = []
            for page_num in range(len(pdf_document)):
                page = pdf_document[page_num]
                text = page.get_text()

                pages.append(Page(
                    page_number=page_num + 1,  # 1-indexed
                    text=text,
                    word_count=len(text.split()),
                    # Special-token text in a page is counted as plain text
                    token_count=len(encoder.encode_ordinary(text))
                ))
        except DocumentLoadError:
            raise
        except Exception as e:
            logger.error(f"Failed to extract text from {filename}: {str(e)}", exc_info=True)
            raise DocumentLoadError(filepath, str(e)) from e
        finally:
            pdf_document.close()

        logger.info(f"Loaded {filename}: {len(pages)} pages")
        return Document(
            filename=filename,
            pages=pages,
            total_pages=len(pages),
            source_path=filepath
        )

    @staticmethod
    def select_pages(
        document: Document,
        page_numbers: Optional[List[int]] = None
    ) -> List[Page]:
        """
        Pick the pages to process.

        Args:
            document: Loaded document
            page_numbers: 1-based page numbers in processing order; None or
                empty selects every page

        Returns:
            List of pages

        Raises:
            PageNotFoundError: If a page number is outside the document
        """
        if not page_numbers:
            return list(document.pages)
        return [document.get_page(number) for number in page_numbers]
