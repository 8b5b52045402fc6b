"""
Proofread a PDF page by page with a Groq-hosted model.

For every selected page this script:
1. Prints the raw extracted text
2. Asks the model to repair spacing and line breaks left by PDF extraction
3. Asks the model for proofreading feedback on the repaired text

Any extraction or API error is fatal: it is logged and the script exits with
status 1 without printing anything further.

Usage:
    python proofread_pdf.py --input-pdf report.pdf --pages 30
"""
import argparse
import logging
import math
import sys
from pathlib import Path
from typing import List, Optional

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent))

from config import DEFAULT_MODEL, LOG_FORMAT, LOG_LEVEL, REQUEST_TIMEOUT_SECONDS
from logger import setup_logging
from models.document import PageNotFoundError
from models.proofread import PageResult
from prompts import format_page
from services.document_loader import DocumentLoader, DocumentLoadError, TokenizerError
from services.llm_client import LLMClient, LLMClientError
from services.proofreader import Proofreader

logger = logging.getLogger(__name__)


def parse_page_spec(spec: str) -> List[int]:
    """
    Parse a page selection such as "1,3,5-7" into [1, 3, 5, 6, 7].

    Raises:
        argparse.ArgumentTypeError: On malformed input or numbers below 1
    """
    pages: List[int] = []
    for part in spec.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            if "-" in part:
                start_text, end_text = part.split("-", 1)
                start, end = int(start_text), int(end_text)
                if end < start:
                    raise ValueError(part)
                pages.extend(range(start, end + 1))
            else:
                pages.append(int(part))
        except ValueError:
            raise argparse.ArgumentTypeError(f"invalid page selection: {part!r}")
    if not pages or min(pages) < 1:
        raise argparse.ArgumentTypeError(f"invalid page selection: {spec!r}")
    return pages


def positive_seconds(value: str) -> float:
    """Parse a strictly positive, finite number of seconds."""
    try:
        seconds = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid timeout: {value!r}")
    if not math.isfinite(seconds) or seconds <= 0:
        raise argparse.ArgumentTypeError(f"timeout must be a positive number of seconds: {value!r}")
    return seconds


def choice_of(*choices: str, normalize=str.upper):
    """
    Build an argparse type that accepts one of ``choices``.

    Unlike ``choices``, a ``type`` is also applied to string defaults, so
    values read from the environment are checked too.
    """
    def parse(value: str) -> str:
        normalized = normalize(value.strip())
        if normalized not in choices:
            raise argparse.ArgumentTypeError(
                f"invalid choice: {value!r} (choose from {', '.join(choices)})"
            )
        return normalized
    return parse


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Reformat and proofread the text of a PDF with a large language model"
    )
    parser.add_argument(
        "--input-pdf",
        required=True,
        help="Path to the input PDF file"
    )
    parser.add_argument(
        "--model",
        default=DEFAULT_MODEL,
        help=f"Model to use for the API (default: {DEFAULT_MODEL})"
    )
    parser.add_argument(
        "--pages",
        type=parse_page_spec,
        default=None,
        help="Pages to process, e.g. 30 or 1,3,5-7 (default: all pages)"
    )
    parser.add_argument(
        "--timeout",
        type=positive_seconds,
        default=format(REQUEST_TIMEOUT_SECONDS, "g"),
        help=f"Overall deadline for all API calls in seconds (default: {REQUEST_TIMEOUT_SECONDS:g})"
    )
    parser.add_argument(
        "--tidy-only",
        action="store_true",
        help="Only reformat pages, skip the proofreading call"
    )
    parser.add_argument(
        "--log-level",
        type=choice_of("DEBUG", "INFO", "WARNING", "ERROR"),
        default=LOG_LEVEL,
        help=f"Log level: DEBUG, INFO, WARNING or ERROR (default: {LOG_LEVEL})"
    )
    parser.add_argument(
        "--log-format",
        type=choice_of("text", "json", normalize=str.lower),
        default=LOG_FORMAT,
        help=f"Log output format: text or json (default: {LOG_FORMAT})"
    )
    return parser


def print_result(result: PageResult) -> None:
    """Print the model output for one page."""
    print("=== Tidied up page ===")
    print(result.tidied_text)

    if result.feedback is not None:
        print(f"\nProofreading Execution Time: {result.proofread_latency_ms / 1000:.3f}s")
        print("=== Proofread page ===")
        print(result.feedback)


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the proofreader."""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level, args.log_format)

    try:
        document = DocumentLoader().load_pdf(args.input_pdf)
        pages = DocumentLoader.select_pages(document, args.pages)
        logger.info(f"Processing {len(pages)} of {document.total_pages} pages with {args.model}")

        with LLMClient(timeout_seconds=args.timeout) as llm_client:
            proofreader = Proofreader(llm_client, model=args.model)

            for page in pages:
                print("=== Raw page ===")
                print(format_page(page))
                sys.stdout.flush()

                result = proofreader.process_page(page, proofread=not args.tidy_only)
                print_result(result)
                sys.stdout.flush()

    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        sys.exit(130)
    except DocumentLoadError as e:
        logger.error(f"Error reading PDF: {e}")
        sys.exit(1)
    except TokenizerError as e:
        logger.error(f"Token counting unavailable: {e}")
        sys.exit(1)
    except PageNotFoundError as e:
        logger.error(f"Invalid page selection: {e}")
        sys.exit(1)
    except LLMClientError as e:
        logger.error(
            f"API request failed: {e}",
            extra={"error_code": e.error.code, "error_details": e.error.details}
        )
        sys.exit(1)
    except ValueError as e:
        # Missing API key
        logger.error(f"Configuration error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
