"""LLM Client for Groq API integration."""
import time
from dataclasses import dataclass
from typing import Optional, Dict, Any
from groq import Groq
from groq import RateLimitError, AuthenticationError, APIError, APITimeoutError
import logging

from config import GROQ_API_KEY, REQUEST_TIMEOUT_SECONDS, TEMPERATURE

logger = logging.getLogger(__name__)


@dataclass
class LLMResponse:
    """Response from LLM generation."""
    text: str
    tokens_input: int
    tokens_output: int
    latency_ms: int
    model_used: str


@dataclass
class LLMError:
    """Structured error response from LLM operations."""
    code: str
    message: str
    details: Dict[str, Any]


class LLMClientError(Exception):
    """Custom exception for LLM client errors with structured error information."""

    def __init__(self, error: LLMError):
        self.error = error
        super().__init__(error.message)


class Deadline:
    """Wall-clock budget shared by every request made during one run."""

    def __init__(self, seconds: float):
        self.seconds = seconds
        self.expires_at = time.monotonic() + seconds

    def remaining(self) -> float:
        """Seconds left before the deadline, never negative."""
        return max(0.0, self.expires_at - time.monotonic())

    def expired(self) -> bool:
        return self.remaining() <= 0.0


class LLMClient:
    """Client for interfacing with Groq API for text generation."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        timeout_seconds: float = REQUEST_TIMEOUT_SECONDS
    ):
        """
        Initialize LLM client with Groq API key.

        The overall deadline starts here and applies to all later calls.

        Args:
            api_key: Groq API key (defaults to GROQ_API_KEY from environment)
            timeout_seconds: Overall deadline for every request of this client
        """
        self.api_key = api_key or GROQ_API_KEY
        if not self.api_key:
            raise ValueError("GROQ_API_KEY must be provided or set in environment")

        self.deadline = Deadline(timeout_seconds)
        # No retries: a failed request ends the run
        self.client = Groq(api_key=self.api_key, timeout=timeout_seconds, max_retries=0)
        logger.info(f"LLMClient initialized (deadline={timeout_seconds}s)")

    def close(self) -> None:
        """Release the underlying HTTP client."""
        self.client.close()
        logger.debug("LLMClient closed")

    def __enter__(self) -> "LLMClient":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def generate(
        self,
        model: str,
        prompt: str,
        temperature: float = TEMPERATURE,
        max_tokens: Optional[int] = None
    ) -> LLMResponse:
        """
        Generate response using Groq API.

        Args:
            model: Model name
            prompt: Complete prompt (instruction followed by text)
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate (model default if None)

        Returns:
            LLMResponse with text, token counts, and latency

        Raises:
            LLMClientError: Structured error with code, message, and details
        """
        start_time = time.time()

        remaining = self.deadline.remaining()
        if remaining <= 0.0:
            self._raise(
                "TIMEOUT_ERROR",
                f"Overall deadline of {self.deadline.seconds}s exceeded.",
                model,
                start_time
            )

        request: Dict[str, Any] = {
            "model": model,
            "messages": [
                {
                    "role": "user",
                    "content": prompt
                }
            ],
            "temperature": temperature,
            "timeout": remaining,
        }
        if max_tokens is not None:
            request["max_tokens"] = max_tokens

        try:
            logger.debug(f"Generating response with model: {model}, timeout={remaining:.1f}s")
            response = self.client.chat.completions.create(**request)

        except RateLimitError as e:
            self._raise(
                "RATE_LIMIT_ERROR",
                "Rate limit exceeded. Please try again in a few moments.",
                model, start_time, e
            )

        except AuthenticationError as e:
            self._raise(
                "AUTHENTICATION_ERROR",
                "Authentication failed. Please check your API key.",
                model, start_time, e
            )

        except APITimeoutError as e:
            self._raise(
                "TIMEOUT_ERROR",
                "Request timed out.",
                model, start_time, e
            )

        except APIError as e:
            self._raise(
                "API_ERROR",
                f"Groq API error: {str(e)}",
                model, start_time, e
            )

        except Exception as e:
            self._raise(
                "UNKNOWN_ERROR",
                f"Unexpected error during generation: {str(e)}",
                model, start_time, e,
                error_type=type(e).__name__
            )

        latency_ms = int((time.time() - start_time) * 1000)

        # A blocked or truncated completion can come back without text
        if not response.choices or not response.choices[0].message.content:
            finish_reason = response.choices[0].finish_reason if response.choices else None
            self._raise(
                "EMPTY_RESPONSE",
                "Model returned no text.",
                model, start_time,
                finish_reason=finish_reason
            )

        text = response.choices[0].message.content
        tokens_input = response.usage.prompt_tokens
        tokens_output = response.usage.completion_tokens

        logger.info(
            f"Generated response: model={model}, "
            f"input_tokens={tokens_input}, output_tokens={tokens_output}, "
            f"latency={latency_ms}ms"
        )

        return LLMResponse(
            text=text,
            tokens_input=tokens_input,
            tokens_output=tokens_output,
            latency_ms=latency_ms,
            model_used=model
        )

    @staticmethod
    def _raise(
        code: str,
        message: str,
        model: str,
        start_time: float,
        cause: Optional[Exception] = None,
        **extra: Any
    ) -> None:
        """Log and raise an LLMClientError with latency and model details."""
        latency_ms = int((time.time() - start_time) * 1000)
        details: Dict[str, Any] = {
            "model": model,
            "latency_ms": latency_ms,
        }
        if cause is not None:
            details["original_error"] = str(cause)
        details.update(extra)

        error = LLMError(code=code, message=message, details=details)
        logger.error(
            f"{code}: model={model}, latency={latency_ms}ms, error={cause or message}",
            exc_info=cause is not None,
            extra={"error_code": error.code, "error_details": error.details}
        )
        raise LLMClientError(error) from cause
