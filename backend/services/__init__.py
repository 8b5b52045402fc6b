"""Services for the PDF proofreader."""
from .document_loader import DocumentLoader, DocumentLoadError, TokenizerError
from .llm_client import LLMClient, LLMResponse, LLMError, LLMClientError, Deadline
from .proofreader import Proofreader

__all__ = ['DocumentLoader', 'DocumentLoadError', 'TokenizerError', 'LLMClient', 'LLMResponse', 'LLMError', 'LLMClientError', 'Deadline', 'Proofreader']
