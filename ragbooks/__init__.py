"""
ragbooks: conversational front-end core for a book RAG service.

Owns the chat session and conversation log, sends questions to a remote
answering service, falls back to a local corpus search when that service is
unreachable, and turns answer text into display blocks.
"""

from .client import RagServiceClient
from .corpus import CorpusStore
from .errors import (
    InternalFailure,
    NotReadyError,
    QueryInProgressError,
    QuestionValidationError,
    RagBooksError,
    RemoteUnavailable,
)
from .fallback import answer_locally, search_locally
from .formatter import Header, ListBlock, Paragraph, format_response
from .models import Book, ConversationTurn, NewBook, RagResult, Session, Source
from .orchestrator import ChatOrchestrator

__version__ = "0.1.0"
