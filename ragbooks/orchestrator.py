"""
Session and query orchestration: owns the session, the conversation log and
the busy/error state, and falls back to local retrieval when the remote
answering service is unreachable.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from . import settings
from .client import RagServiceClient
from .corpus import CorpusStore
from .errors import (
    NotReadyError,
    QueryInProgressError,
    QuestionValidationError,
    RemoteUnavailable,
)
from .fallback import answer_locally, search_locally
from .models import Book, ConversationTurn, NewBook, RagResult, Session
from .seed_data import SEED_BOOKS, SEED_CONVERSATIONS

logger = logging.getLogger(__name__)


@dataclass
class ChatState:
    """Mutable state owned by a ChatOrchestrator."""

    session: Optional[Session] = None
    conversations: List[ConversationTurn] = field(default_factory=list)
    rag_response: Optional[RagResult] = None
    last_turn: Optional[ConversationTurn] = None
    error: Optional[str] = None
    loading: bool = False
    current_query: str = ""


class ChatOrchestrator:
    """
    Dispatches questions to the remote service and records the conversation.

    Presentation code reads state through the properties and acts through
    ask, clear, set_error and clear_error. Only one query may be in flight.
    """

    def __init__(
        self,
        client: RagServiceClient,
        books: Optional[Iterable[Book]] = None,
        conversations: Optional[Iterable[ConversationTurn]] = None,
    ):
        """
        Args:
            client: Remote answering service client
            books: Seed corpus, defaults to the bundled seed books
            conversations: Seed conversation log, defaults to the bundled seed log
        """
        self.client = client
        self.corpus = CorpusStore()
        self.state = ChatState()
        self._seed_books = list(SEED_BOOKS if books is None else books)
        self._seed_conversations = list(SEED_CONVERSATIONS if conversations is None else conversations)

    # State

    @property
    def ready(self) -> bool:
        return self.state.session is not None

    @property
    def session_id(self) -> Optional[str]:
        return self.state.session.id if self.state.session else None

    @property
    def conversations(self) -> List[ConversationTurn]:
        return list(self.state.conversations)

    @property
    def rag_response(self) -> Optional[RagResult]:
        return self.state.rag_response

    @property
    def last_turn(self) -> Optional[ConversationTurn]:
        return self.state.last_turn

    @property
    def loading(self) -> bool:
        return self.state.loading

    @property
    def error(self) -> Optional[str]:
        return self.state.error

    @property
    def current_query(self) -> str:
        return self.state.current_query

    @property
    def books(self) -> List[Book]:
        return self.corpus.books

    # Lifecycle

    async def initialize(self) -> None:
        """Mint the session and load the seed corpus and conversation log."""
        if self.ready:
            logger.info("Orchestrator already initialized")
            return

        self.corpus.replace_all(self._seed_books)
        self.state.conversations = list(self._seed_conversations)
        # Seeded turns already used the first ids of this session
        self.state.session = Session(turn_count=len(self.state.conversations))
        logger.info(
            f"Initialized session {self.session_id} with {len(self.corpus)} books "
            f"and {len(self.state.conversations)} turns"
        )

    def clear(self) -> None:
        """Empty the conversation log and start a new session. The corpus is kept."""
        old_session_id = self.session_id
        self.state.conversations = []
        self.state.rag_response = None
        self.state.last_turn = None
        self.state.session = Session()
        logger.info(f"Cleared conversation, session {old_session_id} -> {self.session_id}")

    def set_error(self, error: str) -> None:
        self.state.error = str(error)

    def clear_error(self) -> None:
        self.state.error = None

    # Queries

    async def ask(self, question: str) -> Optional[RagResult]:
        """
        Answer a question and append the exchange to the conversation log.

        The remote service is tried first; if it is unreachable the answer
        comes from the local corpus instead. Any other failure sets the
        generic error message and returns None without recording a turn.
        If the conversation is cleared while the question is in flight, the
        answer is returned but not recorded in the new session.

        Args:
            question: The user's question

        Returns:
            The remote or fallback RagResult, or None on internal failure

        Raises:
            QuestionValidationError: If the question is blank
            NotReadyError: If initialize() has not completed
            QueryInProgressError: If another question is still being answered
        """
        question = (question or "").strip()
        if not question:
            raise QuestionValidationError("Question must not be empty")
        if not self.ready:
            raise NotReadyError("Session is not initialized yet")
        if self.state.loading:
            raise QueryInProgressError("A question is already being answered")

        self.state.loading = True
        self.state.error = None
        self.state.current_query = question
        session = self.state.session
        try:
            try:
                result = await self.client.query(question, session.id)
                logger.info(f"Remote answer for '{question[:50]}' with {len(result.sources)} sources")
            except RemoteUnavailable as e:
                logger.warning(f"Remote service unavailable ({e}), answering from local corpus")
                result = answer_locally(question, self.corpus)

            if self.state.session is not session:
                logger.warning(
                    f"Session {session.id} was cleared while answering '{question[:50]}', not recording the turn"
                )
                return result

            self.state.rag_response = result
            self.state.last_turn = self._append_turn(question, result)
            return result
        except Exception as e:
            logger.error(f"Query failed for '{question[:50]}': {e}")
            self.state.error = settings.QUERY_FAILED_MESSAGE
            return None
        finally:
            self.state.loading = False

    def _append_turn(self, question: str, result: RagResult) -> ConversationTurn:
        turn = ConversationTurn(
            id=self.state.session.next_turn_id(),
            user=question,
            assistant=result.response,
            sources=result.source_ids,
            timestamp=datetime.now(timezone.utc),
        )
        self.state.conversations.append(turn)
        return turn

    def history(self) -> List[ConversationTurn]:
        """The conversation log, oldest first."""
        return self.conversations

    def source_books(self, turn: ConversationTurn) -> List[Book]:
        """Books cited by a turn. Ids missing from the corpus are skipped."""
        return self.corpus.resolve(turn.sources)

    # Books

    async def fetch_books(self) -> List[Book]:
        """
        Refresh the corpus from the remote service, keeping the current one if it is unreachable.

        Returns:
            Books now in the corpus
        """
        self.state.error = None
        try:
            books = await self.client.list_books()
            self.corpus.replace_all(books)
            logger.info(f"Loaded {len(books)} books from remote service")
        except RemoteUnavailable as e:
            logger.warning(f"Remote service unavailable ({e}), keeping local corpus")
        except Exception as e:
            logger.error(f"Fetching books failed: {e}")
            self.state.error = settings.FETCH_FAILED_MESSAGE
        return self.corpus.books

    async def search_books(self, query: str) -> List[Book]:
        """
        Search books remotely, or in the local corpus if the service is unreachable.

        Returns:
            Matching books, empty on failure
        """
        self.state.error = None
        try:
            try:
                return await self.client.search_books(query)
            except RemoteUnavailable as e:
                logger.warning(f"Remote service unavailable ({e}), searching local corpus")
                return search_locally(query, self.corpus)
        except Exception as e:
            logger.error(f"Search failed for '{query[:50]}': {e}")
            self.state.error = settings.SEARCH_FAILED_MESSAGE
            return []

    async def add_book(self, new_book: NewBook) -> Optional[Book]:
        """
        Add a book remotely, or only to the local corpus if the service is unreachable.

        Returns:
            The stored book, or None on failure
        """
        self.state.error = None
        try:
            try:
                book = self.corpus.insert(await self.client.add_book(new_book))
            except RemoteUnavailable as e:
                logger.warning(f"Remote service unavailable ({e}), adding book locally")
                book = self.corpus.add(new_book)
            return book
        except Exception as e:
            logger.error(f"Adding book {new_book.title!r} failed: {e}")
            self.state.error = settings.ADD_FAILED_MESSAGE
            return None
