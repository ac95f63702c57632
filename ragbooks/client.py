"""
Async HTTP client for the remote answering service.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import BaseModel, Field, TypeAdapter, ValidationError, field_validator

from . import settings
from .errors import InternalFailure, RemoteUnavailable
from .models import Book, NewBook, RagResult, Source

logger = logging.getLogger(__name__)

_BOOK_LIST = TypeAdapter(List[Book])


class RemoteSource(BaseModel):
    """A source entry as the remote service sends it."""

    id: int
    title: str
    relevance: float = Field(default=1.0, ge=0.0, le=1.0)
    excerpt: str = ""

    class Config:
        """Pydantic configuration."""
        extra = "ignore"


class RemoteAnswer(BaseModel):
    """Success body of ``POST /chat/stream``."""

    response: str
    sources: List[RemoteSource] = Field(default_factory=list)
    confidence: float = Field(default=1.0, ge=0.0, le=1.0)

    class Config:
        """Pydantic configuration."""
        extra = "ignore"

    @field_validator("sources", mode="before")
    @classmethod
    def _null_sources(cls, value):
        return [] if value is None else value

    def to_result(self, question: str) -> RagResult:
        """Build a RagResult, keeping at most MAX_SOURCES sources."""
        if len(self.sources) > settings.MAX_SOURCES:
            logger.warning(
                f"Remote returned {len(self.sources)} sources, keeping the first {settings.MAX_SOURCES}"
            )
        return RagResult(
            query=question,
            response=self.response,
            sources=[Source(**source.model_dump()) for source in self.sources[:settings.MAX_SOURCES]],
            confidence=self.confidence,
        )


class RagServiceClient:
    """Talks to the remote RAG service. Every failure to get a 2xx reply is a RemoteUnavailable."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            base_url: Service root, defaults to settings.RAG_API_URL
            timeout: Seconds before a request is abandoned, defaults to settings.RAG_API_TIMEOUT
            transport: Optional httpx transport, used by tests to fake the service
        """
        self.base_url = (base_url or settings.RAG_API_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.RAG_API_TIMEOUT
        self.transport = transport

    async def _request(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """
        Send one request and return the decoded JSON body.

        Raises:
            RemoteUnavailable: On transport errors, timeouts and non-2xx statuses
            InternalFailure: If a 2xx body is not JSON
        """
        url = f"{self.base_url}{path}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.request(method, url, json=json, headers=headers)
                response.raise_for_status()
        except httpx.TimeoutException as e:
            raise RemoteUnavailable(f"{method} {url} timed out after {self.timeout}s") from e
        except httpx.HTTPStatusError as e:
            raise RemoteUnavailable(f"{method} {url} returned {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise RemoteUnavailable(f"{method} {url} failed: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            raise InternalFailure(f"{method} {url} returned a non-JSON body") from e

    async def query(self, question: str, session_id: str) -> RagResult:
        """
        Ask the remote service a question within a session.

        Args:
            question: The user's question
            session_id: Current session id, sent in the ``session-id`` header

        Returns:
            RagResult built from the service's answer
        """
        body = await self._request(
            "POST",
            "/chat/stream",
            json={"Prompt": question},
            headers={"session-id": session_id},
        )
        try:
            answer = RemoteAnswer.model_validate(body)
        except ValidationError as e:
            raise InternalFailure(f"Malformed answer from remote service: {e}") from e
        return answer.to_result(question)

    async def list_books(self) -> List[Book]:
        """Fetch the remote book collection."""
        body = await self._request("GET", "/books")
        return self._parse_books(body)

    async def search_books(self, query: str) -> List[Book]:
        """Search the remote book collection."""
        body = await self._request("POST", "/search", json={"query": query})
        return self._parse_books(body)

    async def add_book(self, new_book: NewBook) -> Book:
        """Create a book on the remote service and return it with its assigned id."""
        body = await self._request("POST", "/books", json=new_book.model_dump(by_alias=True))
        try:
            return Book.model_validate(body)
        except ValidationError as e:
            raise InternalFailure(f"Malformed book from remote service: {e}") from e

    @staticmethod
    def _parse_books(body: Any) -> List[Book]:
        try:
            return _BOOK_LIST.validate_python(body)
        except ValidationError as e:
            raise InternalFailure(f"Malformed book list from remote service: {e}") from e
