"""
Shared fixtures: fake remote answering services built on httpx.MockTransport.
"""

import json
from typing import Any, Dict, List

import httpx
import pytest

from ragbooks.client import RagServiceClient
from ragbooks.orchestrator import ChatOrchestrator
from ragbooks.seed_data import SEED_BOOKS

BASE_URL = "http://rag.test/api"

REMOTE_ANSWER = {
    "response": "# Overview\nMachine learning is powerful.\n- Point one\n- Point two",
    "sources": [
        {"id": 1, "title": "The Art of Machine Learning", "relevance": 0.95, "excerpt": "This book covers..."},
        {"id": 3, "title": "Data Science in Practice", "page": 12},
    ],
    "confidence": 0.92,
}


class FakeService:
    """Records requests and answers them with a fixed status and body."""

    def __init__(self, status_code: int = 200, body: Any = None, exc: Exception = None):
        self.status_code = status_code
        self.body = REMOTE_ANSWER if body is None else body
        self.exc = exc
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        return httpx.Response(self.status_code, json=self.body)

    @property
    def bodies(self) -> List[Dict[str, Any]]:
        return [json.loads(request.content) for request in self.requests if request.content]


def make_client(service) -> RagServiceClient:
    return RagServiceClient(base_url=BASE_URL, timeout=1.0, transport=httpx.MockTransport(service))


@pytest.fixture
def remote_ok():
    """A remote service that always answers."""
    return FakeService()


@pytest.fixture
def remote_down():
    """A remote service that cannot be reached."""
    return FakeService(exc=httpx.ConnectError("connection refused"))


@pytest.fixture
def make_orchestrator():
    """Build an orchestrator over the seed books with an empty conversation log."""
    def _make(service, books=None, conversations=None):
        return ChatOrchestrator(
            make_client(service),
            books=SEED_BOOKS if books is None else books,
            conversations=[] if conversations is None else conversations,
        )
    return _make
