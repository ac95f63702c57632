"""
Offline retrieval and answer synthesis, used when the remote answering service is unreachable.
"""

import logging
import re
from typing import List, Set

from . import settings
from .corpus import CorpusStore
from .models import Book, RagResult, Source

logger = logging.getLogger(__name__)

RESPONSE_PREFIX = "Based on the available information, "
MACHINE_LEARNING_ANSWER = (
    "machine learning is a subset of AI that enables computers to learn from data "
    "without explicit programming."
)
GENERIC_ANSWER = "here is what I found in the knowledge base that relates to your question."

_TOKEN_PATTERN = re.compile(r"[a-z0-9]+")
_STOPWORDS = {
    "the", "and", "for", "are", "was", "what", "who", "how", "why", "when", "where",
    "which", "does", "with", "about", "that", "this", "tell", "from", "into", "can",
}
# Keeps scores strictly below MAX_RELEVANCE
_SCORE_CEILING = 0.999


def _tokens(text: str) -> Set[str]:
    return {
        token for token in _TOKEN_PATTERN.findall(text.lower())
        if len(token) > 2 and token not in _STOPWORDS
    }


def keyword_overlap_score(question: str, book: Book) -> float:
    """
    Score a book against a question by shared keywords.

    Args:
        question: The user's question
        book: Candidate book

    Returns:
        Relevance in [MIN_RELEVANCE, MAX_RELEVANCE)
    """
    query_tokens = _tokens(question)
    if not query_tokens:
        return settings.MIN_RELEVANCE

    book_tokens = _tokens(" ".join([book.title, book.content, *book.tags]))
    overlap = len(query_tokens & book_tokens) / len(query_tokens)
    score = settings.MIN_RELEVANCE + (settings.MAX_RELEVANCE - settings.MIN_RELEVANCE) * overlap
    return min(round(score, 3), _SCORE_CEILING)


def _tag_matches(question: str, tag: str) -> bool:
    tag = tag.strip().lower()
    if not tag:
        return False
    if question in tag:
        return True
    return re.search(rf"(?<!\w){re.escape(tag)}(?!\w)", question) is not None


def matches_book(question: str, book: Book) -> bool:
    """Whether a book is a fallback candidate for the question."""
    needle = question.strip().lower()
    if not needle:
        return False
    if needle in book.title.lower() or needle in book.content.lower():
        return True
    return any(_tag_matches(needle, tag) for tag in book.tags)


def make_excerpt(content: str) -> str:
    """First EXCERPT_LENGTH characters of the content plus a truncation marker."""
    return content[:settings.EXCERPT_LENGTH] + "..."


def synthesize_response(question: str) -> str:
    """Templated placeholder answer for the question."""
    if "machine learning" in question.lower():
        return RESPONSE_PREFIX + MACHINE_LEARNING_ANSWER
    return RESPONSE_PREFIX + GENERIC_ANSWER


def answer_locally(question: str, corpus: CorpusStore) -> RagResult:
    """
    Answer a question from the in-memory corpus without the remote service.

    Candidates are kept in corpus order; only the first MAX_SOURCES are cited.

    Args:
        question: The user's question
        corpus: Books to search

    Returns:
        RagResult with up to MAX_SOURCES sources and a templated response
    """
    candidates = [book for book in corpus if matches_book(question, book)]
    kept = candidates[:settings.MAX_SOURCES]

    sources = [
        Source(
            id=book.id,
            title=book.title,
            relevance=keyword_overlap_score(question, book),
            excerpt=make_excerpt(book.content),
        )
        for book in kept
    ]

    if sources:
        confidence = round(sum(source.relevance for source in sources) / len(sources), 3)
    else:
        confidence = settings.MIN_RELEVANCE

    logger.info(
        f"Fallback answer for '{question[:50]}': {len(candidates)} candidates, {len(sources)} cited"
    )
    return RagResult(
        query=question,
        response=synthesize_response(question),
        sources=sources,
        confidence=confidence,
    )


def search_locally(query: str, corpus: CorpusStore) -> List[Book]:
    """
    Filter the corpus by a case-insensitive substring of title, content or any tag.

    Args:
        query: Search text
        corpus: Books to search

    Returns:
        Matching books in corpus order
    """
    needle = query.strip().lower()
    if not needle:
        return []
    return [
        book for book in corpus
        if needle in book.title.lower()
        or needle in book.content.lower()
        or any(needle in tag.lower() for tag in book.tags)
    ]
