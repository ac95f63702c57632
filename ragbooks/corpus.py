"""
In-memory book collection used by the offline fallback path.
"""

import logging
from typing import Dict, Iterable, Iterator, List, Optional

from . import settings
from .models import Book, NewBook

logger = logging.getLogger(__name__)


class CorpusStore:
    """Ordered collection of books keyed by id."""

    def __init__(self, books: Iterable[Book] = ()):
        self._books: Dict[int, Book] = {}
        for book in books:
            self.insert(book)

    def __iter__(self) -> Iterator[Book]:
        return iter(list(self._books.values()))

    def __len__(self) -> int:
        return len(self._books)

    def __contains__(self, book_id: object) -> bool:
        return book_id in self._books

    @property
    def books(self) -> List[Book]:
        """Snapshot of the books in insertion order."""
        return list(self._books.values())

    def get(self, book_id: int) -> Optional[Book]:
        """Return the book with the given id, or None if it is not in the store."""
        return self._books.get(book_id)

    def resolve(self, book_ids: Iterable[int]) -> List[Book]:
        """
        Look up books for a list of ids, skipping ids that are not in the store.

        Args:
            book_ids: Book ids, e.g. the sources of a conversation turn

        Returns:
            Books found, in the order of the ids
        """
        found = []
        for book_id in book_ids:
            book = self._books.get(book_id)
            if book is None:
                logger.debug(f"Source book {book_id} not in corpus, skipping")
                continue
            found.append(book)
        return found

    def insert(self, book: Book) -> Book:
        """Store a book that already has an id. A book with the same id is replaced in place."""
        self._books[book.id] = book
        return book

    def add(self, new_book: NewBook) -> Book:
        """
        Assign an id to a new book and store it.

        Args:
            new_book: Validated user-supplied book fields

        Returns:
            The stored Book with its id and a placeholder embedding
        """
        next_id = max(self._books, default=0) + 1
        book = Book(
            id=next_id,
            embedding=[0.0] * settings.EMBEDDING_DIM,
            **new_book.model_dump(),
        )
        logger.info(f"Added book {book.id}: {book.title!r}")
        return self.insert(book)

    def replace_all(self, books: Iterable[Book]) -> None:
        """Swap the whole collection for a new one."""
        self._books = {}
        for book in books:
            self.insert(book)
