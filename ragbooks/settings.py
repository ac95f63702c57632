"""
Global settings and configuration for the ragbooks application.
"""

import os

# Remote answering service
RAG_API_URL = os.getenv("RAG_API_URL", "http://localhost:8000/api").rstrip("/")
RAG_API_TIMEOUT = float(os.getenv("RAG_API_TIMEOUT", "10"))  # seconds

# Logging
LOG_LEVEL = os.getenv("RAGBOOKS_LOG_LEVEL", "INFO").upper()

# Retrieval limits
MAX_SOURCES = 3
EXCERPT_LENGTH = 100  # characters

# Fallback scoring range, upper bound exclusive
MIN_RELEVANCE = 0.7
MAX_RELEVANCE = 1.0

# Placeholder embedding length for books added offline
EMBEDDING_DIM = 5

# User-visible error messages
QUERY_FAILED_MESSAGE = "RAG query failed"
FETCH_FAILED_MESSAGE = "Failed to fetch books"
SEARCH_FAILED_MESSAGE = "Search failed"
ADD_FAILED_MESSAGE = "Failed to add book"
