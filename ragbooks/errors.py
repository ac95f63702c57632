"""
Error kinds raised by the conversation and retrieval layer.
"""


class RagBooksError(Exception):
    """Base class for all ragbooks errors."""


class QuestionValidationError(RagBooksError):
    """The question is empty or whitespace only. Raised before any dispatch."""


class NotReadyError(RagBooksError):
    """A query was submitted before the orchestrator finished initializing."""


class QueryInProgressError(RagBooksError):
    """A query was submitted while another one is still in flight."""


class RemoteUnavailable(RagBooksError):
    """The remote answering service could not be reached or returned a non-2xx status."""


class InternalFailure(RagBooksError):
    """A successful remote response had an unexpected shape."""
