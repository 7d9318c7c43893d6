"""Typed exceptions raised by the renumber pipelines.

Each error is fatal to the document being processed. Callers that handle
several documents catch :class:`RenumberError` at the document boundary and
record the message instead of aborting the batch.
"""


class RenumberError(Exception):
    """Base class for document processing failures."""


class SourceUnavailable(RenumberError):
    """Raised when the source document or the font cannot be obtained."""


class ParseFailure(RenumberError):
    """Raised when a document cannot be opened or its text extracted."""


class RenderFailure(RenumberError):
    """Raised when the output document cannot be composed."""


class CleanupFailure(RenumberError):
    """Raised when the LLM cleanup service fails or returns no text."""


__all__ = [
    "RenumberError",
    "SourceUnavailable",
    "ParseFailure",
    "RenderFailure",
    "CleanupFailure",
]
