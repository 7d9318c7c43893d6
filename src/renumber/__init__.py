"""renumber

Find phone numbers in PDFs and replace them, either in place over the
original layout or by rebuilding the text onto new pages. See
``renumber.core`` for the pipeline APIs and ``renumber.cli`` /
``renumber.api`` for user entrypoints.
"""

__all__ = [
    "core",
    "normalize",
    "phone",
    "align",
    "redact",
    "reflow",
    "extract",
    "sources",
    "fonts",
    "llm",
    "audit",
    "batch",
    "api",
    "logging",
    "settings",
    "health",
    "errors",
]

__version__ = "0.1.0"
