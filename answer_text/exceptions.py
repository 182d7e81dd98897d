"""
Custom Exceptions for answer text post-processing.

Exception Hierarchy:
    AnswerTextError (base)
    ├── InvalidReferenceURLError
    └── CatalogLoadError

Usage:
    from answer_text.exceptions import AnswerTextError, InvalidReferenceURLError

    try:
        markdown = reconcile(text, references)
    except InvalidReferenceURLError as e:
        print(f"Bad reference URL: {e.url}")
    except AnswerTextError as e:
        print(f"Post-processing failed: {e}")
"""

from __future__ import annotations

from typing import Optional


class AnswerTextError(Exception):
    """
    Base exception for all answer post-processing errors.

    Attributes:
        message: Human-readable error description
        details: Additional technical details (optional)
    """

    def __init__(
        self,
        message: str = "An answer post-processing error occurred",
        details: Optional[str] = None,
    ):
        self.message = message
        self.details = details

        full_message = message
        if details:
            full_message = f"{message} | Details: {details}"

        super().__init__(full_message)


class InvalidReferenceURLError(AnswerTextError, ValueError):
    """
    Raised when a reference URL starts with ``http`` but cannot be parsed
    into an absolute URL with a hostname.

    Attributes:
        url: The offending URL
        original_error: The underlying parse error, if any
    """

    def __init__(
        self,
        url: str,
        original_error: Optional[Exception] = None,
    ):
        self.url = url
        self.original_error = original_error
        details = str(original_error) if original_error else None
        super().__init__(
            message=f"Invalid reference URL: {url}",
            details=details,
        )


class CatalogLoadError(AnswerTextError):
    """
    Raised when a message catalog file cannot be read or has the wrong shape.

    Attributes:
        path: Path to the catalog file, if loaded from disk
        original_error: The underlying I/O or JSON error, if any
    """

    def __init__(
        self,
        message: str = "Failed to load message catalog",
        path: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.path = path
        self.original_error = original_error
        if path:
            message = f"{message} [{path}]"
        details = str(original_error) if original_error else None
        super().__init__(message, details)


def _error_chain(error: Exception):
    current: Optional[BaseException] = error
    while current is not None:
        yield current
        current = getattr(current, "original_error", None) or current.__cause__


def format_error_chain(error: Exception) -> str:
    """One line per error, following original_error first and then __cause__."""
    return "\n".join(
        ("  " * depth + "└─ " if depth else "") + f"{type(err).__name__}: {err}"
        for depth, err in enumerate(_error_chain(error))
    )
