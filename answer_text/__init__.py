"""
Answer Text - post-processing for generated answers

Reconciles footnote markers with the reference list, merges overlapping
streamed fragments, cleans markup and resolves localized status messages.

Quick Start:
    from answer_text import Answer, build_markdown, merge_fragments

    answer = Answer.model_validate({
        "answer": "Paris is the capital of France.[^1, ^2]",
        "references": [
            {"exactQuote": "Paris is the capital", "url": "https://www.example.com/paris"},
            {"exactQuote": "France (country)"},
        ],
    })
    print(build_markdown(answer))

    merge_fragments("hello wor", "world")  # "hello world"
"""

__version__ = "1.0.0"

from .cleaning import choose_k, remove_extra_line_breaks, remove_html_tags
from .config import AnswerTextConfig
from .exceptions import (
    AnswerTextError,
    CatalogLoadError,
    InvalidReferenceURLError,
    format_error_chain,
)
from .footnotes import (
    FootnoteMarker,
    build_markdown,
    expand_grouped_markers,
    find_markers,
    format_references,
    needs_correction,
    reconcile,
    renumber_markers,
    strip_markers,
)
from .i18n import MessageCatalog, get_text
from .merge import merge_fragments, merge_stream
from .models import Answer, I18nDiagnostic, Reference, Translation
from .service import AnswerTextService

__all__ = [
    "__version__",
    "AnswerTextConfig",
    "AnswerTextError",
    "CatalogLoadError",
    "InvalidReferenceURLError",
    "format_error_chain",
    "FootnoteMarker",
    "build_markdown",
    "expand_grouped_markers",
    "find_markers",
    "format_references",
    "needs_correction",
    "reconcile",
    "renumber_markers",
    "strip_markers",
    "MessageCatalog",
    "get_text",
    "merge_fragments",
    "merge_stream",
    "Answer",
    "I18nDiagnostic",
    "Reference",
    "Translation",
    "AnswerTextService",
    "choose_k",
    "remove_extra_line_breaks",
    "remove_html_tags",
]
