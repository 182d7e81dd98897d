"""
Data Models for answer post-processing.

Defines:
1. Reference / Answer - the record shape produced by the answer generator
2. Translation / I18nDiagnostic - message catalog lookups and their fallbacks
3. Request/response bodies for the HTTP app

Reference accepts both ``exact_quote`` and the generator's JSON name
``exactQuote``:

    Answer.model_validate({
        "answer": "Paris is the capital of France.[^1]",
        "references": [{"exactQuote": "Paris is ...", "url": "https://..."}],
    })
"""

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Reference(BaseModel):
    """A single source quote backing a footnote; position = footnote number."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    exact_quote: str = Field(
        ...,
        alias="exactQuote",
        description="Verbatim quote from the source",
    )
    url: Optional[str] = Field(
        None,
        description="Source URL; only http(s) URLs are rendered as links",
    )


class Answer(BaseModel):
    """Generated answer text together with its ordered references."""
    answer: str = Field(..., description="Answer text, may contain [^n] markers")
    references: list[Reference] = Field(default_factory=list)

    @field_validator("references", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class I18nDiagnostic(BaseModel):
    """One fallback step taken while resolving a message."""
    kind: Literal["missing_language", "missing_key", "missing_default"]
    key: str
    language: str
    message: str


class Translation(BaseModel):
    key: str
    language: str = Field(..., description="Language the text was taken from")
    text: str
    diagnostics: list[I18nDiagnostic] = Field(default_factory=list)

    @property
    def fell_back(self) -> bool:
        return bool(self.diagnostics)


class ReconcileResponse(BaseModel):
    markdown: str


class MergeRequest(BaseModel):
    first: str = ""
    second: str = ""
    fragments: Optional[list[str]] = Field(
        None,
        description="Merge a whole stream of fragments instead of first/second",
    )


class MergeResponse(BaseModel):
    merged: str


class CleanRequest(BaseModel):
    text: str
    strip_html: bool = True
    collapse_line_breaks: bool = True


class CleanResponse(BaseModel):
    text: str


class TranslateRequest(BaseModel):
    key: str = Field(..., min_length=1)
    language: Optional[str] = None
    params: dict[str, str] = Field(default_factory=dict)
