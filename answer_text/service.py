from __future__ import annotations

from .cleaning import remove_extra_line_breaks, remove_html_tags
from .config import AnswerTextConfig
from .footnotes import build_markdown
from .i18n import MessageCatalog
from .logging_config import get_logger
from .merge import merge_fragments, merge_stream
from .models import (
    Answer,
    CleanRequest,
    CleanResponse,
    MergeRequest,
    MergeResponse,
    ReconcileResponse,
    TranslateRequest,
    Translation,
)

logger = get_logger(__name__)


class AnswerTextService:
    def __init__(
        self,
        config: AnswerTextConfig | None = None,
        catalog: MessageCatalog | None = None,
    ):
        self.config = config or AnswerTextConfig.from_env()
        self.catalog = catalog or MessageCatalog.from_file(
            self.config.catalog_path,
            default_language=self.config.default_language,
        )

    def reconcile(self, answer: Answer) -> ReconcileResponse:
        logger.info(
            f"Reconciling answer ({len(answer.answer)} chars, "
            f"{len(answer.references)} references)"
        )
        return ReconcileResponse(markdown=build_markdown(answer))

    def merge(self, request: MergeRequest) -> MergeResponse:
        if request.fragments is not None:
            return MergeResponse(merged=merge_stream(request.fragments))
        return MergeResponse(merged=merge_fragments(request.first, request.second))

    def clean(self, request: CleanRequest) -> CleanResponse:
        text = request.text
        if request.strip_html:
            text = remove_html_tags(text)
        if request.collapse_line_breaks:
            text = remove_extra_line_breaks(text)
        return CleanResponse(text=text)

    def translate(self, request: TranslateRequest) -> Translation:
        language = request.language or self.config.default_language
        return self.catalog.resolve(request.key, language, request.params)
