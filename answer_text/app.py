from fastapi import FastAPI, HTTPException

from .config import AnswerTextConfig
from .exceptions import InvalidReferenceURLError, format_error_chain
from .logging_config import get_logger
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
from .service import AnswerTextService

logger = get_logger(__name__)


def create_app(
    config: AnswerTextConfig | None = None,
    service: AnswerTextService | None = None,
) -> FastAPI:
    service = service or AnswerTextService(config=config)
    app = FastAPI(
        title="Answer Text Service",
        version="1.0.0",
        description="Footnote reconciliation, fragment merging and message lookup for generated answers.",
    )

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    @app.post("/reconcile", response_model=ReconcileResponse)
    def reconcile(answer: Answer) -> ReconcileResponse:
        try:
            return service.reconcile(answer)
        except InvalidReferenceURLError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        except Exception as exc:
            logger.error(format_error_chain(exc))
            raise HTTPException(status_code=500, detail=str(exc)) from exc

    @app.post("/merge", response_model=MergeResponse)
    def merge(request: MergeRequest) -> MergeResponse:
        return service.merge(request)

    @app.post("/clean", response_model=CleanResponse)
    def clean(request: CleanRequest) -> CleanResponse:
        return service.clean(request)

    @app.post("/i18n", response_model=Translation)
    def translate(request: TranslateRequest) -> Translation:
        return service.translate(request)

    return app


app = create_app()
