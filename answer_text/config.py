from dataclasses import dataclass
from pathlib import Path
import os

DEFAULT_CATALOG_PATH = str(Path(__file__).resolve().parent / "data" / "i18n.json")


@dataclass
class AnswerTextConfig:
    default_language: str = "en"
    catalog_path: str = DEFAULT_CATALOG_PATH
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8010

    @classmethod
    def from_env(cls) -> "AnswerTextConfig":
        def _int(name: str, default: int) -> int:
            value = os.environ.get(name)
            return int(value) if value else default

        return cls(
            default_language=os.environ.get("ANSWER_TEXT_LANGUAGE", cls.default_language),
            catalog_path=os.environ.get("ANSWER_TEXT_CATALOG", cls.catalog_path),
            log_level=os.environ.get("ANSWER_TEXT_LOG_LEVEL", cls.log_level),
            host=os.environ.get("ANSWER_TEXT_HOST", cls.host),
            port=_int("ANSWER_TEXT_PORT", cls.port),
        )
