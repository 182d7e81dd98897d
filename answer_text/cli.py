"""
Command line entry point for the answer text utilities.

Usage:
    answer-text reconcile answer.json      # or pipe the JSON on stdin
    answer-text merge "hello wor" "world"
    answer-text clean page.html
    answer-text i18n search_for --lang de --param keywords=Paris
    answer-text serve --port 8010
"""

import argparse
import json
import sys
from typing import Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from .config import AnswerTextConfig
from .exceptions import AnswerTextError
from .logging_config import get_logger, setup_logging
from .models import Answer, CleanRequest, MergeRequest, TranslateRequest
from .service import AnswerTextService

logger = get_logger(__name__)


def _read_input(path: Optional[str]) -> str:
    if not path or path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def _parse_params(pairs: list[str]) -> dict[str, str]:
    params = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name:
            raise ValueError(f"Expected name=value, got '{pair}'")
        params[name] = value
    return params


def run_reconcile(service: AnswerTextService, args: argparse.Namespace) -> None:
    answer = Answer.model_validate(json.loads(_read_input(args.file)))
    print(service.reconcile(answer).markdown)


def run_merge(service: AnswerTextService, args: argparse.Namespace) -> None:
    response = service.merge(MergeRequest(fragments=args.fragments))
    print(response.merged)


def run_clean(service: AnswerTextService, args: argparse.Namespace) -> None:
    request = CleanRequest(
        text=_read_input(args.file),
        strip_html=not args.keep_html,
        collapse_line_breaks=not args.keep_line_breaks,
    )
    sys.stdout.write(service.clean(request).text)


def run_i18n(service: AnswerTextService, args: argparse.Namespace) -> None:
    request = TranslateRequest(
        key=args.key,
        language=args.lang,
        params=_parse_params(args.param),
    )
    translation = service.translate(request)
    if args.json:
        print(json.dumps(translation.model_dump(), ensure_ascii=False, indent=2))
    else:
        print(translation.text)


def run_server(config: AnswerTextConfig, args: argparse.Namespace) -> None:
    import uvicorn

    from .app import create_app

    uvicorn.run(create_app(config), host=args.host or config.host, port=args.port or config.port)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="answer-text",
        description="Post-process generated answers: footnotes, fragment merging, messages.",
    )
    parser.add_argument("--log-level", help="Override ANSWER_TEXT_LOG_LEVEL")
    subparsers = parser.add_subparsers(dest="command", required=True)

    reconcile = subparsers.add_parser("reconcile", help="Align footnotes with references")
    reconcile.add_argument("file", nargs="?", help="Answer JSON file (default: stdin)")

    merge = subparsers.add_parser("merge", help="Merge overlapping fragments")
    merge.add_argument("fragments", nargs="+", help="Fragments in stream order")

    clean = subparsers.add_parser("clean", help="Strip HTML tags and extra blank lines")
    clean.add_argument("file", nargs="?", help="Text file (default: stdin)")
    clean.add_argument("--keep-html", action="store_true", help="Do not strip HTML tags")
    clean.add_argument("--keep-line-breaks", action="store_true", help="Do not collapse blank lines")

    i18n = subparsers.add_parser("i18n", help="Look up a localized message")
    i18n.add_argument("key", help="Message key")
    i18n.add_argument("--lang", help="Language code (default: ANSWER_TEXT_LANGUAGE)")
    i18n.add_argument("--param", action="append", default=[], help="Template value as name=value")
    i18n.add_argument("--json", action="store_true", help="Print the full lookup result with diagnostics")

    serve = subparsers.add_parser("serve", help="Run the FastAPI server")
    serve.add_argument("--host", help="Server host (default: ANSWER_TEXT_HOST)")
    serve.add_argument("--port", type=int, help="Server port (default: ANSWER_TEXT_PORT)")

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    config = AnswerTextConfig.from_env()
    setup_logging(args.log_level or config.log_level)

    if args.command == "serve":
        run_server(config, args)
        return 0

    handlers = {
        "reconcile": run_reconcile,
        "merge": run_merge,
        "clean": run_clean,
        "i18n": run_i18n,
    }

    try:
        service = AnswerTextService(config=config)
        handlers[args.command](service, args)
    except (AnswerTextError, ValidationError, ValueError, OSError) as exc:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
