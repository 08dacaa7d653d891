"""Command-line entry point for the Cornell note generator."""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from loguru import logger

from cornell.cli.handlers import NoteRequestHandler
from cornell.config import Settings, get_settings
from cornell.exceptions import ExportBlockedError
from cornell.models import GenerationRequest
from cornell.services.markdown_export import export_markdown
from cornell.services.note_generator import NoteGeneratorService
from cornell.utils.logger import setup_logger


EXIT_OK = 0
EXIT_REJECTED = 1
EXIT_BLOCKED = 2


def parse_args(argv: List[str], settings: Settings) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Turn a study excerpt into a Cornell note")
    parser.add_argument("--log-level", type=str, default=settings.log_level, help="Log level for stderr output.")
    parser.add_argument("--log-file", type=Path, default=None, help="Optional file to receive log output.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_input_options(sub: argparse.ArgumentParser) -> None:
        sub.add_argument("excerpt", type=str, help="Path to the excerpt text file, or '-' for stdin.")
        sub.add_argument("--strict", action=argparse.BooleanOptionalAction, default=settings.strict_mode, help="Strict mode: evidence quotes and user-selected takeaways.")
        sub.add_argument("--domain", type=str, default=settings.domain_vocabulary, help="Comma-separated domain vocabulary terms.")
        sub.add_argument("--title", type=str, default=None, help="Note title.")
        sub.add_argument("--module", type=str, default=None, help="Study module name.")

    generate = subparsers.add_parser("generate", help="Generate a Cornell note as Markdown.")
    add_input_options(generate)
    generate.add_argument("--select", type=str, default=None, help="Candidate numbers to keep as takeaways in strict mode, e.g. '1,2,4,5,7'.")
    generate.add_argument("--output", type=Path, default=None, help="Write Markdown to this file instead of stdout.")
    generate.add_argument("--force", action="store_true", help="Export even when the note fails validation.")

    suggest = subparsers.add_parser("suggest", help="List scored takeaway candidates.")
    add_input_options(suggest)

    return parser.parse_args(argv)


def _read_excerpt(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _build_request(args: argparse.Namespace) -> GenerationRequest:
    return GenerationRequest(
        excerpt=_read_excerpt(args.excerpt),
        strict_mode=args.strict,
        domain_vocabulary=args.domain or "",
        title=args.title,
        module=args.module,
    )


def run_generate(args: argparse.Namespace, handler: NoteRequestHandler) -> int:
    result, error = handler.handle_generate(_build_request(args))
    if error:
        print(error, file=sys.stderr)
        return EXIT_REJECTED

    note = result.note
    if args.select:
        numbers, error = handler.parse_selection(args.select)
        if error is None:
            note, error = handler.handle_selection(result, numbers)
        if error:
            print(error, file=sys.stderr)
            return EXIT_REJECTED

    for message in note.validation_errors:
        print(f"Validation: {message}", file=sys.stderr)

    try:
        markdown = export_markdown(note, allow_invalid=args.force)
    except ExportBlockedError as e:
        print(str(e), file=sys.stderr)
        if note.strict_mode and not note.takeaways:
            print("Run 'suggest' to list candidates, then pass --select.", file=sys.stderr)
        return EXIT_BLOCKED

    if args.output:
        args.output.write_text(markdown + "\n", encoding="utf-8")
        logger.info(f"Wrote note to {args.output}")
    else:
        print(markdown)
    return EXIT_OK


def run_suggest(args: argparse.Namespace, handler: NoteRequestHandler) -> int:
    result, error = handler.handle_generate(_build_request(args))
    if error:
        print(error, file=sys.stderr)
        return EXIT_REJECTED

    suggestions = handler.generator.propose_takeaways(result.candidates)
    for number, candidate in enumerate(suggestions, start=1):
        print(f"{number:>3}. [{candidate.score}] {candidate.text}")
    for warning in result.warnings:
        print(f"Warning: {warning}", file=sys.stderr)
    return EXIT_OK


def run(argv: Optional[List[str]] = None) -> int:
    settings = get_settings()
    args = parse_args(sys.argv[1:] if argv is None else argv, settings)
    setup_logger(args.log_level.upper(), args.log_file)

    handler = NoteRequestHandler(NoteGeneratorService(settings=settings))
    if args.command == "generate":
        return run_generate(args, handler)
    if args.command == "suggest":
        return run_suggest(args, handler)
    raise ValueError(f"Unsupported command: {args.command}")


def main() -> None:
    """Console entry point"""
    setup_logger()

    try:
        exit_code = run()
    except KeyboardInterrupt:
        logger.info("Received interrupt signal, stopping...")
        exit_code = 130
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        logger.info("Please check your .env file or environment variables")
        exit_code = 1
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        exit_code = 1

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
