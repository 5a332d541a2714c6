from __future__ import annotations

import argparse
import json
import logging
from functools import partial
from pathlib import Path
from typing import Optional, Sequence

from ..config import Settings, get_settings
from ..knowledge_base import KnowledgeStore, SourceWatcher, format_answer
from ..knowledge_base.builder import Extractor
from ..logging import configure_logging
from ..services import extract_text, extract_text_via_mineru

GREETING = "Hi! I'm your Change Management assistant."
EXIT_COMMANDS = {"exit", "quit"}


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Answer questions from a FAQ document (PDF, markdown, or text)."
    )
    parser.add_argument(
        "--source",
        help="Path to the knowledge base document (default: <files_root>/knowledgebase.pdf).",
    )
    parser.add_argument(
        "--threshold",
        type=_unit_interval,
        help="Minimum match score required to answer (default: 0.35).",
    )
    parser.add_argument(
        "--max-keywords",
        type=_non_negative_int,
        help="Keywords derived per question label (default: 8).",
    )
    parser.add_argument(
        "--max-entries",
        type=_non_negative_int,
        help="Entry cap for paragraph-chunked documents (default: 300).",
    )

    subparsers = parser.add_subparsers(dest="command")
    subparsers.required = True

    ask = subparsers.add_parser("ask", help="Answer a single question")
    ask.add_argument("question", help="Question to match against the knowledge base")
    ask.add_argument(
        "--json",
        action="store_true",
        help="Print the answer as JSON instead of text.",
    )

    kb_parser = subparsers.add_parser("kb", help="Inspect the loaded knowledge base")
    kb_subparsers = kb_parser.add_subparsers(dest="kb_command")
    kb_subparsers.required = True
    kb_subparsers.add_parser("show", help="Print every entry as JSON")
    kb_subparsers.add_parser("info", help="Show knowledge base statistics")

    chat = subparsers.add_parser("chat", help="Interactive question loop with live reload")
    chat.add_argument(
        "--poll-interval",
        type=_positive_float,
        help="Seconds between source file change checks (default: 2.0).",
    )

    return parser.parse_args(args=argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    settings = get_settings()
    configure_logging(log_dir=settings.log_dir)
    logger = logging.getLogger("changekb")
    logger.debug("Starting changekb CLI (%s)", args.command)

    store = build_store(args, settings)
    store.reload()

    if args.command == "ask":
        result = store.answer(args.question)
        if args.json:
            print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
        else:
            print(format_answer(result))
        return 0

    if args.command == "kb":
        return _handle_kb_command(args, store)

    if args.command == "chat":
        interval = args.poll_interval or settings.poll_interval
        return run_chat(store, interval=interval)

    raise ValueError(f"Unknown command: {args.command}")


def build_store(args: argparse.Namespace, settings: Settings) -> KnowledgeStore:
    source = Path(args.source).expanduser() if args.source else settings.source_path
    return KnowledgeStore(
        source,
        extractor=_select_extractor(settings, source),
        max_keywords=_pick(args.max_keywords, settings.max_keywords),
        max_fallback_entries=_pick(args.max_entries, settings.max_fallback_entries),
        threshold=_pick(args.threshold, settings.confidence_threshold),
    )


def run_chat(store: KnowledgeStore, *, interval: float) -> int:
    watcher = SourceWatcher(store, interval=interval)
    watcher.start()
    print(GREETING)
    try:
        while True:
            try:
                line = input("> ")
            except (EOFError, KeyboardInterrupt):
                print()
                break
            question = line.strip()
            if not question:
                continue
            if question.lower() in EXIT_COMMANDS:
                break
            print(format_answer(store.answer(question)))
    finally:
        watcher.stop(timeout=interval)
    return 0


def _handle_kb_command(args: argparse.Namespace, store: KnowledgeStore) -> int:
    if args.kb_command == "show":
        print(json.dumps(store.get_knowledge_base(), ensure_ascii=False, indent=2))
        return 0

    if args.kb_command == "info":
        snapshot = store.snapshot
        print(f"Source: {store.source_path}")
        print(f"Entries: {len(snapshot)}")
        print(f"Strategy: {snapshot.strategy}")
        loaded_at = snapshot.loaded_at.isoformat() if snapshot.loaded_at else "never"
        print(f"Loaded at: {loaded_at}")
        print(f"Confidence threshold: {store.threshold}")
        return 0

    raise ValueError(f"Unknown knowledge base command: {args.kb_command}")


def _select_extractor(settings: Settings, source: Path) -> Extractor:
    if settings.extractor == "mineru":
        return partial(
            extract_text_via_mineru,
            api_key=settings.mineru_api_key,
            file_name=source.name,
        )
    return extract_text


def _pick(override, default):
    return default if override is None else override


def _unit_interval(raw: str) -> float:
    value = _parse(raw, float)
    if not 0.0 <= value <= 1.0:
        raise argparse.ArgumentTypeError(f"must be between 0 and 1, got {raw}")
    return value


def _non_negative_int(raw: str) -> int:
    value = _parse(raw, int)
    if value < 0:
        raise argparse.ArgumentTypeError(f"must not be negative, got {raw}")
    return value


def _positive_float(raw: str) -> float:
    value = _parse(raw, float)
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {raw}")
    return value


def _parse(raw: str, cast):
    try:
        return cast(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid {cast.__name__} value: {raw!r}") from None


__all__ = ["build_store", "main", "parse_args", "run_chat"]
