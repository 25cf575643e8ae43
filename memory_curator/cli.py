"""Command-line entry point."""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from memory_curator.config.settings import LOG_LEVELS, Settings, get_settings
from memory_curator.errors import ConfigurationError
from memory_curator.infrastructure.llm.factory import close_shared_client
from memory_curator.infrastructure.logging.logger import setup_logging
from memory_curator.infrastructure.memory_store.client import MemoryStoreClient
from memory_curator.orchestrator.pipeline import RetentionPipeline
from memory_curator.services.classification.classifier import MemoryClassifier
from memory_curator.services.classification.fan_out import ClassificationFanOut
from memory_curator.services.consensus.engine import calculate_consensus
from memory_curator.services.retention.policy import Delete, decide

logger = logging.getLogger(__name__)

EXIT_CONFIG_ERROR = 2


def _emit(payload: dict[str, Any], output: str | None) -> None:
    text = json.dumps(payload, indent=2, ensure_ascii=False, default=str)
    if output:
        output_path = Path(output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(text, encoding="utf-8")
        logger.info("Results saved to %s", output_path)
    else:
        print(text)


async def _run_pipeline(args: argparse.Namespace, settings: Settings) -> dict[str, Any]:
    try:
        async with MemoryStoreClient(settings) as store:
            pipeline = RetentionPipeline(
                settings,
                store,
                ClassificationFanOut(MemoryClassifier(settings)),
                delete_threshold=args.threshold,
                page_size=args.page_size,
                dry_run=args.dry_run,
                max_pages=args.max_pages,
            )
            summary = await pipeline.run()
    finally:
        await close_shared_client()
    return summary.to_dict(include_outcomes=not args.summary_only)


async def _classify_text(args: argparse.Namespace, settings: Settings) -> dict[str, Any]:
    try:
        fan_out = ClassificationFanOut(MemoryClassifier(settings))
        attempts = await fan_out.classify_all(args.model or settings.classifier_models, args.text)
    finally:
        await close_shared_client()
    consensus = calculate_consensus(attempts)
    threshold = args.threshold if args.threshold is not None else settings.delete_threshold
    action = decide(consensus, "", threshold)
    result = consensus.to_dict()
    result["action"] = "delete" if isinstance(action, Delete) else "retain"
    return result


def cmd_run(args: argparse.Namespace, settings: Settings) -> int:
    settings.require_credentials()
    payload = asyncio.run(_run_pipeline(args, settings))
    _emit(payload, args.output)
    return 0


def cmd_classify(args: argparse.Namespace, settings: Settings) -> int:
    settings.require_credentials(memory_store=False)
    payload = asyncio.run(_classify_text(args, settings))
    _emit(payload, args.output)
    return 0


def cmd_serve(args: argparse.Namespace, settings: Settings) -> int:
    import uvicorn

    uvicorn.run("memory_curator.app:app", host=args.host, port=args.port)
    return 0


def _threshold(value: str) -> float:
    threshold = float(value)
    if not 0.0 <= threshold <= 1.0:
        raise argparse.ArgumentTypeError("threshold must be within [0, 1]")
    return threshold


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError("must be a positive integer")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="memory-curator",
        description="Retire transient memories using multi-model consensus",
    )
    parser.add_argument(
        "--log-level", type=str.upper, choices=LOG_LEVELS, help="Override LOG_LEVEL"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    run_cmd = sub.add_parser("run", help="Classify every memory and delete transient ones")
    run_cmd.add_argument("--dry-run", action="store_true", help="Decide without deleting")
    run_cmd.add_argument("--page-size", type=_positive_int, help="Memories per page")
    run_cmd.add_argument("--max-pages", type=_positive_int, help="Stop after this many pages")
    run_cmd.add_argument("--threshold", type=_threshold, help="Delete confidence threshold")
    run_cmd.add_argument("--summary-only", action="store_true", help="Omit per-memory outcomes")
    run_cmd.add_argument("--output", help="Write the JSON summary to this path")
    run_cmd.set_defaults(func=cmd_run)

    classify_cmd = sub.add_parser("classify", help="Classify a piece of text without deleting")
    classify_cmd.add_argument("text", help="Memory content")
    classify_cmd.add_argument(
        "--model", action="append", help="Model id to fan out to (repeatable)"
    )
    classify_cmd.add_argument("--threshold", type=_threshold, help="Delete confidence threshold")
    classify_cmd.add_argument("--output", help="Write the JSON result to this path")
    classify_cmd.set_defaults(func=cmd_classify)

    serve_cmd = sub.add_parser("serve", help="Run the HTTP API")
    serve_cmd.add_argument("--host", default="127.0.0.1")
    serve_cmd.add_argument("--port", type=int, default=8000)
    serve_cmd.set_defaults(func=cmd_serve)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    setup_logging(
        level=(args.log_level or settings.log_level).upper(),
        json_output=not settings.debug,
    )

    try:
        return args.func(args, settings)
    except ConfigurationError as e:
        logger.error("Configuration error: %s", e)
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
