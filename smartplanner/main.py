import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from .config import LOG_FORMAT, LOG_LEVEL
from .constants import SEPARATOR_LENGTH
from .exceptions import SmartPlannerError, WorkflowError
from .langgraph.nodes.ai_detector import check_ai_detection, get_ai_detection_assessment
from .langgraph.workflow import process_capture, process_generation
from .models.brand import BrandProfile
from .models.content_type import (
    CONTENT_TYPES,
    ContentCategory,
    get_content_family,
    get_content_types_by_category,
)
from .processing.generation_store import InMemoryGenerationStore

logger = logging.getLogger(__name__)


def configure_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stdout)

    # Suppress HTTP request logging from OpenAI/httpx
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)


def print_separator() -> None:
    print("=" * SEPARATOR_LENGTH)


def print_capture_result(result: dict[str, Any]) -> None:
    """Pretty print a processed capture."""
    print(f"Type: {result.get('suggested_type')} ({result.get('confidence')})")
    print(f"Reason: {result.get('reason')}")

    task = result.get("parsed_task")
    if task:
        print(f"Task: {task['text']}")
        for field in ("date", "time", "duration", "priority"):
            if task.get(field):
                print(f"  {field}: {task[field]}")
        if task.get("tags"):
            print(f"  tags: {', '.join(task['tags'])}")

    if result.get("idea_content"):
        print(f"Idea: {result['idea_content']}")

    if result.get("error"):
        print(f"ERROR: {result['error']}")


def print_detection_result(text: str) -> int:
    """Print the AI pattern report for a piece of copy and return its score."""
    result = check_ai_detection(text)
    assessment = get_ai_detection_assessment(result.score)

    print(f"AI pattern score: {result.score}/10 - {assessment.label}")
    print(assessment.description)
    for warning, suggestion in zip(result.warnings, result.suggestions):
        print(f"  - {warning}")
        print(f"    fix: {suggestion}")
    return result.score


def iso_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid date '{value}', expected YYYY-MM-DD") from e


def run_capture(args: argparse.Namespace) -> int:
    result = process_capture(args.text, today=args.today)
    print_capture_result(dict(result))
    return 1 if result.get("error") else 0


def run_check(args: argparse.Namespace) -> int:
    text = Path(args.file).read_text(encoding="utf-8")
    if args.json:
        result = check_ai_detection(text)
        report = result.to_dict()
        report["assessment"] = get_ai_detection_assessment(result.score).level
        print(json.dumps(report, indent=2))
        return 0

    print_detection_result(text)
    return 0


def run_types(args: argparse.Namespace) -> int:
    for category in ContentCategory:
        content_types = get_content_types_by_category(category)
        if not content_types:
            continue
        print(category.display_name)
        for content_type in content_types:
            family = get_content_family(content_type.id)
            print(f"  {content_type.id:<22} {content_type.name} [{family}]")
            print(f"  {'':<22} {content_type.description}")
    return 0


def run_generate(args: argparse.Namespace) -> int:
    store = InMemoryGenerationStore()
    for ratings_file in args.ratings or []:
        store.import_from_csv(Path(ratings_file))

    brand_profile = None
    if args.business_name or args.voice_sample:
        brand_profile = BrandProfile(
            business_name=args.business_name or "",
            voice_samples=[Path(p).read_text(encoding="utf-8") for p in args.voice_sample or []],
        )

    result = process_generation(
        args.user,
        args.content_type,
        ratings_reader=store,
        brand_profile=brand_profile,
        additional_context=args.context,
        use_mock=args.mock,
    )
    if result.get("error"):
        raise WorkflowError(f"Generation failed: {result['error']}")

    params = result.get("adaptive_params")
    if args.json:
        print(json.dumps({
            "content_type": args.content_type,
            "generated_copy": result.get("generated_copy"),
            "adaptive_params": params.to_dict() if params is not None else None,
            "ai_score": result.get("ai_score"),
            "ai_assessment": result.get("ai_assessment"),
            "ai_warnings": result.get("ai_warnings") or [],
        }, indent=2))
        return 0

    if params is not None and not params.is_neutral():
        print("Adaptive adjustments:")
        for guide in params.strategic_guidance:
            print(f"  - {guide}")
        print_separator()

    print(result.get("generated_copy"))
    print_separator()
    print(f"AI pattern score: {result.get('ai_score')}/10 ({result.get('ai_assessment')})")
    for warning in result.get("ai_warnings") or []:
        print(f"  - {warning}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="smartplanner",
        description="Quick-capture classification and adaptive copy generation",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=LOG_LEVEL,
        help="Logging level (DEBUG, INFO, WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    capture = subparsers.add_parser("capture", help="Classify and parse captured text")
    capture.add_argument("text", type=str, help="Captured text, e.g. 'Call Bob tomorrow 2pm'")
    capture.add_argument("--today", type=iso_date, help="Reference date (YYYY-MM-DD)")
    capture.set_defaults(func=run_capture)

    check = subparsers.add_parser("check", help="Score a copy file for AI patterns")
    check.add_argument("file", type=str, help="Text file containing the copy")
    check.add_argument("--json", action="store_true", help="Print the report as JSON")
    check.set_defaults(func=run_check)

    types = subparsers.add_parser("types", help="List the content types available for generation")
    types.set_defaults(func=run_types)

    generate = subparsers.add_parser("generate", help="Generate copy for a content type")
    generate.add_argument("content_type", choices=sorted(CONTENT_TYPES), help="Content type")
    generate.add_argument("--user", type=str, default="local", help="User id in the ratings log")
    generate.add_argument(
        "--ratings",
        type=str,
        action="append",
        help="CSV export of rated generations (repeatable)",
    )
    generate.add_argument("--business-name", type=str, help="Business name for the prompt")
    generate.add_argument(
        "--voice-sample",
        type=str,
        action="append",
        help="Text file with a writing sample (repeatable)",
    )
    generate.add_argument("--context", type=str, help="Additional context for the copy")
    generate.add_argument(
        "--mock",
        action="store_true",
        help="Use the mock generator (no OpenAI API key needed)",
    )
    generate.add_argument("--json", action="store_true", help="Print the result as JSON")
    generate.set_defaults(func=run_generate)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the smartplanner command line interface."""
    # Load environment variables from .env file
    env_path = Path(__file__).parent.parent / ".env"
    load_dotenv(env_path)

    args = build_parser().parse_args(argv)
    configure_logging(args.log_level.upper())

    try:
        return args.func(args)
    except (SmartPlannerError, OSError, UnicodeDecodeError) as e:
        logger.error(str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
