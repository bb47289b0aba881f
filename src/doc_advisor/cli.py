"""Command line interface for doc-advisor."""

from __future__ import annotations

import argparse
import json
import sys

from doc_advisor import __version__
from doc_advisor.config import load_config
from doc_advisor.domain.errors import ClarificationNeeded
from doc_advisor.domain.models import DocMode
from doc_advisor.logging import configure_logging, get_logger, get_run_id
from doc_advisor.research import planner
from doc_advisor.services import health_service
from doc_advisor.style import advisor


logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Documentation research and architecture style advisor")
    parser.add_argument("--version", action="version", version=f"doc-advisor {__version__}")
    subparsers = parser.add_subparsers(dest="command")

    research_parser = subparsers.add_parser("research", help="Research a library or API question")
    research_parser.add_argument("query", nargs="+", help="Question, e.g. 'React hooks'")
    research_parser.add_argument("--library", help="Library name, when the question does not start with it")
    research_parser.add_argument("--topic", help="Topic filter for the documentation index")
    research_parser.add_argument("--mode", choices=[m.value for m in DocMode], help="code examples or conceptual docs")
    research_parser.add_argument("--page", type=int, help="Documentation page to fetch")
    research_parser.add_argument("--no-primary", action="store_true", help="Skip the documentation index")
    research_parser.add_argument("--probe", action="store_true", help="Probe the documentation index before using it")
    research_parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    research_parser.set_defaults(func=_research_handler)

    style_parser = subparsers.add_parser("style", help="Ports-and-adapters conventions for a code element")
    style_parser.add_argument("description", nargs="*", help="Category or description, e.g. 'OrderRepository'")
    style_parser.add_argument("--list", action="store_true", help="List known categories")
    style_parser.add_argument("--json", action="store_true", help="Print the advice as JSON")
    style_parser.set_defaults(func=_style_handler)

    doctor_parser = subparsers.add_parser("doctor", help="Check documentation sources")
    doctor_parser.set_defaults(func=_doctor_handler)

    return parser


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()
    if not hasattr(args, "func"):
        parser.print_help()
        return

    config = load_config()
    configure_logging(config.logging.level)
    logger.info("Starting CLI", extra={"run_id": get_run_id(), "command": args.command, "env": config.app.environment})
    args.func(args)


def _research_handler(args: argparse.Namespace) -> None:
    cfg = load_config()
    primary_available = None
    if args.no_primary:
        primary_available = False
    elif args.probe:
        primary_available = bool(health_service.check_context7(cfg).get("ok"))

    text = " ".join(args.query)
    try:
        result = planner.research(
            text,
            primary_available=primary_available,
            library=args.library,
            topic=args.topic,
            mode=DocMode(args.mode) if args.mode else None,
            page=args.page,
            config=cfg,
        )
    except ClarificationNeeded as exc:
        print(json.dumps({"clarification_needed": str(exc), "query": text}, indent=2))
        sys.exit(2)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(result.text)


def _style_handler(args: argparse.Namespace) -> None:
    if args.list or not args.description:
        print(json.dumps({"categories": advisor.list_categories()}, indent=2))
        return
    advice = advisor.advise(" ".join(args.description))
    if args.json:
        print(json.dumps(advice.to_dict(), indent=2))
    else:
        print(advisor.render_advice(advice))


def _doctor_handler(args: argparse.Namespace) -> None:
    cfg = load_config()
    results = health_service.run_all_checks(cfg)
    print(json.dumps(results, indent=2))
    if not any(r.get("ok") for r in results.values()):
        sys.exit(1)


if __name__ == "__main__":
    main()
