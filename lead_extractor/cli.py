"""Command line interface for serving the API or running a one-off extraction."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .config import load_settings
from .errors import PipelineError
from .factory import build_pipeline
from .ingestion.exporters import export_lead_records
from .models import ExtractionRequest


def build_parser(prog: str | None = None) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=prog,
        description="Run lead extractions against third-party scraping actors",
    )
    parser.add_argument(
        "--config",
        help="Path to a configuration file (YAML or JSON); environment variables take precedence",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=None, help="Interface to bind (defaults to the configured host)")
    serve.add_argument("--port", type=int, default=None, help="Port to bind (defaults to the configured port)")
    serve.add_argument("--debug", action="store_true", help="Enable the Flask debugger and reloader")

    run = subparsers.add_parser("run", help="Run a single extraction and print or save the leads")
    run.add_argument("keyword", help="Keyword, handle, hashtag, or profile URL to extract from")
    run.add_argument("--platform", default="linkedin", help="Platform whose actor should run (linkedin, twitter)")
    run.add_argument("--max-leads", type=int, default=None, help="Requested number of leads (capped by the provider)")
    run.add_argument("--language", default="en", help="Language hint passed to the actor")
    run.add_argument("--country", default="us", help="Country hint passed to the actor")
    run.add_argument("--output", help="Write results to this CSV or XLSX file instead of printing JSON")
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def _serve(args: argparse.Namespace) -> int:
    from .server import create_app

    settings = load_settings(args.config)
    app = create_app(settings)
    app.run(host=args.host or settings.host, port=args.port or settings.port, debug=args.debug)
    return 0


def _run(args: argparse.Namespace) -> int:
    settings = load_settings(args.config)
    extraction = ExtractionRequest(
        keyword=args.keyword,
        platform=args.platform.lower(),
        language=args.language,
        country=args.country,
        max_leads=args.max_leads,
    )

    try:
        pipeline = build_pipeline(settings)
        records = pipeline.run(extraction)
    except PipelineError as exc:
        logging.error("Extraction failed: %s", exc)
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if args.output:
        destination = export_lead_records(records, args.output)
        logging.info("Wrote %s leads to %s", len(records), Path(destination).resolve())
    else:
        json.dump([record.to_dict() for record in records], sys.stdout, indent=2, ensure_ascii=False)
        sys.stdout.write("\n")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))

    if args.command == "serve":
        return _serve(args)
    return _run(args)


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
