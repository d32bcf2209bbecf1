from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

import uvicorn

from speaking_report.clients.report_api import ReportApiClient
from speaking_report.config import SettingsError, load_settings
from speaking_report.render import render_report
from speaking_report.repositories.assessment_repository import (
    FileAssessmentSource,
    RemoteAssessmentSource,
    RetrievalError,
)
from speaking_report.services.report_service import load_view_model


async def _show(data_path: Path, url: str | None, timeout: float) -> str:
    if url:
        source = RemoteAssessmentSource(
            ReportApiClient(base_url=url, timeout=timeout), base_url=url
        )
        try:
            view = await load_view_model(source)
        finally:
            await source.close()
    else:
        view = await load_view_model(FileAssessmentSource(data_path))
    return render_report(view)


def _serve(host: str, port: int, reload: bool) -> int:
    uvicorn.run(
        "speaking_report.main:app",
        host=host,
        port=port,
        reload=reload,
        log_level="info",
    )
    return 0


def _default_level(command: str) -> int:
    return logging.INFO if command == "serve" else logging.WARNING


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Student speaking assessment report")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    show = subparsers.add_parser("show", help="Render the current report in the terminal")
    show.add_argument("--data", type=Path, help="Path to the assessment JSON record")
    show.add_argument("--url", help="Base URL of a report service to fetch from")

    serve = subparsers.add_parser("serve", help="Run the report API server")
    serve.add_argument("--host")
    serve.add_argument("--port", type=int)
    serve.add_argument("--reload", action="store_true")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else _default_level(args.command),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = load_settings()
    except SettingsError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    if args.command == "serve":
        return _serve(args.host or settings.host, args.port or settings.port, args.reload)

    url = args.url or (None if args.data else settings.source_url)
    data_path = args.data or settings.data_path
    try:
        output = asyncio.run(_show(data_path, url, settings.source_timeout))
    except RetrievalError as exc:
        print(f"Failed to load student data: {exc}", file=sys.stderr)
        return 1
    sys.stdout.write(output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
