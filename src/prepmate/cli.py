"""Command-line interface for looking up opponent rating profiles."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Sequence

from prepmate.cache import RatingCache
from prepmate.config import ExtractionSettings, load_settings
from prepmate.config_loader import SettingsProfile
from prepmate.fetch import HttpDocumentFetcher
from prepmate.profile import ProfileService
from prepmate.ratings import rating_category


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--history-years", type=int, default=None, help="Years in the normalized history window")
    common.add_argument(
        "--set",
        dest="overrides",
        action="append",
        default=[],
        help="Override an extraction setting (e.g., peak_anomaly_margin=30)",
    )
    common.add_argument("--settings", type=Path, help="Load settings overrides JSON", default=None)
    common.add_argument("--save-settings", type=Path, help="Save settings overrides JSON", default=None)
    common.add_argument("--verbose", "-v", action="store_true", help="Log extraction decisions")

    parser = argparse.ArgumentParser(description="Look up opponent rating profiles")
    commands = parser.add_subparsers(dest="command", required=True)

    lookup = commands.add_parser("lookup", parents=[common], help="Print rating profiles as JSON")
    lookup.add_argument("identifiers", nargs="+", help="USCF ids, FIDE ids (fide_<id>) or any other identifier")
    lookup.add_argument("--debug", action="store_true", help="Include a prefix of the raw document")
    lookup.add_argument("--output", type=Path, default=None, help="Write the JSON result here instead of stdout")

    serve = commands.add_parser("serve", parents=[common], help="Run the REST API")
    serve.add_argument("--host", default="127.0.0.1", help="API bind address")
    serve.add_argument("--port", type=int, default=8000, help="API port")
    return parser.parse_args(argv)


def _parse_overrides(entries: list[str]) -> dict[str, object]:
    overrides: dict[str, object] = {}
    for entry in entries:
        if "=" not in entry:
            raise ValueError(f"Invalid setting entry '{entry}', expected key=value")
        key, raw = entry.split("=", 1)
        try:
            value: object = json.loads(raw)
        except json.JSONDecodeError:
            value = raw.strip()
        overrides[key.strip()] = value
    return overrides


def _resolve_settings(args: argparse.Namespace) -> ExtractionSettings:
    settings = load_settings()
    if args.settings:
        try:
            settings = SettingsProfile.load(args.settings).apply(settings)
        except (OSError, ValueError, TypeError) as exc:
            raise SystemExit(f"Unable to read settings from {args.settings}: {exc}") from exc
    try:
        overrides = _parse_overrides(args.overrides)
        if args.history_years is not None:
            overrides["history_years"] = args.history_years
        if overrides:
            settings = settings.with_overrides(overrides)
    except (ValueError, TypeError) as exc:
        raise SystemExit(f"Invalid setting override: {exc}") from exc
    if args.save_settings:
        SettingsProfile.from_settings(settings).save(args.save_settings)
        print(f"Saved settings profile to {args.save_settings}")
    return settings


def _serve(args: argparse.Namespace, settings: ExtractionSettings) -> None:
    import uvicorn

    from prepmate.api import create_app

    uvicorn.run(create_app(settings=settings), host=args.host, port=args.port)


def _lookup(args: argparse.Namespace, settings: ExtractionSettings) -> None:
    fetcher = HttpDocumentFetcher(timeout=settings.request_timeout)
    service = ProfileService(fetcher, settings=settings, cache=RatingCache(settings.cache_ttl_seconds))
    results = []
    try:
        for identifier in args.identifiers:
            lookup = service.lookup(identifier)
            payload = {
                "opponent": lookup.record.model_dump(mode="json", by_alias=True),
                "category": rating_category(lookup.record.current_rating),
            }
            if args.debug:
                payload["debug"] = lookup.debug_payload(True)
            results.append(payload)
    finally:
        fetcher.close()

    text = json.dumps(results if len(results) > 1 else results[0], indent=2)
    if args.output:
        args.output.write_text(text, encoding="utf-8")
        print(f"Wrote {len(results)} profile(s) to {args.output}")
    else:
        print(text)


def main(argv: Sequence[str] | None = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    settings = _resolve_settings(args)
    if args.command == "serve":
        _serve(args, settings)
    else:
        _lookup(args, settings)


if __name__ == "__main__":
    main()
