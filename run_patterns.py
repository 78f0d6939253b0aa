#!/usr/bin/env python3
"""Run behavioral pattern analysis for one user and print the JSON report."""

from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from pathlib import Path

import orjson

from patterns import PatternAggregator, build_report
from patterns.settings import AnalysisConfig, Settings, SQLiteConfig, build_source


def parse_args(settings: Settings) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Analyze a user's conversation insights for recurring patterns.")
    parser.add_argument("--user", required=True, help="User id whose insights should be analyzed.")
    parser.add_argument(
        "--days",
        type=int,
        default=settings.analysis.days_back,
        help="Trailing window, in days, of insights to analyze.",
    )
    parser.add_argument("--sqlite", type=Path, help="Read insights from this SQLite database.")
    parser.add_argument("--rest-url", help="Read insights from this PostgREST base URL instead of SQLite.")
    parser.add_argument("--rest-key", help="API key sent to the REST backend.")
    parser.add_argument("--timezone", help="IANA zone used for time-of-day buckets (e.g. Europe/Berlin).")
    parser.add_argument(
        "--recent",
        type=int,
        metavar="N",
        help="Print the N newest insights instead of running the analysis.",
    )
    parser.add_argument("--compact", action="store_true", help="Emit compact JSON.")
    return parser.parse_args()


def apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    if args.sqlite:
        settings = replace(settings, source="sqlite", sqlite=SQLiteConfig(db_path=args.sqlite))
    if args.rest_url:
        rest = replace(settings.rest, base_url=args.rest_url, api_key=args.rest_key or settings.rest.api_key)
        settings = replace(settings, source="rest", rest=rest)
    analysis = AnalysisConfig(days_back=args.days, timezone=args.timezone or settings.analysis.timezone)
    return replace(settings, analysis=analysis)


def main() -> None:
    settings = Settings.from_env()
    args = parse_args(settings)
    settings = apply_overrides(settings, args)
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    source = build_source(settings)
    aggregator = PatternAggregator(source, settings.analysis.pattern_config())
    option = 0 if args.compact else orjson.OPT_INDENT_2
    try:
        if args.recent is not None:
            insights = aggregator.recent_insights(args.user, args.recent)
            payload = [insight.model_dump(mode="json", by_alias=True) for insight in insights]
        else:
            patterns = aggregator.analyze_user_patterns(args.user, settings.analysis.days_back)
            report = build_report(patterns, settings.analysis.days_back)
            payload = report.model_dump(mode="json", by_alias=True)
    finally:
        close = getattr(source, "close", None)
        if callable(close):
            close()

    print(orjson.dumps(payload, option=option).decode("utf-8"))


if __name__ == "__main__":
    main()
