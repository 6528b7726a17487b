#!/usr/bin/env python
"""Validate catalog examples against resolved patterns and print coverage.

Usage:
    python -m scripts.validate_examples --data-dir ./data
    python -m scripts.validate_examples --data-dir ./data --csv coverage.csv
"""

import argparse
import logging
import sys
from pathlib import Path


def main() -> int:
    """Run example validation and print report."""
    parser = argparse.ArgumentParser(
        description="Validate catalog examples and print coverage report"
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        required=True,
        help="Directory containing reporters.json, regexes.json, etc.",
    )
    parser.add_argument(
        "--csv",
        type=Path,
        default=None,
        help="Write per-series coverage to this CSV file",
    )
    parser.add_argument(
        "--patterns",
        type=Path,
        default=None,
        help="Write all resolved patterns to this JSONL file",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log diagnostics as they are emitted",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.ERROR,
        format="%(levelname)s %(name)s: %(message)s",
    )

    from citecore.diagnostics import Diagnostics
    from citecore.reporting.jsonl import summarize_patterns, write_patterns
    from citedb.datasets.builder import IndexBuilder
    from citedb.datasets.loaders import load_from_local
    from citedb.patterns.builder import PatternBuilder
    from citedb.validation.dates import check_dates
    from citedb.validation.examples import validate_catalog

    print("=" * 60)
    print("reporters-regex - Example Coverage Report")
    print("=" * 60)
    print()

    print("Loading catalogs...")
    try:
        bundle = load_from_local(args.data_dir)
    except (OSError, ValueError) as e:
        print(f"  ERROR: Failed to load catalogs: {e}")
        return 1

    print(f"  reporters: {len(bundle.reporters):,} series")
    print(f"  laws:      {len(bundle.laws):,} series")
    print(f"  journals:  {len(bundle.journals):,} series")

    diagnostics = Diagnostics()

    print()
    print("Building indexes...")
    builder = IndexBuilder(bundle.reporters, diagnostics)
    indices = builder.build_indexes()
    print(f"  variations_only:   {len(indices.variations_only):,} entries")
    print(f"  editions:          {len(indices.editions):,} entries")
    print(f"  special_formats:   {len(indices.special_formats):,} entries")
    print(f"  names_to_editions: {len(indices.names_to_editions):,} entries")

    print()
    print("Checking date ranges...")
    bad_dates = []
    for catalog in (bundle.reporters, bundle.laws, bundle.journals):
        for records in catalog.values():
            for record in records:
                bad_dates.extend(check_dates(record))
    for label in bad_dates:
        print(f"  start after end: {label}")
    print(f"  {len(bad_dates)} problem(s)")

    print()
    print("Resolving patterns...")
    pattern_builder = PatternBuilder(bundle.regex_variables, diagnostics)
    patterns = pattern_builder.build_all(bundle.reporters, bundle.laws, bundle.journals)
    summary = summarize_patterns(patterns)
    print(f"  {summary['total_patterns']:,} patterns across {summary['series_count']:,} series")
    if args.patterns:
        count = write_patterns(patterns, args.patterns)
        print(f"  wrote {count:,} patterns to {args.patterns}")

    print()
    print("Checking examples...")
    report = validate_catalog(bundle, pattern_builder)
    print()
    print(report)

    for check in report.failures:
        print()
        print(f"  [{check.series_key}]")
        for example in check.unmatched_examples:
            print(f"      unmatched example: {example}")
        for template in check.unmatched_patterns:
            print(f"      unmatched regex:   {template}")
        for error in check.compile_errors:
            print(f"      compile error:     {error}")
        for template in check.missing_groups:
            print(f"      missing groups:    {template}")

    if args.csv:
        args.csv.parent.mkdir(parents=True, exist_ok=True)
        report.to_frame().to_csv(args.csv, index=False)
        print()
        print(f"Wrote coverage to {args.csv}")

    print()
    print(f"Diagnostics: {len(diagnostics)}")
    print("=" * 60)

    if report.failures or bad_dates:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
