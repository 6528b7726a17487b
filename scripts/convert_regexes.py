#!/usr/bin/env python
"""Convert a regex variables document to PCRE-ready JSON.

Resolves every template variable and converts Python named groups
(?P<name>...) to PCRE named groups (?<name>...).

Usage:
    python -m scripts.convert_regexes data/regexes.json regexes_pcre.json
"""

import argparse
import logging
import sys
from pathlib import Path


def main() -> int:
    """Run the conversion."""
    parser = argparse.ArgumentParser(
        description="Convert Python-flavored regex templates to PCRE patterns"
    )
    parser.add_argument("input", type=Path, help="Source regexes.json")
    parser.add_argument("output", type=Path, help="Destination JSON file")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log every diagnostic and the conversion summary",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    from citecore.diagnostics import Diagnostics
    from citedb.patterns.convert import convert_regexes

    print("Converting Python regexes to PCRE format...")
    diagnostics = Diagnostics()
    try:
        convert_regexes(args.input, args.output, diagnostics)
    except (OSError, ValueError) as e:
        print(f"  ERROR: Conversion failed: {e}")
        return 1

    print(f"  Input:  {args.input}")
    print(f"  Output: {args.output}")
    if len(diagnostics):
        print(f"  Diagnostics: {len(diagnostics)} (see log)")

    return 0


if __name__ == "__main__":
    sys.exit(main())
