"""JSONL output for resolved patterns.

Emits ResolvedPattern objects as JSONL for downstream matchers and analysis.
"""

import json
from pathlib import Path
from typing import IO, Sequence

from citecore.schemas.patterns import ResolvedPattern
from citecore.templates.substitute import PLACEHOLDER_RE


def pattern_to_dict(pattern: ResolvedPattern) -> dict:
    """Convert ResolvedPattern to serializable dict.

    Args:
        pattern: ResolvedPattern to convert

    Returns:
        Dict suitable for JSON serialization
    """
    return {
        "id": pattern.id,
        "series_key": pattern.series_key,
        "edition": pattern.edition,
        "index": pattern.index,
        "kind": pattern.kind,
        "template": pattern.template,
        "pattern": pattern.anchored,
    }


def write_pattern(pattern: ResolvedPattern, file: IO[str]) -> None:
    """Write a single ResolvedPattern as JSONL line."""
    data = pattern_to_dict(pattern)
    file.write(json.dumps(data, ensure_ascii=False) + "\n")


def write_patterns(
    patterns: Sequence[ResolvedPattern],
    output_path: Path | str,
) -> int:
    """Write multiple ResolvedPatterns to JSONL file.

    Args:
        patterns: Sequence of ResolvedPatterns to write
        output_path: Path to output JSONL file

    Returns:
        Number of patterns written
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    count = 0
    with open(output_path, "w", encoding="utf-8") as f:
        for pattern in patterns:
            write_pattern(pattern, f)
            count += 1

    return count


def read_patterns(input_path: Path | str) -> list[dict]:
    """Read resolved patterns from JSONL file.

    Returns:
        List of pattern dicts (not hydrated to ResolvedPattern objects)
    """
    input_path = Path(input_path)
    patterns = []

    with open(input_path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if line:
                patterns.append(json.loads(line))

    return patterns


def summarize_patterns(patterns: Sequence[ResolvedPattern]) -> dict:
    """Count patterns by kind and series.

    Returns:
        Dict with total, per-kind counts, and number of distinct series
    """
    by_kind: dict[str, int] = {}
    series = set()
    unresolved = 0

    for pattern in patterns:
        by_kind[pattern.kind] = by_kind.get(pattern.kind, 0) + 1
        series.add((pattern.kind, pattern.series_key))
        if PLACEHOLDER_RE.search(pattern.pattern):
            unresolved += 1

    return {
        "total_patterns": len(patterns),
        "by_kind": by_kind,
        "series_count": len(series),
        "with_placeholders": unresolved,
    }
