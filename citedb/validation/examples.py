"""Example coverage checks for resolved patterns.

Every series that lists examples must satisfy exact coverage: each example is
matched by at least one of the series' patterns, and each pattern matches at
least one example. Reporter patterns must also define the reporter and page
named groups.
"""

from dataclasses import dataclass, field
from typing import Sequence

import pandas as pd
import regex

from citecore.schemas.patterns import ResolvedPattern
from citecore.schemas.series import KIND_REPORTER
from citedb.datasets.loaders import CatalogBundle
from citedb.patterns.builder import PatternBuilder
from citedb.patterns.compile import PatternCompileError, compile_regex

REQUIRED_GROUPS = ("reporter", "page")


@dataclass(frozen=True)
class ExampleCheck:
    """Result of checking one series' patterns against its examples.

    Attributes:
        series_key: Key of the series checked
        pattern_count: Number of patterns checked
        example_count: Number of examples checked
        unmatched_examples: Examples no pattern matched
        unmatched_patterns: Templates of patterns that matched no example
        compile_errors: Messages for patterns that failed to compile
        missing_groups: Templates whose match lacks a required named group
    """

    series_key: str
    pattern_count: int
    example_count: int
    unmatched_examples: tuple[str, ...] = ()
    unmatched_patterns: tuple[str, ...] = ()
    compile_errors: tuple[str, ...] = ()
    missing_groups: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return not (
            self.unmatched_examples
            or self.unmatched_patterns
            or self.compile_errors
            or self.missing_groups
        )


def _lacks_groups(compiled: regex.Pattern, examples: Sequence[str], required: Sequence[str]) -> bool:
    """True if the first example compiled matches lacks one of the required groups."""
    for example in examples:
        match = compiled.fullmatch(example)
        if match:
            groups = match.groupdict()
            return any(name not in groups for name in required)
    return False


def check_examples(
    patterns: Sequence[ResolvedPattern],
    examples: Sequence[str],
    series_key: str = "",
    required_groups: Sequence[str] = (),
) -> ExampleCheck:
    """Check exact coverage between patterns and examples.

    Args:
        patterns: Resolved patterns of one series
        examples: Example citations of that series
        series_key: Label for the result
        required_groups: Group names each pattern's first match must define

    Returns:
        ExampleCheck listing whatever failed to match
    """
    matched_examples: set[str] = set()
    unmatched_patterns = []
    compile_errors = []
    missing_groups = []

    for resolved in patterns:
        try:
            compiled = compile_regex(resolved.pattern)
        except PatternCompileError as e:
            compile_errors.append(str(e))
            continue

        has_match = False
        for example in examples:
            if compiled.fullmatch(example):
                has_match = True
                matched_examples.add(example)
        if not has_match:
            unmatched_patterns.append(resolved.template)
        elif required_groups and _lacks_groups(compiled, examples, required_groups):
            missing_groups.append(resolved.template)

    return ExampleCheck(
        series_key=series_key,
        pattern_count=len(patterns),
        example_count=len(examples),
        unmatched_examples=tuple(ex for ex in examples if ex not in matched_examples),
        unmatched_patterns=tuple(unmatched_patterns),
        compile_errors=tuple(compile_errors),
        missing_groups=tuple(missing_groups),
    )


def check_group_names(
    patterns: Sequence[ResolvedPattern],
    examples: Sequence[str],
    required: Sequence[str] = REQUIRED_GROUPS,
) -> list[str]:
    """Return templates whose first matching example lacks a required group.

    Patterns that fail to compile or match no example are not reported here;
    check_examples covers them.
    """
    missing = []
    for resolved in patterns:
        try:
            compiled = compile_regex(resolved.pattern)
        except PatternCompileError:
            continue
        if _lacks_groups(compiled, examples, required):
            missing.append(resolved.template)
    return missing


@dataclass
class ExampleCoverageReport:
    """Coverage statistics for a catalog's examples.

    Attributes:
        checks: One ExampleCheck per series record with examples and patterns
        skipped: Records without examples or without patterns
    """

    checks: list[ExampleCheck] = field(default_factory=list)
    skipped: int = 0

    @property
    def checked(self) -> int:
        return len(self.checks)

    @property
    def passed(self) -> int:
        return sum(1 for c in self.checks if c.ok)

    @property
    def failures(self) -> list[ExampleCheck]:
        return [c for c in self.checks if not c.ok]

    @property
    def passed_percent(self) -> float:
        """Percentage of checked series with exact coverage."""
        if self.checked == 0:
            return 0.0
        return 100.0 * self.passed / self.checked

    def to_frame(self) -> pd.DataFrame:
        """One row per checked series."""
        return pd.DataFrame(
            [
                {
                    "series_key": c.series_key,
                    "patterns": c.pattern_count,
                    "examples": c.example_count,
                    "unmatched_examples": len(c.unmatched_examples),
                    "unmatched_patterns": len(c.unmatched_patterns),
                    "compile_errors": len(c.compile_errors),
                    "missing_groups": len(c.missing_groups),
                    "ok": c.ok,
                }
                for c in self.checks
            ],
            columns=[
                "series_key",
                "patterns",
                "examples",
                "unmatched_examples",
                "unmatched_patterns",
                "compile_errors",
                "missing_groups",
                "ok",
            ],
        )

    def __str__(self) -> str:
        """Format coverage report for display."""
        return (
            f"Series checked:            {self.checked:,}\n"
            f"Series passing:            {self.passed:,} ({self.passed_percent:.1f}%)\n"
            f"Series failing:            {len(self.failures):,}\n"
            f"Series skipped:            {self.skipped:,}"
        )


def validate_catalog(bundle: CatalogBundle, builder: PatternBuilder) -> ExampleCoverageReport:
    """Check every reporter, law and journal record that lists examples.

    Reporter records are also checked for REQUIRED_GROUPS.
    """
    report = ExampleCoverageReport()
    for catalog in (bundle.reporters, bundle.laws, bundle.journals):
        for series_key, records in catalog.items():
            for record in records:
                patterns = builder.patterns_for(record)
                if not record.examples or not patterns:
                    report.skipped += 1
                    continue
                required = REQUIRED_GROUPS if record.kind == KIND_REPORTER else ()
                report.checks.append(
                    check_examples(patterns, record.examples, series_key, required)
                )
    return report
