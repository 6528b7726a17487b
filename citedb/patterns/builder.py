"""Pattern builder for reporters-regex.

Turns series templates into finished patterns:

    template -> recursive substitution against the variable table
             -> edition alternation expansion ($edition, $reporter)
             -> named group conversion
"""

from typing import Any, Iterable, Mapping

from citecore.diagnostics import Diagnostics
from citecore.schemas.patterns import ResolvedPattern
from citecore.schemas.series import SeriesRecord
from citecore.templates.editions import EXPANSION_PLACEHOLDERS, substitute_edition
from citecore.templates.groups import convert_named_groups
from citecore.templates.substitute import DEFAULT_MAX_DEPTH, recursive_substitute
from citecore.templates.variables import process_variables


class PatternBuilder:
    """Resolve series templates against a variable table.

    Args:
        variables: Either an already-processed variable table or a raw nested
            variables document (processed on construction)
        diagnostics: Sink for circular reference reports
        max_depth: Substitution pass limit
        processed: True when ``variables`` is already a processed table
    """

    def __init__(
        self,
        variables: Mapping[str, Any],
        diagnostics: Diagnostics | None = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
        processed: bool = False,
    ) -> None:
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()
        self.max_depth = max_depth
        if processed:
            self.variables = variables
        else:
            self.variables = process_variables(variables, self.diagnostics, max_depth)

    def resolve(self, template: str, edition_strings: Iterable[str]) -> str:
        """Resolve one template for the given edition spellings.

        A ``$reporter`` left over after substitution (no ``reporter``
        variable) expands the same way as ``$edition``.

        Returns:
            Unanchored pattern with PCRE-style named groups
        """
        edition_strings = list(edition_strings)
        pattern = recursive_substitute(template, self.variables, self.max_depth)
        for placeholder in EXPANSION_PLACEHOLDERS:
            pattern = substitute_edition(pattern, edition_strings, placeholder)
        return convert_named_groups(pattern)

    def reporter_patterns(self, record: SeriesRecord) -> list[ResolvedPattern]:
        """One ResolvedPattern per (edition, template) pair of a reporter."""
        patterns = []
        for abbreviation, edition in record.editions.items():
            edition_strings = record.edition_strings(abbreviation)
            for index, template in enumerate(edition.regexes):
                patterns.append(
                    ResolvedPattern(
                        series_key=record.key,
                        edition=abbreviation,
                        index=index,
                        template=template,
                        pattern=self.resolve(template, edition_strings),
                        kind=record.kind,
                    )
                )
        return patterns

    def series_patterns(self, record: SeriesRecord) -> list[ResolvedPattern]:
        """One ResolvedPattern per template of a law or journal series."""
        series_strings = record.series_strings()
        return [
            ResolvedPattern(
                series_key=record.key,
                edition=record.key,
                index=index,
                template=template,
                pattern=self.resolve(template, series_strings),
                kind=record.kind,
            )
            for index, template in enumerate(record.regexes)
        ]

    def patterns_for(self, record: SeriesRecord) -> list[ResolvedPattern]:
        """All patterns of a record, whatever its kind."""
        if record.editions:
            return self.reporter_patterns(record)
        return self.series_patterns(record)

    def build_all(
        self,
        reporters: Mapping[str, list[SeriesRecord]],
        laws: Mapping[str, list[SeriesRecord]] | None = None,
        journals: Mapping[str, list[SeriesRecord]] | None = None,
    ) -> list[ResolvedPattern]:
        """Build patterns for every record, in catalog order."""
        patterns = []
        for catalog in (reporters, laws or {}, journals or {}):
            for records in catalog.values():
                for record in records:
                    patterns.extend(self.patterns_for(record))
        return patterns
