"""Index builder for reporters-regex.

Derives the lookup indices used to resolve a matched abbreviation back to its
canonical edition and series:

    variations_only:   "A. 2d" -> ["A.2d"]
    editions:          "A.2d"  -> "A."
    special_formats:   "T.C. Memo." -> "{reporter} {volume}-{page}"
    names_to_editions: "Atlantic Reporter" -> ["A.", "A.2d", "A.3d"]

Building is permissive: malformed records are skipped or treated as empty and
reported to the diagnostics sink, never raised.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterator, Mapping

from citecore.diagnostics import EDITION_COLLISION, MALFORMED_RECORD, Diagnostics
from citecore.schemas.series import SeriesRecord


def iter_records(
    reporters: Mapping[str, Any],
    diagnostics: Diagnostics | None = None,
) -> Iterator[tuple[str, SeriesRecord]]:
    """Yield (series key, record) pairs in input order.

    Raw mappings are coerced with SeriesRecord.from_dict; anything else is
    reported as MALFORMED_RECORD and skipped.
    """
    if diagnostics is None:
        diagnostics = Diagnostics()

    for reporter_key, records in reporters.items():
        if isinstance(records, (SeriesRecord, Mapping)):
            records = [records]
        elif not isinstance(records, (list, tuple)):
            diagnostics.emit(
                MALFORMED_RECORD,
                f"Series '{reporter_key}' is not a list of records",
                key=reporter_key,
            )
            continue

        for record in records:
            if isinstance(record, SeriesRecord):
                yield reporter_key, record
            elif isinstance(record, Mapping):
                yield reporter_key, SeriesRecord.from_dict(reporter_key, record)
            else:
                diagnostics.emit(
                    MALFORMED_RECORD,
                    f"Series '{reporter_key}' has a record of type {type(record).__name__}",
                    key=reporter_key,
                )


def suck_out_variations_only(
    reporters: Mapping[str, Any],
    diagnostics: Diagnostics | None = None,
) -> dict[str, list[str]]:
    """Build a dict of variations to the editions they could refer to.

    The dictionary takes the form of:
        {
         "A. 2d": ["A.2d"],
         ...
         "P.R.": ["Pen. & W.", "P.R.R.", "P."],
        }
    """
    variations_out: dict[str, list[str]] = {}
    for _, record in iter_records(reporters, diagnostics):
        for variation, edition in record.variations.items():
            targets = variations_out.setdefault(variation, [])
            if edition not in targets:
                targets.append(edition)
    return variations_out


def suck_out_editions(
    reporters: Mapping[str, Any],
    diagnostics: Diagnostics | None = None,
) -> dict[str, str]:
    """Build a dict mapping edition keys to their root series key.

    The dictionary takes the form of:
        {
         "A.":   "A.",
         "A.2d": "A.",
         "A.3d": "A.",
         "A.D.": "A.D.",
         ...
        }

    The first series to claim an edition key keeps it; later claims by other
    series are reported as EDITION_COLLISION.
    """
    if diagnostics is None:
        diagnostics = Diagnostics()

    editions_out: dict[str, str] = {}
    for reporter_key, record in iter_records(reporters, diagnostics):
        for edition in record.editions:
            owner = editions_out.setdefault(edition, reporter_key)
            if owner != reporter_key:
                diagnostics.emit(
                    EDITION_COLLISION,
                    f"Edition '{edition}' claimed by '{reporter_key}' already belongs to '{owner}'",
                    key=edition,
                )
    return editions_out


def suck_out_formats(
    reporters: Mapping[str, Any],
    diagnostics: Diagnostics | None = None,
) -> dict[str, str]:
    """Build a dict mapping edition keys to their cite_format, if any.

    The dictionary takes the form of:
        {
         "T.C. Summary Opinion": "{reporter} {volume}-{page}",
         "T.C. Memo.": "{reporter} {volume}-{page}",
         ...
        }
    """
    formats_out: dict[str, str] = {}
    for _, record in iter_records(reporters, diagnostics):
        if record.cite_format:
            for edition in record.editions:
                formats_out[edition] = record.cite_format
    return formats_out


def names_to_abbreviations(
    reporters: Mapping[str, Any],
    diagnostics: Diagnostics | None = None,
) -> dict[str, list[str]]:
    """Build a dict mapping series names to their edition keys.

    Something like:
        {
         "Atlantic Reporter": ["A.", "A.2d", "A.3d"],
        }

    Editions are sorted by start date (missing dates first), then by
    abbreviation. Names are sorted alphabetically.
    """
    start_keys: dict[str, dict[str, str]] = {}
    for _, record in iter_records(reporters, diagnostics):
        group = start_keys.setdefault(record.name, {})
        for abbreviation, edition in record.editions.items():
            group.setdefault(abbreviation, edition.start_key)

    return {
        name: sorted(group, key=lambda abbreviation: (group[abbreviation], abbreviation))
        for name, group in sorted(start_keys.items())
    }


@dataclass(frozen=True)
class CitationIndices:
    """Read-only lookup indices built from the reporter catalog.

    Attributes:
        variations_only: Variation -> candidate edition keys
        editions: Edition key -> owning series key
        special_formats: Edition key -> cite_format
        names_to_editions: Series name -> edition keys ordered by start date
    """

    variations_only: Mapping[str, tuple[str, ...]]
    editions: Mapping[str, str]
    special_formats: Mapping[str, str]
    names_to_editions: Mapping[str, tuple[str, ...]]

    def resolve(self, abbreviation: str) -> list[str]:
        """Return the edition keys an abbreviation could refer to.

        An edition key resolves to itself; otherwise the variation candidates
        are returned; unknown abbreviations resolve to an empty list.
        """
        if abbreviation in self.editions:
            return [abbreviation]
        return list(self.variations_only.get(abbreviation, ()))

    def series_for(self, abbreviation: str) -> list[str]:
        """Return the series keys an abbreviation could belong to."""
        series = []
        for edition in self.resolve(abbreviation):
            owner = self.editions.get(edition)
            if owner is not None and owner not in series:
                series.append(owner)
        return series


def build_indices(
    reporters: Mapping[str, Any],
    diagnostics: Diagnostics | None = None,
) -> CitationIndices:
    """Build all four indices in one call."""
    if diagnostics is None:
        diagnostics = Diagnostics()

    # Malformed-record diagnostics are reported once, not once per index.
    records: dict[str, list[SeriesRecord]] = {}
    for reporter_key, record in iter_records(reporters, diagnostics):
        records.setdefault(reporter_key, []).append(record)

    variations = suck_out_variations_only(records)
    return CitationIndices(
        variations_only=MappingProxyType({k: tuple(v) for k, v in variations.items()}),
        editions=MappingProxyType(suck_out_editions(records, diagnostics)),
        special_formats=MappingProxyType(suck_out_formats(records)),
        names_to_editions=MappingProxyType(
            {k: tuple(v) for k, v in names_to_abbreviations(records).items()}
        ),
    )


class IndexBuilder:
    """Build lookup indices from a reporter catalog.

    Indexes:
        variations_only: Map variation -> candidate edition keys
        editions: Map edition key -> series key
        special_formats: Map edition key -> cite_format
        names_to_editions: Map series name -> ordered edition keys
    """

    def __init__(
        self,
        reporters: Mapping[str, Any],
        diagnostics: Diagnostics | None = None,
    ) -> None:
        """Initialize builder with a reporter catalog.

        Args:
            reporters: Series key -> list of SeriesRecord (or raw mappings)
            diagnostics: Sink for collisions and malformed records
        """
        self._reporters = reporters
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()
        self._indices: CitationIndices | None = None

    def build_indexes(self) -> CitationIndices:
        """Build all indexes from the catalog."""
        self._indices = build_indices(self._reporters, self.diagnostics)
        return self._indices

    @property
    def indices(self) -> CitationIndices:
        """Get all indexes (build first if needed)."""
        if self._indices is None:
            self.build_indexes()
        return self._indices

    @property
    def variations_only(self) -> Mapping[str, tuple[str, ...]]:
        return self.indices.variations_only

    @property
    def editions(self) -> Mapping[str, str]:
        return self.indices.editions

    @property
    def special_formats(self) -> Mapping[str, str]:
        return self.indices.special_formats

    @property
    def names_to_editions(self) -> Mapping[str, tuple[str, ...]]:
        return self.indices.names_to_editions
