"""Series schemas: reporters, laws and journals.

A series is a named group of citation formats sharing a canonical name. A
reporter series has one or more editions, each with its own abbreviation, date
range and regex templates, and a mapping of variant spellings to editions.
Laws and journals carry their templates and alternate spellings directly on
the series.
"""

from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Any, Mapping

import pandas as pd

KIND_REPORTER = "reporter"
KIND_LAW = "law"
KIND_JOURNAL = "journal"

VALID_KINDS = frozenset({KIND_REPORTER, KIND_LAW, KIND_JOURNAL})

_EDITION_FIELDS = {"start", "end", "regexes", "name"}
_SERIES_FIELDS = {
    "name",
    "cite_type",
    "cite_format",
    "editions",
    "variations",
    "regexes",
    "examples",
    "publisher",
    "notes",
    "href",
    "start",
    "end",
}


def parse_datetime(value: Any) -> datetime | None:
    """Parse a start/end value into a datetime.

    Accepts datetimes, ISO strings and missing values. Unparseable values
    become None. Dates outside the nanosecond Timestamp range (before
    1677-09-21) are parsed as ISO strings instead.
    """
    if isinstance(value, datetime):
        return value
    if not isinstance(value, (str, int, float)) or value == "":
        return None
    try:
        timestamp = pd.to_datetime(value)
    except pd.errors.OutOfBoundsDatetime:
        return _parse_iso(value)
    except (ValueError, TypeError):
        return None
    if pd.isna(timestamp):
        return None
    return timestamp.to_pydatetime()


def _parse_iso(value: Any) -> datetime | None:
    if not isinstance(value, str):
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None


def _str_tuple(value: Any) -> tuple[str, ...]:
    if not isinstance(value, (list, tuple)):
        return ()
    return tuple(v for v in value if isinstance(v, str))


def _mapping(value: Any) -> Mapping:
    if isinstance(value, Mapping):
        return value
    return {}


def _without_comments(data: Mapping[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in data.items() if not str(k).endswith("#")}


@dataclass(frozen=True)
class Edition:
    """One abbreviation era of a reporter.

    Attributes:
        abbreviation: Citation abbreviation (e.g., "A.2d")
        name: Display name, if the data provides one
        start: First date the edition covers (None if unknown)
        end: Last date the edition covers (None if ongoing or unknown)
        regexes: Regex templates for this edition
        metadata: Any other fields from the source data
    """

    abbreviation: str
    name: str = ""
    start: datetime | None = None
    end: datetime | None = None
    regexes: tuple[str, ...] = ()
    metadata: Mapping[str, Any] = field(default_factory=dict)

    @property
    def has_valid_dates(self) -> bool:
        """True unless both dates are present and start is after end."""
        if self.start is None or self.end is None:
            return True
        return self.start <= self.end

    @property
    def start_key(self) -> str:
        """Sortable start date; missing dates sort first."""
        return self.start.isoformat() if self.start is not None else ""

    @classmethod
    def from_dict(cls, abbreviation: str, data: Any) -> "Edition":
        data = _without_comments(_mapping(data))
        return cls(
            abbreviation=abbreviation,
            name=str(data.get("name") or ""),
            start=parse_datetime(data.get("start")),
            end=parse_datetime(data.get("end")),
            regexes=_str_tuple(data.get("regexes")),
            metadata=MappingProxyType(
                {k: v for k, v in data.items() if k not in _EDITION_FIELDS}
            ),
        )


@dataclass(frozen=True)
class SeriesRecord:
    """A named citation series: a court reporter, a law series, or a journal.

    Attributes:
        key: Top-level key the record was found under (e.g., "A.")
        name: Canonical name (e.g., "Atlantic Reporter")
        kind: One of VALID_KINDS
        cite_type: Reporter category (e.g., "state_regional")
        cite_format: Display template such as "{reporter} {volume}-{page}"
        editions: Edition abbreviation -> Edition (reporters only)
        variations: Variant spelling -> edition abbreviation (reporters only)
        series_variations: Alternate spellings of the whole series (laws, journals)
        regexes: Series-level regex templates (laws, journals)
        examples: Example citations every regex must match
        publisher: Publisher name
        notes: Free-form notes
        href: Reference URL
        start: Series start date (laws, journals)
        end: Series end date (laws, journals)
    """

    key: str
    name: str
    kind: str = KIND_REPORTER
    cite_type: str = ""
    cite_format: str | None = None
    editions: Mapping[str, Edition] = field(default_factory=dict)
    variations: Mapping[str, str] = field(default_factory=dict)
    series_variations: tuple[str, ...] = ()
    regexes: tuple[str, ...] = ()
    examples: tuple[str, ...] = ()
    publisher: str | None = None
    notes: str | None = None
    href: str | None = None
    start: datetime | None = None
    end: datetime | None = None

    def __post_init__(self) -> None:
        """Validate kind is one of the allowed values."""
        if self.kind not in VALID_KINDS:
            raise ValueError(f"Invalid kind '{self.kind}'. Must be one of: {VALID_KINDS}")

    @classmethod
    def from_dict(cls, key: str, data: Any, kind: str = KIND_REPORTER) -> "SeriesRecord":
        """Build a record from raw JSON, treating missing fields as empty.

        Args:
            key: Top-level series key
            data: Raw record mapping
            kind: Series kind

        Returns:
            SeriesRecord; never raises on missing or wrongly-typed fields
        """
        data = _without_comments(_mapping(data))

        editions = {
            str(abbrev): Edition.from_dict(str(abbrev), edition)
            for abbrev, edition in _without_comments(_mapping(data.get("editions"))).items()
        }

        raw_variations = data.get("variations")
        if isinstance(raw_variations, Mapping):
            variations = {
                str(k): v
                for k, v in _without_comments(raw_variations).items()
                if isinstance(v, str)
            }
            series_variations: tuple[str, ...] = ()
        else:
            variations = {}
            series_variations = _str_tuple(raw_variations)

        cite_format = data.get("cite_format")
        return cls(
            key=key,
            name=str(data.get("name") or ""),
            kind=kind,
            cite_type=str(data.get("cite_type") or ""),
            cite_format=cite_format if isinstance(cite_format, str) and cite_format else None,
            editions=MappingProxyType(editions),
            variations=MappingProxyType(variations),
            series_variations=series_variations,
            regexes=_str_tuple(data.get("regexes")),
            examples=_str_tuple(data.get("examples")),
            publisher=data.get("publisher"),
            notes=data.get("notes"),
            href=data.get("href"),
            start=parse_datetime(data.get("start")),
            end=parse_datetime(data.get("end")),
        )

    def edition_strings(self, edition: str) -> list[str]:
        """Canonical edition followed by its variations, without duplicates."""
        strings = [edition]
        for variation, target in self.variations.items():
            if target == edition and variation not in strings:
                strings.append(variation)
        return strings

    def series_strings(self) -> list[str]:
        """Series key followed by its alternate spellings, without duplicates."""
        strings = [self.key]
        for variation in self.series_variations:
            if variation not in strings:
                strings.append(variation)
        return strings
