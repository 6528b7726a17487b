"""Tests for schemas, identifiers and diagnostics."""

import logging
from datetime import datetime

import pytest

from citecore.diagnostics import (
    CIRCULAR_REFERENCE,
    EDITION_COLLISION,
    Diagnostic,
    Diagnostics,
)
from citecore.ids.canonical import canonicalize_abbreviation, pattern_id
from citecore.schemas.patterns import ResolvedPattern, anchor
from citecore.schemas.series import (
    KIND_LAW,
    KIND_REPORTER,
    Edition,
    SeriesRecord,
    parse_datetime,
)


# =============================================================================
# Test: citecore/ids/canonical.py
# =============================================================================


class TestCanonicalIds:
    """Tests for ID canonicalization functions."""

    def test_canonicalize_abbreviation_basic(self) -> None:
        """Spaces become underscores, periods removed, lowercase."""
        assert canonicalize_abbreviation("A. 2d") == "a_2d"

    def test_canonicalize_abbreviation_already_clean(self) -> None:
        """Already canonical input passes through."""
        assert canonicalize_abbreviation("f_supp_3d") == "f_supp_3d"

    def test_pattern_id(self) -> None:
        """Pattern ID includes series, edition and index."""
        assert pattern_id("A.", "A.2d", 1) == "pattern::a::a2d::1"


# =============================================================================
# Test: citecore/schemas/series.py
# =============================================================================


@pytest.fixture
def atlantic() -> dict:
    """Raw Atlantic Reporter record."""
    return {
        "name": "Atlantic Reporter",
        "cite_type": "state_regional",
        "editions": {
            "A.": {"start": "1885-01-01T00:00:00", "end": "1938-12-31T00:00:00"},
            "A.2d": {"start": "1938-01-01T00:00:00", "end": "2010-12-31T00:00:00"},
            "A.3d": {"start": "2011-01-01T00:00:00", "end": None, "regexes": ["$full_cite"]},
        },
        "variations": {"A. 2d": "A.2d", "A. 3d": "A.3d", "Atl.": "A.", "A.2d.": "A.2d"},
        "examples": ["1 A. 2", "1 A.2d 2"],
        "publisher": "West",
        "notes#": "comment",
    }


class TestParseDatetime:
    """Tests for start/end parsing."""

    def test_iso_string(self) -> None:
        assert parse_datetime("1938-01-01T00:00:00") == datetime(1938, 1, 1)

    def test_date_only_string(self) -> None:
        assert parse_datetime("1885-06-15") == datetime(1885, 6, 15)

    def test_missing_values(self) -> None:
        """None and empty strings are missing dates."""
        assert parse_datetime(None) is None
        assert parse_datetime("") is None

    def test_unparseable_is_none(self) -> None:
        assert parse_datetime("not a date") is None

    def test_datetime_passes_through(self) -> None:
        value = datetime(2000, 1, 1)
        assert parse_datetime(value) is value

    def test_before_timestamp_range(self) -> None:
        """Dates before 1677-09-21 still parse."""
        assert parse_datetime("1658-01-01T00:00:00") == datetime(1658, 1, 1)
        assert parse_datetime("1600-06-15") == datetime(1600, 6, 15)

    def test_reversed_early_range_is_invalid(self) -> None:
        edition = Edition.from_dict("Y.", {"start": "1660-01-01", "end": "1650-01-01"})
        assert edition.start == datetime(1660, 1, 1)
        assert not edition.has_valid_dates


class TestSeriesRecord:
    """Tests for SeriesRecord construction."""

    def test_reporter_from_dict(self, atlantic: dict) -> None:
        """All fields are read and dates parsed."""
        record = SeriesRecord.from_dict("A.", atlantic)
        assert record.key == "A."
        assert record.name == "Atlantic Reporter"
        assert record.kind == KIND_REPORTER
        assert record.cite_type == "state_regional"
        assert record.cite_format is None
        assert list(record.editions) == ["A.", "A.2d", "A.3d"]
        assert record.editions["A."].start == datetime(1885, 1, 1)
        assert record.editions["A.3d"].end is None
        assert record.editions["A.3d"].regexes == ("$full_cite",)
        assert record.variations["Atl."] == "A."
        assert record.examples == ("1 A. 2", "1 A.2d 2")
        assert record.publisher == "West"
        assert record.notes is None

    def test_missing_fields_are_empty(self) -> None:
        """A bare record has no editions or variations."""
        record = SeriesRecord.from_dict("X.", {"name": "X Reports"})
        assert dict(record.editions) == {}
        assert dict(record.variations) == {}
        assert record.examples == ()

    def test_non_mapping_data(self) -> None:
        """Garbage input still produces a record."""
        record = SeriesRecord.from_dict("X.", None)
        assert record.name == ""
        assert dict(record.editions) == {}

    def test_wrongly_typed_fields_ignored(self) -> None:
        """Non-mapping editions and non-string variation targets are dropped."""
        record = SeriesRecord.from_dict(
            "X.", {"name": "X", "editions": ["X."], "variations": {"Y.": 3, "Z.": "X."}}
        )
        assert dict(record.editions) == {}
        assert dict(record.variations) == {"Z.": "X."}

    def test_law_from_dict(self) -> None:
        """Law variations are a list of series spellings."""
        record = SeriesRecord.from_dict(
            "ASBCA",
            {
                "name": "Armed Services Board of Contract Appeals",
                "regexes": ["$edition No\\. (?P<docket>\\d+)"],
                "variations": ["A.S.B.C.A."],
                "examples": ["ASBCA No. 12345"],
                "start": "1949-01-01",
                "end": None,
            },
            KIND_LAW,
        )
        assert record.kind == KIND_LAW
        assert record.series_variations == ("A.S.B.C.A.",)
        assert dict(record.variations) == {}
        assert record.regexes == ("$edition No\\. (?P<docket>\\d+)",)
        assert record.start == datetime(1949, 1, 1)
        assert record.series_strings() == ["ASBCA", "A.S.B.C.A."]

    def test_invalid_kind_raises(self) -> None:
        """Kind must be reporter, law or journal."""
        with pytest.raises(ValueError, match="Invalid kind"):
            SeriesRecord(key="X.", name="X", kind="statute")

    def test_edition_strings(self, atlantic: dict) -> None:
        """Canonical edition first, then its variations in order."""
        record = SeriesRecord.from_dict("A.", atlantic)
        assert record.edition_strings("A.2d") == ["A.2d", "A. 2d", "A.2d."]
        assert record.edition_strings("A.") == ["A.", "Atl."]

    def test_frozen(self, atlantic: dict) -> None:
        """SeriesRecord is immutable."""
        record = SeriesRecord.from_dict("A.", atlantic)
        with pytest.raises(AttributeError):
            record.name = "Other"  # type: ignore[misc]


class TestEdition:
    """Tests for Edition."""

    def test_metadata_keeps_unknown_fields(self) -> None:
        edition = Edition.from_dict("T.C.", {"start": None, "end": None, "court": "tax"})
        assert dict(edition.metadata) == {"court": "tax"}

    def test_valid_dates(self) -> None:
        assert Edition("A.", start=datetime(1885, 1, 1), end=datetime(1938, 1, 1)).has_valid_dates
        assert Edition("A.", start=datetime(1885, 1, 1)).has_valid_dates

    def test_invalid_dates(self) -> None:
        edition = Edition("A.", start=datetime(1938, 1, 1), end=datetime(1885, 1, 1))
        assert not edition.has_valid_dates

    def test_start_key(self) -> None:
        """Missing start sorts as the empty string."""
        assert Edition("A.").start_key == ""
        assert Edition("A.", start=datetime(1885, 1, 1)).start_key == "1885-01-01T00:00:00"


# =============================================================================
# Test: citecore/schemas/patterns.py
# =============================================================================


class TestAnchor:
    """Tests for fullmatch anchoring."""

    def test_adds_both_anchors(self) -> None:
        assert anchor(r"\d+") == r"^(?:\d+)$"

    def test_no_double_anchoring(self) -> None:
        assert anchor(r"^\d+$") == r"^\d+$"
        assert anchor(r"^\d+") == r"^(?:\d+)$"
        assert anchor(r"\d+$") == r"^(?:\d+)$"

    def test_escaped_dollar_is_not_an_anchor(self) -> None:
        assert anchor(r"\d+ \$") == r"^(?:\d+ \$)$"

    def test_alternation_stays_inside_anchors(self) -> None:
        """Both branches of a top-level alternation are anchored."""
        assert anchor("a|b") == "^(?:a|b)$"
        assert anchor("^a|b") == "^(?:a|b)$"


class TestResolvedPattern:
    """Tests for ResolvedPattern."""

    def test_id_and_anchored(self) -> None:
        pattern = ResolvedPattern(
            series_key="A.",
            edition="A.2d",
            index=0,
            template="$volume $edition $page",
            pattern=r"\d+ (?:A\.2d) \d+",
            kind=KIND_REPORTER,
        )
        assert pattern.id == "pattern::a::a2d::0"
        assert pattern.anchored == r"^(?:\d+ (?:A\.2d) \d+)$"


# =============================================================================
# Test: citecore/diagnostics.py
# =============================================================================


class TestDiagnostics:
    """Tests for the diagnostics sink."""

    def test_emit_and_count(self) -> None:
        diagnostics = Diagnostics()
        diagnostics.emit(CIRCULAR_REFERENCE, "cycle", key="a")
        diagnostics.emit(EDITION_COLLISION, "collision", key="A.")
        diagnostics.emit(EDITION_COLLISION, "collision", key="B.")
        assert len(diagnostics) == 3
        assert diagnostics.count() == 3
        assert diagnostics.count(EDITION_COLLISION) == 2
        assert diagnostics.by_code(CIRCULAR_REFERENCE) == [
            Diagnostic(code=CIRCULAR_REFERENCE, message="cycle", key="a")
        ]

    def test_invalid_code_raises(self) -> None:
        with pytest.raises(ValueError, match="Invalid diagnostic code"):
            Diagnostics().emit("BOGUS", "message")

    def test_emit_logs_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="citecore.diagnostics"):
            Diagnostics().emit(CIRCULAR_REFERENCE, "Circular reference detected", key="a")
        assert "Circular reference detected" in caplog.text
