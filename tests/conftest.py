"""Shared fixtures: a small reporter catalog and variables document."""

import pytest

from citecore.schemas.series import KIND_JOURNAL, KIND_LAW, SeriesRecord
from citedb.datasets.loaders import load_series


@pytest.fixture
def raw_reporters() -> dict:
    """Raw reporter catalog with an ambiguous variation and a cite_format."""
    return {
        "A.": [
            {
                "name": "Atlantic Reporter",
                "cite_type": "state_regional",
                "editions": {
                    "A.3d": {"start": "2011-01-01T00:00:00", "end": None, "regexes": []},
                    "A.": {"start": "1885-01-01T00:00:00", "end": "1938-12-31T00:00:00"},
                    "A.2d": {"start": "1938-01-01T00:00:00", "end": "2010-12-31T00:00:00"},
                },
                "variations": {"A. 2d": "A.2d", "A. 3d": "A.3d", "Atl.": "A."},
                "examples": ["1 A. 2"],
            }
        ],
        "T.C. Memo.": [
            {
                "name": "Tax Court Memorandum Decisions",
                "cite_type": "specialty",
                "cite_format": "{reporter} {volume}-{page}",
                "editions": {
                    "T.C. Memo.": {"start": "1942-01-01T00:00:00", "end": None},
                    "T.C. Summary Opinion": {"start": None, "end": None},
                },
                "variations": {"TC Memo": "T.C. Memo."},
            }
        ],
        "P.R.": [
            {
                "name": "Pennsylvania Reports",
                "cite_type": "state",
                "editions": {"P.R.": {"start": "1845-01-01T00:00:00", "end": None}},
                "variations": {"Penn.": "P.R."},
            }
        ],
        "Pa.": [
            {
                "name": "Pennsylvania State Reports",
                "cite_type": "state",
                "editions": {"Pa.": {"start": "1845-01-01T00:00:00", "end": None}},
                "variations": {"Penn.": "Pa.", "Pa. St.": "Pa."},
            }
        ],
    }


@pytest.fixture
def reporters(raw_reporters: dict) -> dict[str, list[SeriesRecord]]:
    return load_series(raw_reporters)


@pytest.fixture
def variables_doc() -> dict:
    """Nested regex variables document with Python named groups."""
    return {
        "volume#": "Volume numbers",
        "volume": {
            "": r"(?P<volume>\d+)",
            "with_alpha": r"(?P<volume>\d+[a-zA-Z]?)",
        },
        "page": {
            "": r"(?P<page>\d+)",
        },
        "reporter": {
            "": r"(?P<reporter>$edition)",
        },
        "full_cite": {
            "": "$volume $reporter,? $page",
        },
        "law": {
            "docket": r"No\. (?P<docket>\d+)",
        },
    }


@pytest.fixture
def laws() -> dict[str, list[SeriesRecord]]:
    return load_series(
        {
            "ASBCA": [
                {
                    "name": "Armed Services Board of Contract Appeals",
                    "regexes": ["$edition $law_docket"],
                    "variations": ["A.S.B.C.A."],
                    "examples": ["ASBCA No. 12345", "A.S.B.C.A. No. 1"],
                }
            ]
        },
        KIND_LAW,
    )


@pytest.fixture
def journals() -> dict[str, list[SeriesRecord]]:
    return load_series(
        {
            "Harv. L. Rev.": [
                {
                    "name": "Harvard Law Review",
                    "regexes": [r"$volume Harv\. L\. Rev\. $page"],
                    "examples": ["133 Harv. L. Rev. 1"],
                }
            ]
        },
        KIND_JOURNAL,
    )
