"""Catalog loaders for reporters-regex.

Loads the reporter, law and journal catalogs plus the regex variables document
from a local data directory. Comment keys (ending in '#') are dropped at every
depth; start/end dates are parsed into datetimes when records are built.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from citecore.schemas.series import KIND_JOURNAL, KIND_LAW, KIND_REPORTER, SeriesRecord

REPORTERS_FILE = "reporters.json"
LAWS_FILE = "laws.json"
JOURNALS_FILE = "journals.json"
REGEXES_FILE = "regexes.json"
STATE_ABBREVIATIONS_FILE = "state_abbreviations.json"
CASE_NAME_ABBREVIATIONS_FILE = "case_name_abbreviations.json"

REQUIRED_FILES = (REPORTERS_FILE, REGEXES_FILE)


@dataclass
class CatalogBundle:
    """Container for all loaded catalogs.

    Attributes:
        reporters: Series key -> reporter records
        laws: Series key -> law records
        journals: Series key -> journal records
        regex_variables: Raw nested regex variables document
        state_abbreviations: State abbreviation -> state name
        case_name_abbreviations: Word -> abbreviation(s)
    """

    reporters: dict[str, list[SeriesRecord]]
    regex_variables: dict[str, Any]
    laws: dict[str, list[SeriesRecord]] = field(default_factory=dict)
    journals: dict[str, list[SeriesRecord]] = field(default_factory=dict)
    state_abbreviations: dict[str, Any] = field(default_factory=dict)
    case_name_abbreviations: dict[str, Any] = field(default_factory=dict)


def strip_comments(obj: Any) -> Any:
    """Recursively drop mapping keys ending in '#'.

    Examples:
        >>> strip_comments({"a#": "note", "b": [{"c": 1, "d#": 2}]})
        {'b': [{'c': 1}]}
    """
    if isinstance(obj, Mapping):
        return {k: strip_comments(v) for k, v in obj.items() if not str(k).endswith("#")}
    if isinstance(obj, list):
        return [strip_comments(v) for v in obj]
    return obj


def load_json(path: Path | str) -> Any:
    """Read a JSON file and strip comment keys."""
    with open(path, "r", encoding="utf-8") as f:
        return strip_comments(json.load(f))


def load_series(raw: Mapping[str, Any], kind: str = KIND_REPORTER) -> dict[str, list[SeriesRecord]]:
    """Convert a raw series collection into SeriesRecords.

    Args:
        raw: Series key -> list of raw record mappings. A single mapping in
            place of a list is accepted as a one-record list.
        kind: Series kind for every record

    Returns:
        Series key -> list of SeriesRecord, in input order
    """
    series: dict[str, list[SeriesRecord]] = {}
    for key, records in raw.items():
        if isinstance(records, Mapping):
            records = [records]
        elif not isinstance(records, list):
            records = []
        series[key] = [SeriesRecord.from_dict(key, record, kind) for record in records]
    return series


def load_from_local(data_dir: Path | str) -> CatalogBundle:
    """Load all catalogs from a local directory.

    Args:
        data_dir: Path to directory containing the JSON files

    Returns:
        CatalogBundle with all catalogs

    Raises:
        FileNotFoundError: If reporters.json or regexes.json is missing
    """
    data_dir = Path(data_dir)

    for name in REQUIRED_FILES:
        path = data_dir / name
        if not path.exists():
            raise FileNotFoundError(f"Required file not found: {path}")

    def optional(name: str) -> dict[str, Any]:
        path = data_dir / name
        if not path.exists():
            return {}
        return load_json(path)

    return CatalogBundle(
        reporters=load_series(load_json(data_dir / REPORTERS_FILE), KIND_REPORTER),
        regex_variables=load_json(data_dir / REGEXES_FILE),
        laws=load_series(optional(LAWS_FILE), KIND_LAW),
        journals=load_series(optional(JOURNALS_FILE), KIND_JOURNAL),
        state_abbreviations=optional(STATE_ABBREVIATIONS_FILE),
        case_name_abbreviations=optional(CASE_NAME_ABBREVIATIONS_FILE),
    )
