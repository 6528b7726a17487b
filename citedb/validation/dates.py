"""Date range checks for series records."""

from citecore.schemas.series import SeriesRecord


def check_dates(record: SeriesRecord) -> list[str]:
    """Return labels of every date range in record whose start is after its end.

    Examples of labels: "A.2d" for an edition, "A." for the series itself.
    """
    problems = []
    if record.start is not None and record.end is not None and record.start > record.end:
        problems.append(record.key)
    for abbreviation, edition in record.editions.items():
        if not edition.has_valid_dates:
            problems.append(abbreviation)
    return problems
