"""Tests for the batch import loop."""

import logging
from datetime import date

import pytest

from tests.conftest import Dog
from validated_object import NoSuchAttribute, NotAMapping, import_records

ROWS = [
    {"name": "Phoebe"},
    {"name": "", "birthday": date(2020, 5, 1)},
    {"name": "Maru", "birthday": date(2015, 1, 23)},
    {"name": "Paris", "birthday": "yesterday"},
]


class TestImportRecords:
    def test_skips_invalid_records(self) -> None:
        report = import_records(Dog, ROWS)
        assert report.model == "Dog"
        assert [d.name for d in report.imported] == ["Phoebe", "Maru"]
        assert [s.index for s in report.skipped] == [1, 3]
        assert report.skipped[0].message == "Name can't be blank"
        assert report.skipped[1].errors == [
            {"attribute": "birthday", "message": "is a str, not a date"}
        ]
        assert report.total == 4
        assert report.ok is False

    def test_all_valid(self) -> None:
        report = import_records(Dog, iter([{"name": "Rex"}]))
        assert report.ok is True
        assert report.total == 1

    def test_empty(self) -> None:
        report = import_records(Dog, [])
        assert report.ok is True
        assert report.total == 0

    def test_logs_skipped_records(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="validated_object"):
            import_records(Dog, ROWS)
        warnings = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
        assert warnings == [
            "Skipping invalid Dog record 1: Name can't be blank",
            "Skipping invalid Dog record 3: Birthday is a str, not a date",
        ]
        assert "Imported 2 of 4 Dog records" in caplog.text

    def test_programmer_errors_stop_the_batch(self) -> None:
        with pytest.raises(NotAMapping):
            import_records(Dog, [{"name": "Rex"}, 5])  # type: ignore[list-item]
        with pytest.raises(NoSuchAttribute):
            import_records(Dog, [{"name": "Rex", "color": "brown"}])
