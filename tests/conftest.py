"""
Shared fixtures for the TravelQ tests.

Exports are written to tmp_path; nothing touches data/travelq.csv.
"""

import csv

import pytest

from travelq.config import BatchSettings, get_settings
from travelq.models.trip import CSV_COLUMNS


EXAMPLE_ROW = (
    "REF001,GroupA,TitleEN,TitreFR,Jane Doe,Meeting,Réunion,2024-01-10,2024-01-15,"
    "Ottawa,Ottawa,500.00,,100.00,50.00,,650.00,,,DeptX,Department X"
)
EXAMPLE_LINE = (
    "Ref Number: REF001. Name: Jane Doe. Purpose: Meeting. Destination: Ottawa. "
    "Duration: 5 days. Total: $650.00"
)


def trip_row(**overrides) -> dict:
    """A complete, valid row keyed by header name."""
    row = {
        "ref_number": "REF001",
        "disclosure_group": "GroupA",
        "title_en": "TitleEN",
        "title_fr": "TitreFR",
        "name": "Jane Doe",
        "purpose_en": "Meeting",
        "purpose_fr": "Réunion",
        "start_date": "2024-01-10",
        "end_date": "2024-01-15",
        "destination_en": "Ottawa",
        "destination_fr": "Ottawa",
        "airfare": "500.00",
        "other_transport": "",
        "lodging": "100.00",
        "meals": "50.00",
        "other_expenses": "",
        "total": "650.00",
        "additional_comments_en": "",
        "additional_comments_fr": "",
        "owner_org": "DeptX",
        "owner_org_title": "Department X",
    }
    row.update(overrides)
    return row


def numbered_rows(count: int) -> list[dict]:
    return [
        trip_row(ref_number=f"REF{i:03d}", name=f"Traveler {i}", total=f"{i}00.00")
        for i in range(1, count + 1)
    ]


@pytest.fixture
def write_export(tmp_path):
    """Write dict rows (header-keyed) to a CSV file and return its path."""
    def _write(rows, fieldnames=CSV_COLUMNS, name="travelq.csv"):
        path = tmp_path / name
        with open(path, "w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=list(fieldnames))
            writer.writeheader()
            writer.writerows(rows)
        return path
    return _write


@pytest.fixture
def write_raw_export(tmp_path):
    """Write raw lines under the standard header and return the path."""
    def _write(lines, header=",".join(CSV_COLUMNS), name="travelq.csv", encoding="utf-8"):
        path = tmp_path / name
        path.write_text("\n".join([header, *lines]) + "\n", encoding=encoding)
        return path
    return _write


@pytest.fixture
def make_settings():
    def _make(input_path, **overrides):
        return BatchSettings(input_path=input_path, **overrides)
    return _make


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
