"""
fulfillment/services/recipient_loader.py

Reads the recipient CSV into candidate records.

Header validation and row checks happen here so that nothing reaches the
database unless the whole file is usable.
"""

from __future__ import annotations

import csv
import logging
from collections.abc import Mapping
from pathlib import Path

from fulfillment.domain import CandidateRecord
from fulfillment.errors import FatalInputError

logger = logging.getLogger(__name__)

REQUIRED_CSV_COLUMNS: tuple[str, ...] = ("email", "firstName", "lastName")
_MAX_REPORTED_ROW_ERRORS = 20


def load_recipient_csv(path: str | Path) -> list[CandidateRecord]:
    """
    Parse ``path`` and return one CandidateRecord per non-empty data row.

    Raises FatalInputError when the file is missing, unreadable, not UTF-8,
    malformed, lacks a required column, has no data rows, or has a row with a
    blank required value.
    """

    csv_path = Path(path)
    if not csv_path.is_file():
        raise FatalInputError(f"CSV file not found at path: {csv_path}")

    records: list[CandidateRecord] = []
    row_errors: list[str] = []

    try:
        with csv_path.open("r", encoding="utf-8-sig", newline="") as handle:
            reader = csv.DictReader(handle)
            headers = [header.strip() for header in (reader.fieldnames or []) if header is not None]
            if not headers:
                raise FatalInputError("CSV file is empty")
            reader.fieldnames = headers

            missing_columns = [column for column in REQUIRED_CSV_COLUMNS if column not in headers]
            if missing_columns:
                raise FatalInputError(
                    "CSV is missing required columns: "
                    f"{', '.join(missing_columns)} (required: {', '.join(REQUIRED_CSV_COLUMNS)})"
                )

            for row_number, raw_row in enumerate(reader, start=2):
                if _is_completely_empty_row(raw_row):
                    continue

                values = {column: _clean(raw_row.get(column)) for column in REQUIRED_CSV_COLUMNS}
                blank = [column for column, value in values.items() if not value]
                if blank:
                    row_errors.append(f"row {row_number}: blank {', '.join(blank)}")
                    continue

                records.append(
                    CandidateRecord(
                        email=values["email"],
                        first_name=values["firstName"],
                        last_name=values["lastName"],
                        row_number=row_number,
                    )
                )
    except UnicodeDecodeError as exc:
        raise FatalInputError("CSV must be UTF-8 encoded.") from exc
    except csv.Error as exc:
        raise FatalInputError(f"Invalid CSV format: {exc}") from exc
    except OSError as exc:
        raise FatalInputError(f"Unable to read CSV file {csv_path}: {exc}") from exc

    if row_errors:
        shown = "; ".join(row_errors[:_MAX_REPORTED_ROW_ERRORS])
        more = len(row_errors) - _MAX_REPORTED_ROW_ERRORS
        suffix = f"; ... and {more} more" if more > 0 else ""
        raise FatalInputError(f"CSV has rows with missing required values: {shown}{suffix}")

    if not records:
        raise FatalInputError("CSV file is empty")

    logger.info("Loaded CSV path=%s rows=%d", csv_path, len(records))
    return records


def _clean(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, list):
        # DictReader collects surplus cells under the None key as a list.
        return ""
    return str(value).strip()


def _is_completely_empty_row(row: Mapping[str | None, object]) -> bool:
    return all(not _clean(value) for key, value in row.items() if key is not None)
