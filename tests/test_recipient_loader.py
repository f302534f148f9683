from __future__ import annotations

from pathlib import Path

import pytest

from fulfillment.errors import FatalInputError
from fulfillment.services.recipient_loader import REQUIRED_CSV_COLUMNS, load_recipient_csv


def _write(tmp_path: Path, text: str, name: str = "recipients.csv", encoding: str = "utf-8") -> Path:
    path = tmp_path / name
    path.write_text(text, encoding=encoding)
    return path


class TestLoadRecipientCsv:
    def test_reads_rows_in_file_order(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path,
            "email,firstName,lastName\n"
            "ann@example.com,Ann,Lee\n"
            "bob@example.com,Bob,Ray\n",
        )

        records = load_recipient_csv(path)

        assert [record.email for record in records] == ["ann@example.com", "bob@example.com"]
        assert records[0].first_name == "Ann"
        assert records[0].last_name == "Lee"
        assert records[0].row_number == 2
        assert records[1].row_number == 3

    def test_extra_columns_and_header_whitespace_are_tolerated(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path,
            " email , firstName,lastName,company\n"
            "  ann@example.com , Ann , Lee ,Acme\n",
        )

        records = load_recipient_csv(path)

        assert len(records) == 1
        assert records[0].email == "ann@example.com"
        assert records[0].first_name == "Ann"

    def test_utf8_bom_is_stripped(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "\ufeffemail,firstName,lastName\nann@example.com,Ann,Lee\n")

        records = load_recipient_csv(path)

        assert records[0].email == "ann@example.com"

    def test_empty_rows_are_skipped(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path,
            "email,firstName,lastName\n"
            "ann@example.com,Ann,Lee\n"
            ",,\n"
            "\n"
            "bob@example.com,Bob,Ray\n",
        )

        records = load_recipient_csv(path)

        assert [record.email for record in records] == ["ann@example.com", "bob@example.com"]

    def test_missing_file_is_fatal(self, tmp_path: Path) -> None:
        with pytest.raises(FatalInputError, match="CSV file not found"):
            load_recipient_csv(tmp_path / "nope.csv")

    def test_empty_file_is_fatal(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "")

        with pytest.raises(FatalInputError, match="empty"):
            load_recipient_csv(path)

    def test_header_only_file_is_fatal(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "email,firstName,lastName\n")

        with pytest.raises(FatalInputError, match="empty"):
            load_recipient_csv(path)

    def test_missing_columns_are_named(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "email,name\nann@example.com,Ann\n")

        with pytest.raises(FatalInputError) as exc_info:
            load_recipient_csv(path)

        message = str(exc_info.value)
        assert "firstName" in message
        assert "lastName" in message
        for column in REQUIRED_CSV_COLUMNS:
            assert column in message

    def test_blank_required_value_reports_row_numbers(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path,
            "email,firstName,lastName\n"
            "ann@example.com,Ann,Lee\n"
            ",Bob,Ray\n"
            "cat@example.com,,\n",
        )

        with pytest.raises(FatalInputError) as exc_info:
            load_recipient_csv(path)

        message = str(exc_info.value)
        assert "row 3: blank email" in message
        assert "row 4: blank firstName, lastName" in message

    def test_non_utf8_file_is_fatal(self, tmp_path: Path) -> None:
        path = tmp_path / "latin1.csv"
        path.write_bytes("email,firstName,lastName\nzoe@example.com,Zo\xe9,L\xe9e\n".encode("latin-1"))

        with pytest.raises(FatalInputError, match="UTF-8"):
            load_recipient_csv(path)
