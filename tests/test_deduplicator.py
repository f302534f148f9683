from __future__ import annotations

import unittest

from fulfillment.domain import CandidateRecord
from fulfillment.services.deduplicator import deduplicate_recipients


def _record(email: str, first: str = "First", last: str = "Last") -> CandidateRecord:
    return CandidateRecord(email=email, first_name=first, last_name=last)


class TestDeduplicateRecipients(unittest.TestCase):
    def test_first_occurrence_wins_case_insensitively(self) -> None:
        result = deduplicate_recipients(
            [
                _record("A@x.com", "Ann", "One"),
                _record("b@x.com", "Bob", "Two"),
                _record("a@X.com", "Other", "Name"),
            ]
        )

        self.assertEqual([r.email for r in result.recipients], ["A@x.com", "b@x.com"])
        self.assertEqual(result.recipients[0].first_name, "Ann")
        self.assertEqual(result.duplicates_removed, 1)
        self.assertEqual(result.duplicate_emails, ["a@X.com"])

    def test_surrounding_whitespace_is_ignored_for_identity(self) -> None:
        result = deduplicate_recipients([_record(" ann@x.com "), _record("ANN@x.com")])

        self.assertEqual(len(result.recipients), 1)
        self.assertEqual(result.recipients[0].email, "ann@x.com")
        self.assertEqual(result.duplicates_removed, 1)

    def test_counts_are_conserved(self) -> None:
        records = [_record(f"user{i % 7}@x.com") for i in range(30)]

        result = deduplicate_recipients(records)

        self.assertEqual(len(result.recipients), 7)
        self.assertEqual(len(result.recipients) + result.duplicates_removed, len(records))
        self.assertEqual(len({r.key for r in result.recipients}), len(result.recipients))

    def test_already_unique_list_is_unchanged(self) -> None:
        records = [_record("c@x.com", "C"), _record("a@x.com", "A"), _record("b@x.com", "B")]

        result = deduplicate_recipients(records)

        self.assertEqual(
            [(r.email, r.first_name) for r in result.recipients],
            [("c@x.com", "C"), ("a@x.com", "A"), ("b@x.com", "B")],
        )
        self.assertEqual(result.duplicates_removed, 0)

    def test_case_and_whitespace_variants_collapse_to_first(self) -> None:
        result = deduplicate_recipients([_record("Ann@X.com"), _record("ann@x.com"), _record("Ann@X.com ")])

        self.assertEqual([r.email for r in result.recipients], ["Ann@X.com"])
        self.assertEqual(result.duplicates_removed, 2)

    def test_empty_input(self) -> None:
        result = deduplicate_recipients([])

        self.assertEqual(result.recipients, [])
        self.assertEqual(result.duplicates_removed, 0)


if __name__ == "__main__":
    unittest.main()
