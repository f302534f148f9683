"""
Run bulk complimentary ticket fulfillment from CLI.

    python scripts/bulk_complementary_tickets.py <event_id> <csv_path> [--json]
"""

from __future__ import annotations

from fulfillment.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
