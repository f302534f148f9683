"""
Shared fixtures for the fulfillment test suite.
"""

from __future__ import annotations

import itertools
from datetime import datetime, timezone

import pytest

from fakes import InMemoryTicketingStore, RecordingDelivery, SleepRecorder
from fulfillment.domain import EventDetail


@pytest.fixture()
def event() -> EventDetail:
    return EventDetail(
        id="evt_123",
        name="Carnival Weekend",
        start_date=datetime(2025, 3, 15, 23, 0, tzinfo=timezone.utc),
        end_date=datetime(2025, 3, 16, 4, 0, tzinfo=timezone.utc),
        image_url="https://cdn.example.com/carnival.png",
        address="1 Harbour Road, Port of Spain",
    )


@pytest.fixture()
def store(event: EventDetail) -> InMemoryTicketingStore:
    return InMemoryTicketingStore(events=[event])


@pytest.fixture()
def delivery() -> RecordingDelivery:
    return RecordingDelivery()


@pytest.fixture()
def sleep_recorder() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture()
def sequential_ids():
    counter = itertools.count(1)
    return lambda: f"id-{next(counter):04d}"
