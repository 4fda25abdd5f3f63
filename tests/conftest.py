# tests/conftest.py
"""
Shared fixtures: a fixed clock, an in-memory store and a lifecycle engine
wired to both, plus a helper that seeds application documents.
"""

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from applicant_portal.services.application_lifecycle import ApplicationLifecycle
from applicant_portal.services.application_store import InMemoryApplicationStore
from applicant_portal.utils.application import build_application_document
from applicant_portal.utils.clock import FixedClock

T0 = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)
OWNER_ID = "user-owner-1"
OTHER_USER_ID = "user-other-2"


def application_payload(**overrides):
    words = " ".join(["word"] * 100)
    payload = {
        "first_name": "Ada",
        "last_name": "Lovelace",
        "institution": "University of London",
        "skills": "Python, MongoDB",
        "city": "London",
        "state": "Greater London",
        "country": "UK",
        "found_from": "twitter",
        "introduction": "I like building things.",
        "for_fun": words,
        "fun_fact": words,
        "why_rds": words,
        "number_of_hours": 10,
        "role": "developer",
        "image_url": "https://example.com/ada.png",
        "social_link": {"phone_number": "+919876543210", "github": "ada"},
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def clock():
    return FixedClock(T0)


@pytest.fixture
def store():
    return InMemoryApplicationStore()


@pytest.fixture
def lifecycle(store, clock):
    return ApplicationLifecycle(store, clock=clock)


@pytest.fixture
def seed_application(store):
    """Insert an application document directly, bypassing the lifecycle."""

    async def _seed(user_id=OWNER_ID, created_at=T0, **fields):
        document = build_application_document(application_payload(), user_id, created_at)
        document.update(fields)
        return await store.create(document)

    return _seed
