"""Application document building and update flattening"""

from datetime import datetime, timezone

from applicant_portal.constants import INITIAL_SCORE
from applicant_portal.utils.application import (
    build_application_document,
    build_application_update_payload,
    is_resubmittable_legacy,
)
from applicant_portal.utils.guards import first_failure

from conftest import T0, application_payload


class TestBuildApplicationDocument:

    def test_nests_fields_and_sets_workflow_defaults(self):
        document = build_application_document(application_payload(), "u1", T0)

        assert document["user_id"] == "u1"
        assert document["biodata"] == {"first_name": "Ada", "last_name": "Lovelace"}
        assert document["professional"]["institution"] == "University of London"
        assert document["intro"]["number_of_hours"] == 10
        assert document["location"]["country"] == "UK"
        assert document["status"] == "pending"
        assert document["score"] == INITIAL_SCORE
        assert document["nudge_count"] == 0
        assert document["created_at"] == T0
        assert document["version"] == 0
        assert "last_nudge_at" not in document

    def test_social_link_keeps_only_known_keys(self):
        payload = application_payload(social_link={"github": "ada", "myspace": "ada", "twitter": None})
        document = build_application_document(payload, "u1", T0)
        assert document["social_link"] == {"github": "ada"}

    def test_no_social_link(self):
        payload = application_payload()
        payload.pop("social_link")
        assert "social_link" not in build_application_document(payload, "u1", T0)


class TestBuildApplicationUpdatePayload:

    def test_introduction_maps_under_intro(self):
        assert build_application_update_payload({"introduction": "X"}) == {"intro.introduction": "X"}

    def test_nested_professional_and_social_link(self):
        payload = build_application_update_payload({
            "professional": {"institution": "MIT", "skills": "React, Node"},
            "social_link": {"phone_number": "+919876543210", "github": None},
            "why_rds": "because",
        })
        assert payload == {
            "professional.institution": "MIT",
            "professional.skills": "React, Node",
            "social_link.phone_number": "+919876543210",
            "intro.why_rds": "because",
        }

    def test_location_and_top_level_professional_fields(self):
        payload = build_application_update_payload({"city": "Pune", "skills": "Go, Rust"})
        assert payload == {"location.city": "Pune", "professional.skills": "Go, Rust"}

    def test_nested_professional_wins_over_top_level(self):
        payload = build_application_update_payload({
            "institution": "Top",
            "professional": {"institution": "Nested"},
        })
        assert payload["professional.institution"] == "Nested"

    def test_none_values_are_dropped(self):
        assert build_application_update_payload({"introduction": None, "found_from": "blog"}) == {"found_from": "blog"}

    def test_workflow_fields_are_ignored(self):
        payload = build_application_update_payload({"status": "accepted", "score": 1000, "user_id": "x", "image_url": "https://a.b/c.png"})
        assert payload == {"image_url": "https://a.b/c.png"}


class TestIsResubmittableLegacy:

    def test_before_cutover_is_legacy(self):
        assert is_resubmittable_legacy({"created_at": datetime(2025, 12, 31, 23, 59, tzinfo=timezone.utc)}) is True

    def test_exactly_at_cutover_is_not_legacy(self):
        assert is_resubmittable_legacy({"created_at": datetime(2026, 1, 1, tzinfo=timezone.utc)}) is False

    def test_naive_timestamp(self):
        assert is_resubmittable_legacy({"created_at": datetime(2025, 6, 1)}) is True

    def test_missing_created_at(self):
        assert is_resubmittable_legacy({}) is False


class TestFirstFailure:

    def test_returns_first_failing_guard_in_order(self):
        guards = [
            (lambda n: n > 0, "not_positive"),
            (lambda n: n % 2 == 0, "odd"),
            (lambda n: n < 10, "too_big"),
        ]
        assert first_failure(guards, 4) is None
        assert first_failure(guards, 13) == "odd"
        assert first_failure(guards, -3) == "not_positive"
        assert first_failure(guards, 12) == "too_big"
