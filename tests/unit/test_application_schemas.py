"""Request validation for application payloads"""

import pytest
from pydantic import ValidationError

from applicant_portal.schemas.application import (
    ApplicationCreate,
    ApplicationFeedback,
    ApplicationUpdate,
)

from conftest import application_payload

HUNDRED_WORDS = " ".join(["word"] * 100)


class TestApplicationCreate:

    def test_valid_payload(self):
        application = ApplicationCreate(**application_payload())
        assert application.role == "developer"
        assert application.social_link.phone_number == "+919876543210"

    def test_missing_required_field(self):
        payload = application_payload()
        payload.pop("first_name")
        with pytest.raises(ValidationError):
            ApplicationCreate(**payload)

    def test_word_count_restriction(self):
        with pytest.raises(ValidationError) as exc:
            ApplicationCreate(**application_payload(fun_fact="too short"))
        assert "at least 100 words" in str(exc.value)

    def test_number_of_hours_must_be_a_number(self):
        with pytest.raises(ValidationError):
            ApplicationCreate(**application_payload(number_of_hours="many"))

    def test_number_of_hours_upper_bound(self):
        with pytest.raises(ValidationError):
            ApplicationCreate(**application_payload(number_of_hours=101))

    def test_unknown_role(self):
        with pytest.raises(ValidationError):
            ApplicationCreate(**application_payload(role="astronaut"))

    def test_unknown_field_is_rejected(self):
        with pytest.raises(ValidationError):
            ApplicationCreate(**application_payload(score=100))

    def test_phone_number_is_trimmed(self):
        application = ApplicationCreate(**application_payload(social_link={"phone_number": "  +919876543210  "}))
        assert application.social_link.phone_number == "+919876543210"


class TestApplicationUpdate:

    @pytest.mark.parametrize("payload", [
        {"introduction": "Hello"},
        {"image_url": "https://example.com/me.png"},
        {"found_from": "friend"},
        {"number_of_hours": 168},
        {"professional": {"institution": "MIT", "skills": "React, Node"}},
        {"social_link": {"phone_number": "+919876543210"}},
        {"for_fun": HUNDRED_WORDS, "fun_fact": HUNDRED_WORDS, "why_rds": HUNDRED_WORDS},
    ])
    def test_accepts_any_single_editable_field(self, payload):
        assert ApplicationUpdate(**payload).to_patch() == payload

    def test_empty_body(self):
        with pytest.raises(ValidationError) as exc:
            ApplicationUpdate()
        assert exc.value.errors()[0]["msg"] == "Update payload must include at least one editable field."

    def test_empty_nested_object_counts_as_empty(self):
        with pytest.raises(ValidationError):
            ApplicationUpdate(professional={})

    def test_disallowed_field(self):
        with pytest.raises(ValidationError):
            ApplicationUpdate(status="accepted")

    def test_invalid_image_url(self):
        with pytest.raises(ValidationError):
            ApplicationUpdate(image_url="not a url")

    def test_short_skills(self):
        with pytest.raises(ValidationError):
            ApplicationUpdate(professional={"skills": "Go"})

    def test_short_for_fun(self):
        with pytest.raises(ValidationError):
            ApplicationUpdate(for_fun="just a few words")

    @pytest.mark.parametrize("hours", [0, 169])
    def test_number_of_hours_out_of_range(self, hours):
        with pytest.raises(ValidationError):
            ApplicationUpdate(number_of_hours=hours)

    def test_invalid_phone_number(self):
        with pytest.raises(ValidationError):
            ApplicationUpdate(social_link={"phone_number": "call me maybe"})

    def test_none_fields_are_left_out_of_patch(self):
        assert ApplicationUpdate(introduction="Hi", found_from=None).to_patch() == {"introduction": "Hi"}


class TestApplicationFeedback:

    @pytest.mark.parametrize("status", ["accepted", "rejected"])
    def test_feedback_optional_for_final_decisions(self, status):
        assert ApplicationFeedback(status=status).feedback is None
        assert ApplicationFeedback(status=status, feedback="").feedback == ""

    def test_changes_requested_with_feedback(self):
        review = ApplicationFeedback(status="changes_requested", feedback="Tell us more")
        assert review.feedback == "Tell us more"

    @pytest.mark.parametrize("feedback", [None, ""])
    def test_changes_requested_requires_feedback(self, feedback):
        with pytest.raises(ValidationError) as exc:
            ApplicationFeedback(status="changes_requested", feedback=feedback)
        assert exc.value.errors()[0]["msg"] == "Feedback is required when status is changes_requested"

    @pytest.mark.parametrize("status", ["pending", "maybe", None])
    def test_status_must_be_a_review_status(self, status):
        with pytest.raises(ValidationError):
            ApplicationFeedback(status=status)

    def test_extra_fields_are_rejected(self):
        with pytest.raises(ValidationError):
            ApplicationFeedback(status="accepted", score=10)
