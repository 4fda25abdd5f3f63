import pytest
from fastapi import HTTPException

from applicant_portal.services.application_lifecycle import Outcome, OutcomeKind
from applicant_portal.services.application_store import ApplicationStoreError
from applicant_portal.utils.outcome_responses import (
    FEEDBACK_ERRORS,
    NUDGE_ERRORS,
    UPDATE_ERRORS,
    raise_for_outcome,
)


def _raised(outcome, errors):
    with pytest.raises(HTTPException) as exc:
        raise_for_outcome(outcome, errors)
    return exc.value.status_code, exc.value.detail


def test_success_passes_through():
    outcome = Outcome(OutcomeKind.SUCCESS, {"id": "a1"})
    assert raise_for_outcome(outcome, UPDATE_ERRORS) is outcome


@pytest.mark.parametrize("kind, expected", [
    (OutcomeKind.NOT_FOUND, (404, "Application not found")),
    (OutcomeKind.UNAUTHORIZED, (403, "You are not authorized to edit this application")),
    (OutcomeKind.TOO_SOON, (409, "You can edit your application again 24 hours after your last edit.")),
])
def test_update_errors(kind, expected):
    assert _raised(Outcome(kind), UPDATE_ERRORS) == expected


@pytest.mark.parametrize("kind, expected", [
    (OutcomeKind.NOT_FOUND, (404, "Application not found")),
    (OutcomeKind.UNAUTHORIZED, (403, "You are not authorized to nudge this application")),
    (OutcomeKind.NOT_PENDING, (400, "Nudge unavailable. Only pending applications can be nudged.")),
    (OutcomeKind.TOO_SOON, (429, "Nudge unavailable. You'll be able to nudge again after 24 hours.")),
])
def test_nudge_errors(kind, expected):
    assert _raised(Outcome(kind), NUDGE_ERRORS) == expected


@pytest.mark.parametrize("kind, expected", [
    (OutcomeKind.NOT_FOUND, (404, "Application not found")),
    (OutcomeKind.ALREADY_REVIEWED, (409, "Application has already been reviewed.")),
])
def test_feedback_errors(kind, expected):
    assert _raised(Outcome(kind), FEEDBACK_ERRORS) == expected


def test_store_failure_is_internal_error():
    outcome = Outcome(OutcomeKind.STORE_FAILURE, error=ApplicationStoreError("down"))
    assert _raised(outcome, NUDGE_ERRORS) == (500, "An internal server error occurred")


def test_kind_without_mapping_is_internal_error():
    # Feedback never produces NOT_PENDING
    assert _raised(Outcome(OutcomeKind.NOT_PENDING), FEEDBACK_ERRORS)[0] == 500
