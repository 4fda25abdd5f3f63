"""
Translate lifecycle outcomes into HTTP responses.

Each operation has its own table of failure kinds. A kind missing from the
table (including `STORE_FAILURE`) is an internal error.
"""

import logging

from fastapi import HTTPException, status

from applicant_portal.constants import APPLICATION_ERROR_MESSAGES as ERRORS
from applicant_portal.services.application_lifecycle import Outcome, OutcomeKind

logger = logging.getLogger(__name__)

CREATE_ERRORS = {
    OutcomeKind.ALREADY_EXISTS: (status.HTTP_409_CONFLICT, ERRORS["APPLICATION_ALREADY_EXISTS"]),
}

READ_ERRORS = {
    OutcomeKind.NOT_FOUND: (status.HTTP_404_NOT_FOUND, ERRORS["APPLICATION_NOT_FOUND"]),
    OutcomeKind.UNAUTHORIZED: (status.HTTP_403_FORBIDDEN, ERRORS["APPLICATION_VIEW_UNAUTHORIZED"]),
}

UPDATE_ERRORS = {
    OutcomeKind.NOT_FOUND: (status.HTTP_404_NOT_FOUND, ERRORS["APPLICATION_NOT_FOUND"]),
    OutcomeKind.UNAUTHORIZED: (status.HTTP_403_FORBIDDEN, ERRORS["APPLICATION_EDIT_UNAUTHORIZED"]),
    OutcomeKind.TOO_SOON: (status.HTTP_409_CONFLICT, ERRORS["EDIT_TOO_SOON"]),
}

NUDGE_ERRORS = {
    OutcomeKind.NOT_FOUND: (status.HTTP_404_NOT_FOUND, ERRORS["APPLICATION_NOT_FOUND"]),
    OutcomeKind.UNAUTHORIZED: (status.HTTP_403_FORBIDDEN, ERRORS["NUDGE_UNAUTHORIZED"]),
    OutcomeKind.NOT_PENDING: (status.HTTP_400_BAD_REQUEST, ERRORS["NUDGE_ONLY_PENDING_ALLOWED"]),
    OutcomeKind.TOO_SOON: (status.HTTP_429_TOO_MANY_REQUESTS, ERRORS["NUDGE_TOO_SOON"]),
}

FEEDBACK_ERRORS = {
    OutcomeKind.NOT_FOUND: (status.HTTP_404_NOT_FOUND, ERRORS["APPLICATION_NOT_FOUND"]),
    OutcomeKind.ALREADY_REVIEWED: (status.HTTP_409_CONFLICT, ERRORS["APPLICATION_ALREADY_REVIEWED"]),
}


def raise_for_outcome(outcome: Outcome, errors: dict) -> Outcome:
    """Return a successful outcome untouched, raise HTTPException for anything else."""
    if outcome.kind is OutcomeKind.SUCCESS:
        return outcome

    if outcome.kind in errors:
        status_code, message = errors[outcome.kind]
        raise HTTPException(status_code=status_code, detail=message)

    if outcome.kind is not OutcomeKind.STORE_FAILURE:
        logger.error("No response mapping for outcome %s", outcome.kind)

    raise HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=ERRORS["INTERNAL_SERVER_ERROR"],
    )
