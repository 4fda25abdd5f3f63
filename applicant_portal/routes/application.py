# ========================================
# applicant_portal/routes/application.py
# ========================================

from fastapi import APIRouter, Depends, Query
from typing import List, Literal, Optional

from applicant_portal.constants import API_RESPONSE_MESSAGES
from applicant_portal.database import get_application_store
from applicant_portal.schemas.application import (
    ApplicationCreate,
    ApplicationFeedback,
    ApplicationListResponse,
    ApplicationResponse,
    ApplicationUpdate,
    NudgeResponse,
)
from applicant_portal.services.application_lifecycle import ApplicationLifecycle
from applicant_portal.utils.auth import get_current_user, is_reviewer, reviewer_required
from applicant_portal.utils.outcome_responses import (
    CREATE_ERRORS,
    FEEDBACK_ERRORS,
    NUDGE_ERRORS,
    READ_ERRORS,
    UPDATE_ERRORS,
    raise_for_outcome,
)

router = APIRouter(prefix="/applications", tags=["Applications"])


def get_lifecycle(store=Depends(get_application_store)) -> ApplicationLifecycle:
    return ApplicationLifecycle(store)


# ===========================
# APPLICANT ENDPOINTS
# ===========================

# ✅ 1. SUBMIT APPLICATION
@router.post("", status_code=201)
async def create_application(
    application: ApplicationCreate,
    current_user: dict = Depends(get_current_user),
    lifecycle: ApplicationLifecycle = Depends(get_lifecycle),
):
    """Submit an application. One current application per user."""

    outcome = raise_for_outcome(
        await lifecycle.create(str(current_user["_id"]), application.model_dump(exclude_none=True)),
        CREATE_ERRORS,
    )

    return {
        "message": API_RESPONSE_MESSAGES["APPLICATION_CREATED_SUCCESS"],
        "application": ApplicationResponse(**outcome.data),
    }


# ✅ 2. GET MY APPLICATIONS
@router.get("/mine", response_model=List[ApplicationResponse])
async def get_my_applications(
    current_user: dict = Depends(get_current_user),
    lifecycle: ApplicationLifecycle = Depends(get_lifecycle),
):
    """Applications submitted by the current user, newest first."""

    outcome = raise_for_outcome(await lifecycle.list_for_user(str(current_user["_id"])), READ_ERRORS)
    return outcome.data["applications"]


# ✅ 3. EDIT APPLICATION (owner, once per cooldown)
@router.patch("/{application_id}")
async def update_application(
    application_id: str,
    update: ApplicationUpdate,
    current_user: dict = Depends(get_current_user),
    lifecycle: ApplicationLifecycle = Depends(get_lifecycle),
):
    outcome = raise_for_outcome(
        await lifecycle.update(application_id, str(current_user["_id"]), update.to_patch()),
        UPDATE_ERRORS,
    )

    return {
        "message": API_RESPONSE_MESSAGES["APPLICATION_UPDATED_SUCCESS"],
        "application": ApplicationResponse(**outcome.data),
    }


# ✅ 4. NUDGE APPLICATION (owner, pending only, once per cooldown)
@router.patch("/{application_id}/nudge", response_model=NudgeResponse)
async def nudge_application(
    application_id: str,
    current_user: dict = Depends(get_current_user),
    lifecycle: ApplicationLifecycle = Depends(get_lifecycle),
):
    outcome = raise_for_outcome(
        await lifecycle.nudge(application_id, str(current_user["_id"])),
        NUDGE_ERRORS,
    )

    return {
        "message": API_RESPONSE_MESSAGES["NUDGE_SUCCESS"],
        "nudge_count": outcome.data["nudge_count"],
        "last_nudge_at": outcome.data["last_nudge_at"].isoformat(),
    }


# ===========================
# REVIEWER ENDPOINTS
# ===========================

# ✅ 5. LIST APPLICATIONS
@router.get("", response_model=ApplicationListResponse)
async def list_applications(
    status: Optional[Literal["pending", "accepted", "rejected", "changes_requested"]] = Query(None, description="Filter by status"),
    user_id: Optional[str] = Query(None, description="Filter by applicant"),
    size: int = Query(25, ge=1, le=100),
    next: Optional[str] = Query(None, description="Cursor returned by the previous page"),
    current_user: dict = Depends(reviewer_required),
    lifecycle: ApplicationLifecycle = Depends(get_lifecycle),
):
    outcome = raise_for_outcome(
        await lifecycle.list(status=status, user_id=user_id, size=size, next_id=next),
        READ_ERRORS,
    )

    return {
        "message": API_RESPONSE_MESSAGES["APPLICATION_RETURN_SUCCESS"],
        "applications": outcome.data["applications"],
        "next": outcome.data["next"],
    }


# ✅ 6. SUBMIT FEEDBACK (reviewer, once per application)
@router.patch("/{application_id}/feedback")
async def submit_application_feedback(
    application_id: str,
    review: ApplicationFeedback,
    current_user: dict = Depends(reviewer_required),
    lifecycle: ApplicationLifecycle = Depends(get_lifecycle),
):
    reviewer_name = current_user.get("name") or current_user.get("email")

    raise_for_outcome(
        await lifecycle.submit_feedback(application_id, review.status, review.feedback, reviewer_name),
        FEEDBACK_ERRORS,
    )

    return {"message": API_RESPONSE_MESSAGES["FEEDBACK_SUBMITTED_SUCCESS"]}


# ===========================
# SHARED ENDPOINTS
# ===========================

# ✅ 7. GET APPLICATION DETAILS (owner or reviewer)
@router.get("/{application_id}", response_model=ApplicationResponse)
async def get_application_details(
    application_id: str,
    current_user: dict = Depends(get_current_user),
    lifecycle: ApplicationLifecycle = Depends(get_lifecycle),
):
    outcome = raise_for_outcome(
        await lifecycle.get(application_id, str(current_user["_id"]), is_reviewer(current_user)),
        READ_ERRORS,
    )
    return outcome.data
