# ========================================
# applicant_portal/constants.py
# ========================================

from datetime import datetime, timezone

# ===========================
# STATUS & ROLES
# ===========================

STATUS_PENDING = "pending"
STATUS_ACCEPTED = "accepted"
STATUS_REJECTED = "rejected"
STATUS_CHANGES_REQUESTED = "changes_requested"

APPLICATION_STATUS_TYPES = [
    STATUS_PENDING,
    STATUS_ACCEPTED,
    STATUS_REJECTED,
    STATUS_CHANGES_REQUESTED,
]

# Statuses a reviewer can move an application into
REVIEW_STATUS_TYPES = [STATUS_ACCEPTED, STATUS_REJECTED, STATUS_CHANGES_REQUESTED]

APPLICATION_ROLES = [
    "developer",
    "designer",
    "product_manager",
    "project_manager",
    "qa",
    "social_media",
]

# User roles allowed to review applications
REVIEWER_ROLES = ["reviewer", "admin"]

# ===========================
# SCORING
# ===========================

INITIAL_SCORE = 50
NUDGE_BONUS = 10

# Applications created before this instant belong to the previous review cycle
# and may be followed by a fresh application from the same user.
APPLICATION_REVIEW_CYCLE_START_DATE = datetime(2026, 1, 1, tzinfo=timezone.utc)

# ===========================
# MESSAGES
# ===========================

API_RESPONSE_MESSAGES = {
    "APPLICATION_CREATED_SUCCESS": "Application created successfully",
    "APPLICATION_UPDATED_SUCCESS": "Application updated successfully",
    "APPLICATION_RETURN_SUCCESS": "Applications returned successfully",
    "NUDGE_SUCCESS": "Nudge sent successfully",
    "FEEDBACK_SUBMITTED_SUCCESS": "Application feedback submitted successfully",
}

APPLICATION_ERROR_MESSAGES = {
    "APPLICATION_NOT_FOUND": "Application not found",
    "APPLICATION_ALREADY_EXISTS": "Application already exists",
    "APPLICATION_ALREADY_REVIEWED": "Application has already been reviewed.",
    "APPLICATION_VIEW_UNAUTHORIZED": "You are not authorized to view this application",
    "APPLICATION_EDIT_UNAUTHORIZED": "You are not authorized to edit this application",
    "NUDGE_UNAUTHORIZED": "You are not authorized to nudge this application",
    "NUDGE_TOO_SOON": "Nudge unavailable. You'll be able to nudge again after 24 hours.",
    "NUDGE_ONLY_PENDING_ALLOWED": "Nudge unavailable. Only pending applications can be nudged.",
    "EDIT_TOO_SOON": "You can edit your application again 24 hours after your last edit.",
    "EMPTY_UPDATE_PAYLOAD": "Update payload must include at least one editable field.",
    "INTERNAL_SERVER_ERROR": "An internal server error occurred",
}

APPLICATION_LOG_MESSAGES = {
    "ERROR_CREATING_APPLICATION": "Error while creating the application",
    "ERROR_UPDATING_APPLICATION": "Error while updating the application",
    "ERROR_NUDGING_APPLICATION": "Error while nudging the application",
    "ERROR_SUBMITTING_FEEDBACK": "Error while submitting the application feedback",
    "ERROR_FETCHING_APPLICATIONS": "Error while fetching applications",
}
