# ========================================
# applicant_portal/services/application_lifecycle.py
# ========================================

"""
Lifecycle rules for applications: create, self-edit, nudge and review.

Every operation returns an `Outcome`. Rule violations (missing application,
wrong owner, cooldown, wrong status) are ordinary outcomes, not exceptions.
Persistence failures are logged and come back as `STORE_FAILURE`.

Writes use optimistic concurrency. When a compare-and-set loses to a
concurrent writer the record is read again and the same checks are run
against it, with the same `now`.
"""

import logging
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from applicant_portal.constants import (
    APPLICATION_LOG_MESSAGES,
    NUDGE_BONUS,
    STATUS_PENDING,
)
from applicant_portal.services.application_store import ApplicationStore, ApplicationStoreError
from applicant_portal.utils.application import (
    build_application_document,
    build_application_update_payload,
    is_resubmittable_legacy,
)
from applicant_portal.utils.clock import utc_now
from applicant_portal.utils.cooldown import EDIT_COOLDOWN, NUDGE_COOLDOWN, can_edit, can_nudge
from applicant_portal.utils.guards import first_failure

logger = logging.getLogger(__name__)

MAX_WRITE_ATTEMPTS = 3


class OutcomeKind(str, Enum):
    SUCCESS = "success"
    NOT_FOUND = "not_found"
    UNAUTHORIZED = "unauthorized"
    TOO_SOON = "too_soon"
    NOT_PENDING = "not_pending"
    ALREADY_REVIEWED = "already_reviewed"
    ALREADY_EXISTS = "already_exists"
    STORE_FAILURE = "store_failure"


@dataclass(frozen=True)
class Outcome:
    kind: OutcomeKind
    data: Optional[Dict[str, Any]] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS


class ConcurrentModificationError(ApplicationStoreError):
    """The record kept changing under us for every write attempt."""


class ApplicationLifecycle:
    """Applies lifecycle operations to applications held in an `ApplicationStore`."""

    def __init__(
        self,
        store: ApplicationStore,
        clock: Callable = utc_now,
        edit_cooldown: timedelta = EDIT_COOLDOWN,
        nudge_cooldown: timedelta = NUDGE_COOLDOWN,
        nudge_bonus: int = NUDGE_BONUS,
    ):
        self.store = store
        self.clock = clock
        self.edit_cooldown = edit_cooldown
        self.nudge_cooldown = nudge_cooldown
        self.nudge_bonus = nudge_bonus

    # ===========================
    # GUARDS
    # ===========================

    @staticmethod
    def _exists():
        return (lambda app: app is not None, OutcomeKind.NOT_FOUND)

    @staticmethod
    def _owned_by(user_id: str):
        return (lambda app: app["user_id"] == user_id, OutcomeKind.UNAUTHORIZED)

    @staticmethod
    def _is_pending(failure: OutcomeKind):
        return (lambda app: app.get("status", STATUS_PENDING) == STATUS_PENDING, failure)

    def _edit_window_open(self, now):
        def check(app):
            last_edit_at = app.get("last_updated_at") or app.get("created_at")
            return can_edit(last_edit_at, now, self.edit_cooldown)
        return (check, OutcomeKind.TOO_SOON)

    def _nudge_window_open(self, now):
        return (lambda app: can_nudge(app.get("last_nudge_at"), now, self.nudge_cooldown), OutcomeKind.TOO_SOON)

    # ===========================
    # CHECKED WRITE
    # ===========================

    async def _checked_write(self, application_id: str, guards: List, build_write: Callable) -> Outcome:
        """
        Read the application, run `guards` in order, then write what
        `build_write(app)` returns as `(changes, increments)`.
        """
        for _ in range(MAX_WRITE_ATTEMPTS):
            application = await self.store.get(application_id)

            failure = first_failure(guards, application)
            if failure is not None:
                return Outcome(failure)

            changes, increments = build_write(application)
            updated = await self.store.compare_and_set(
                application_id,
                application.get("version", 0),
                changes,
                increments,
            )
            if updated is not None:
                return Outcome(OutcomeKind.SUCCESS, updated)

            logger.info("Application %s changed concurrently, re-checking", application_id)

        raise ConcurrentModificationError(
            f"Application {application_id} was modified concurrently {MAX_WRITE_ATTEMPTS} times"
        )

    # ===========================
    # OPERATIONS
    # ===========================

    async def create(self, user_id: str, payload: Dict[str, Any]) -> Outcome:
        """Create a pending application unless the user already has a current one."""
        now = self.clock()
        try:
            existing = await self.store.find_by_user(user_id)
            if any(not is_resubmittable_legacy(app) for app in existing):
                return Outcome(OutcomeKind.ALREADY_EXISTS)

            application = await self.store.create(build_application_document(payload, user_id, now))
        except ApplicationStoreError as e:
            logger.exception(APPLICATION_LOG_MESSAGES["ERROR_CREATING_APPLICATION"])
            return Outcome(OutcomeKind.STORE_FAILURE, error=e)

        logger.info("Application %s created by user %s", application["id"], user_id)
        return Outcome(OutcomeKind.SUCCESS, application)

    async def update(self, application_id: str, acting_user_id: str, patch: Dict[str, Any]) -> Outcome:
        """Owner self-edit, at most once per edit cooldown."""
        now = self.clock()
        changes = build_application_update_payload(patch)
        changes["last_updated_at"] = now

        guards = [
            self._exists(),
            self._owned_by(acting_user_id),
            self._edit_window_open(now),
        ]

        try:
            outcome = await self._checked_write(application_id, guards, lambda app: (changes, None))
        except ApplicationStoreError as e:
            logger.exception(APPLICATION_LOG_MESSAGES["ERROR_UPDATING_APPLICATION"])
            return Outcome(OutcomeKind.STORE_FAILURE, error=e)

        logger.info("Update of application %s by user %s: %s", application_id, acting_user_id, outcome.kind.value)
        return outcome

    async def nudge(self, application_id: str, acting_user_id: str) -> Outcome:
        """
        Owner request for attention on a pending application.

        Each successful nudge bumps `nudge_count`, stamps `last_nudge_at`
        and adds the nudge bonus to `score`.
        """
        now = self.clock()
        guards = [
            self._exists(),
            self._owned_by(acting_user_id),
            self._is_pending(OutcomeKind.NOT_PENDING),
            self._nudge_window_open(now),
        ]

        def build_write(app):
            return {"last_nudge_at": now}, {"nudge_count": 1, "score": self.nudge_bonus}

        try:
            outcome = await self._checked_write(application_id, guards, build_write)
        except ApplicationStoreError as e:
            logger.exception(APPLICATION_LOG_MESSAGES["ERROR_NUDGING_APPLICATION"])
            return Outcome(OutcomeKind.STORE_FAILURE, error=e)

        logger.info("Nudge of application %s by user %s: %s", application_id, acting_user_id, outcome.kind.value)
        if not outcome.ok:
            return outcome

        return Outcome(
            OutcomeKind.SUCCESS,
            {
                "nudge_count": outcome.data["nudge_count"],
                "last_nudge_at": outcome.data["last_nudge_at"],
                "application": outcome.data,
            },
        )

    async def submit_feedback(
        self,
        application_id: str,
        status: str,
        feedback: Optional[str],
        reviewer_name: str,
    ) -> Outcome:
        """Record a reviewer decision. An application is reviewed at most once."""
        now = self.clock()
        changes = {
            "status": status,
            "reviewer_name": reviewer_name,
            "reviewed_at": now,
        }
        if feedback is not None:
            changes["feedback"] = feedback

        guards = [
            self._exists(),
            self._is_pending(OutcomeKind.ALREADY_REVIEWED),
        ]

        try:
            outcome = await self._checked_write(application_id, guards, lambda app: (changes, None))
        except ApplicationStoreError as e:
            logger.exception(APPLICATION_LOG_MESSAGES["ERROR_SUBMITTING_FEEDBACK"])
            return Outcome(OutcomeKind.STORE_FAILURE, error=e)

        logger.info("Feedback on application %s by %s: %s", application_id, reviewer_name, outcome.kind.value)
        return outcome

    # ===========================
    # READS
    # ===========================

    async def get(self, application_id: str, acting_user_id: str, is_reviewer: bool = False) -> Outcome:
        guards = [self._exists()]
        if not is_reviewer:
            guards.append(self._owned_by(acting_user_id))

        try:
            application = await self.store.get(application_id)
        except ApplicationStoreError as e:
            logger.exception(APPLICATION_LOG_MESSAGES["ERROR_FETCHING_APPLICATIONS"])
            return Outcome(OutcomeKind.STORE_FAILURE, error=e)

        failure = first_failure(guards, application)
        if failure is not None:
            return Outcome(failure)
        return Outcome(OutcomeKind.SUCCESS, application)

    async def list_for_user(self, user_id: str) -> Outcome:
        try:
            applications = await self.store.find_by_user(user_id)
        except ApplicationStoreError as e:
            logger.exception(APPLICATION_LOG_MESSAGES["ERROR_FETCHING_APPLICATIONS"])
            return Outcome(OutcomeKind.STORE_FAILURE, error=e)
        return Outcome(OutcomeKind.SUCCESS, {"applications": applications})

    async def list(
        self,
        status: Optional[str] = None,
        user_id: Optional[str] = None,
        size: int = 25,
        next_id: Optional[str] = None,
    ) -> Outcome:
        try:
            applications, next_cursor = await self.store.list(status=status, user_id=user_id, size=size, next_id=next_id)
        except ApplicationStoreError as e:
            logger.exception(APPLICATION_LOG_MESSAGES["ERROR_FETCHING_APPLICATIONS"])
            return Outcome(OutcomeKind.STORE_FAILURE, error=e)
        return Outcome(OutcomeKind.SUCCESS, {"applications": applications, "next": next_cursor})
