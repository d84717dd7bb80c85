"""
Authorization and status-transition rules for progress reports and disputes.

Every function here answers a yes/no question and nothing else. Callers move a
report or dispute to its next status themselves once the matching guard passes.
Inputs outside the enumerated domains fall through to False.
"""

import logging

from tutorhub_backend.models.reporting_models import (
    DisputeStatus,
    ReportStatus,
    ReportType,
    ReportVisibilityContext,
)
from tutorhub_backend.models.user_models import UserRole

_LOGGER = logging.getLogger(__name__)

# Roles with platform-wide oversight of reports
OVERSIGHT_ROLES: tuple[UserRole, ...] = (UserRole.ADMIN, UserRole.MANAGER)

EDITABLE_REPORT_STATUSES: tuple[ReportStatus, ...] = (ReportStatus.DRAFT, ReportStatus.REJECTED)
SUBMITTABLE_REPORT_STATUSES: tuple[ReportStatus, ...] = (ReportStatus.DRAFT, ReportStatus.REJECTED)
RESOLVABLE_DISPUTE_STATUSES: tuple[DisputeStatus, ...] = (DisputeStatus.OPEN, DisputeStatus.UNDER_REVIEW)


def can_view_report(context: ReportVisibilityContext) -> bool:
    """
    Decides whether the requester described by `context` may view a report.

    - Admins and managers see every report.
    - Monthly reports are visible to their authoring tutor only. Parents and
      students reach approved monthly reports through a separate listing.
    - Session reports are visible to their authoring tutor, the student they are
      about, and that student's linked parents.
    """
    role = context.role

    if role in OVERSIGHT_ROLES:
        return True

    if context.reportType == ReportType.MONTHLY:
        return role == UserRole.TUTOR and context.isOwner

    if context.reportType == ReportType.SESSION:
        if role == UserRole.TUTOR:
            return context.isOwner
        if role == UserRole.STUDENT:
            return context.isStudent
        if role == UserRole.PARENT:
            return context.isParent
        _LOGGER.warning(f"Unrecognized role '{role}' asking to view a session report. Denying.")
        return False

    _LOGGER.warning(f"Unrecognized report type '{context.reportType}'. Denying.")
    return False


def can_submit_report(status: ReportStatus) -> bool:
    return status in SUBMITTABLE_REPORT_STATUSES


def can_approve_report(status: ReportStatus) -> bool:
    return status == ReportStatus.SUBMITTED


def can_edit_report(status: ReportStatus) -> bool:
    # Same states as can_submit_report today. Edit and submit stay separate checks.
    return status in EDITABLE_REPORT_STATUSES


def can_resolve_dispute(status: DisputeStatus) -> bool:
    return status in RESOLVABLE_DISPUTE_STATUSES
