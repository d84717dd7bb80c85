import enum

from pydantic import BaseModel, ConfigDict

from tutorhub_backend.models.user_models import UserRole


class ReportType(str, enum.Enum):
    SESSION = "session"
    MONTHLY = "monthly"


class ReportStatus(str, enum.Enum):
    """
    Lifecycle of a progress report.

    draft -> submitted -> approved (terminal)
    submitted -> rejected -> submitted (resubmission)
    """

    DRAFT = "draft"
    SUBMITTED = "submitted"
    APPROVED = "approved"
    REJECTED = "rejected"


class DisputeStatus(str, enum.Enum):
    """
    Lifecycle of a dispute raised against a session, invoice or report.

    open -> under_review -> resolved
    open -> resolved
    open | under_review -> rejected
    resolved and rejected are terminal.
    """

    OPEN = "open"
    UNDER_REVIEW = "under_review"
    RESOLVED = "resolved"
    REJECTED = "rejected"


class ReportVisibilityContext(BaseModel):
    """
    Who is asking to see a report, and how they relate to it.
    Built by the caller from the session user and the report row for a single check.
    """

    model_config = ConfigDict(frozen=True)

    role: UserRole
    reportType: ReportType
    # Requesting tutor authored the report
    isOwner: bool
    # Requesting student is the report's subject
    isStudent: bool
    # Requesting parent is linked to the report's subject
    isParent: bool
