import logging
import typing
from datetime import datetime, timezone

from dateutil.relativedelta import relativedelta

from tutorhub_backend.models.messaging_models import MessagingRelationshipSet
from tutorhub_backend.models.user_models import UserRole
from tutorhub_backend.utils.base_types import UserId

_LOGGER = logging.getLogger(__name__)

MESSAGING_RETENTION_MONTHS = 12


def resolve_messaging_recipient_ids(role: UserRole, relationships: MessagingRelationshipSet) -> list[UserId]:
    """
    Returns the ids a user with `role` may message, in display order.

    Categories are concatenated as-is. An id present in more than one category
    shows up once per category; keeping categories disjoint is up to whoever
    builds `relationships`.
    """
    if role == UserRole.ADMIN or role == UserRole.MANAGER:
        return list(relationships.allUserIds or [])
    elif role == UserRole.TUTOR:
        return [*relationships.studentIds, *relationships.parentIds, *relationships.staffIds]
    elif role == UserRole.STUDENT:
        return [*relationships.tutorIds, *relationships.staffIds]
    elif role == UserRole.PARENT:
        return [*relationships.childIds, *relationships.tutorIds, *relationships.staffIds]

    _LOGGER.warning(f"No messaging recipients defined for role '{role}'.")
    return []


def get_messaging_retention_cutoff(
    reference_date: typing.Optional[datetime] = None,
    retention_months: int = MESSAGING_RETENTION_MONTHS,
) -> datetime:
    """
    Oldest timestamp a message may carry and still be retained.

    Subtracts calendar months; when the day of month does not exist in the target
    month it clamps to that month's last day (2025-03-31 minus one month is 2025-02-28).
    Time of day and tzinfo are carried over from `reference_date`, which defaults to now in UTC.
    """
    if reference_date is None:
        reference_date = datetime.now(timezone.utc)
    return reference_date - relativedelta(months=retention_months)
