import logging
import typing
from datetime import datetime, timezone

from tutorhub_backend.dynamodb.messages_table import MessagesTable
from tutorhub_backend.models.messaging_models import MessageRetentionResultModel
from tutorhub_backend.policies.messaging_policy import get_messaging_retention_cutoff
from tutorhub_backend.utils.aws_env_vars import (
    get_messages_table_name,
    get_messaging_retention_months,
)
from tutorhub_backend.utils.base_types import IsoTimestamp
from tutorhub_backend.utils.datetime_utils import to_utc_iso

_LOGGER = logging.getLogger(__name__)
_LOGGER.setLevel(logging.INFO)


class MessageRetentionJobHandler:
    """
    Scheduled job that deletes messages older than the retention window.
    """

    def __init__(self, messages_table: MessagesTable, retention_months: int):
        self.messages_table = messages_table
        self.retention_months = retention_months

    def _get_reference_time(self, event: dict) -> datetime:
        raw_reference = event.get("referenceTime")
        if not raw_reference:
            return datetime.now(timezone.utc)

        try:
            reference_time = datetime.fromisoformat(raw_reference)
        except (TypeError, ValueError):
            raise ValueError(f"Invalid referenceTime in event: {raw_reference!r}") from None

        if reference_time.tzinfo is None:
            reference_time = reference_time.replace(tzinfo=timezone.utc)
        return reference_time

    def handle(self, event: dict) -> dict:
        reference_time = self._get_reference_time(event)
        cutoff = get_messaging_retention_cutoff(reference_time, self.retention_months)
        _LOGGER.info(
            f"Running message retention: reference {reference_time.isoformat()}, "
            f"{self.retention_months} months, cutoff {cutoff.isoformat()}"
        )

        deleted_count = self.messages_table.delete_messages_created_before(cutoff)

        result = MessageRetentionResultModel(
            referenceTime=IsoTimestamp(to_utc_iso(reference_time)),
            cutoff=IsoTimestamp(to_utc_iso(cutoff)),
            retentionMonths=self.retention_months,
            deletedCount=deleted_count,
        )
        return result.model_dump()


def message_retention_lambda_handler(event: dict[str, typing.Any], context: typing.Any) -> dict[str, typing.Any]:
    _LOGGER.debug(f"message_retention_lambda_handler received event: {event}")

    try:
        job_handler = MessageRetentionJobHandler(
            messages_table=MessagesTable(get_messages_table_name()),
            retention_months=get_messaging_retention_months(),
        )
    except ValueError as ve:
        _LOGGER.critical(f"Configuration error in message_retention_lambda_handler: {str(ve)}", exc_info=True)
        raise

    try:
        return job_handler.handle(event or {})
    except Exception as e:
        _LOGGER.critical(f"Error during MessageRetentionJobHandler: {str(e)}", exc_info=True)
        raise
